from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any

CAR_FIELDS = ("id", "imageUrl", "year", "name", "licence")
PLACE_FIELDS = ("lat", "long")


class _Missing:
    """Marker for a key the client did not send at all (as opposed to ``null``)."""

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "MISSING"


MISSING = _Missing()


@dataclass
class Place:
    lat: Any = MISSING
    long: Any = MISSING
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: dict) -> "Place":
        return cls(
            **{k: data.get(k, MISSING) for k in PLACE_FIELDS},
            extra={k: v for k, v in data.items() if k not in PLACE_FIELDS},
        )

    def to_json(self) -> dict:
        out = {k: getattr(self, k) for k in PLACE_FIELDS if getattr(self, k) is not MISSING}
        out.update(self.extra)
        return copy.deepcopy(out)


@dataclass
class Car:
    """A car record as submitted by a client.

    Every field is optional so that incomplete payloads can still be
    represented (and echoed back in error descriptors); completeness is
    checked by the store, not here. Keys the client did not send stay
    ``MISSING``, explicit ``null`` values stay ``None`` and unknown keys are
    kept in ``extra``, so ``to_json`` gives back the body as it was sent.

    ``place`` is a ``Place`` when the client sent an object, otherwise the
    value as sent. ``payload`` is only set when the whole body was not a JSON
    object.
    """
    id: Any = MISSING
    imageUrl: Any = MISSING
    year: Any = MISSING
    name: Any = MISSING
    licence: Any = MISSING
    place: Any = MISSING
    extra: dict = field(default_factory=dict)
    payload: Any = MISSING

    @classmethod
    def from_payload(cls, data: Any) -> "Car":
        if not isinstance(data, dict):
            return cls(payload=data)
        place = data.get("place", MISSING)
        return cls(
            **{k: data.get(k, MISSING) for k in CAR_FIELDS},
            place=Place.from_payload(place) if isinstance(place, dict) else place,
            extra={k: v for k, v in data.items() if k not in CAR_FIELDS and k != "place"},
        )

    def to_json(self) -> Any:
        """JSON-ready value; keys that were never supplied are left out."""
        if self.payload is not MISSING:
            return copy.deepcopy(self.payload)
        out = {k: getattr(self, k) for k in CAR_FIELDS if getattr(self, k) is not MISSING}
        if self.place is not MISSING:
            out["place"] = self.place.to_json() if isinstance(self.place, Place) else self.place
        out.update(self.extra)
        return copy.deepcopy(out)
