# services/car_store.py
from __future__ import annotations
import copy
import logging
import threading
from collections.abc import Hashable
from typing import Iterator, List, Optional, Sequence, Union

from models import Car, Place, MISSING

logger = logging.getLogger(__name__)

INVALID_CAR_MSG = "JSON inválido ou incompleto"
DUPLICATE_ID_MSG = "ID já existe"
NOT_FOUND_MSG = "Carro não encontrado"


class CarStoreError(Exception):
    """Base for every failure the car store reports to its callers."""
    message = ""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def error(self) -> str:
        return str(self)


class ValidationError(CarStoreError):
    """Raised when a car is missing (or has empty) required fields."""
    message = INVALID_CAR_MSG


class DuplicateIdError(CarStoreError):
    """Raised when creating a car whose id is already stored."""
    message = DUPLICATE_ID_MSG

    def __init__(self, car_id):
        self.car_id = car_id
        super().__init__()


class NotFoundError(CarStoreError):
    message = NOT_FOUND_MSG

    def __init__(self, car_id):
        self.car_id = car_id
        super().__init__()


class BatchCreateError(CarStoreError):
    """Raised when at least one element of a batch create was rejected.

    The elements that passed were already committed; they are listed in
    ``inserted``. ``failures`` holds one descriptor per rejected element, in
    input order.
    """

    def __init__(self, failures: List[dict], inserted: List[Car]):
        self.failures = failures
        self.inserted = inserted
        super().__init__(f"{len(failures)} car(s) rejected")


class CarStore:
    """In-memory collection of cars keyed by id.

    Records are copied on the way in and on the way out, so callers never
    hold a reference into the store. Every operation takes the store lock.
    """

    def __init__(self):
        self._cars: dict[str, Car] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cars)

    def __contains__(self, car_id) -> bool:
        with self._lock:
            return car_id in self._cars

    @staticmethod
    def validate(car: Car, require_id: bool = True) -> bool:
        """Check the required fields of ``car``.

        ``require_id=True`` is the create check: coordinates only have to be
        present, so zero and ``null`` pass. ``require_id=False`` is the
        replacement check: the id comes from the path, and ``null``
        coordinates count as missing.
        """
        if require_id and (not car.id or not isinstance(car.id, Hashable)):
            return False
        if not all([car.imageUrl, car.year, car.name, car.licence]):
            return False
        if not isinstance(car.place, Place):
            return False
        absent = (MISSING,) if require_id else (MISSING, None)
        return car.place.lat not in absent and car.place.long not in absent

    def create(self, cars: Union[Car, Sequence[Car]]) -> Union[Car, List[Car]]:
        if isinstance(cars, Car):
            with self._lock:
                return self._insert(cars)

        inserted: List[Car] = []
        failures: List[dict] = []
        with self._lock:
            for car in cars:
                try:
                    inserted.append(self._insert(car))
                except ValidationError as e:
                    failures.append({"car": car.to_json(), "error": e.error})
                except DuplicateIdError as e:
                    failures.append({"id": e.car_id, "error": e.error})

        if failures:
            logger.warning(
                "Batch create: %d inserted, %d rejected", len(inserted), len(failures)
            )
            raise BatchCreateError(failures, inserted)
        return inserted

    def _insert(self, car: Car) -> Car:
        # caller holds the lock
        if not self.validate(car):
            raise ValidationError()
        if car.id in self._cars:
            raise DuplicateIdError(car.id)
        self._cars[car.id] = copy.deepcopy(car)
        logger.info("Created car %s", car.id)
        return copy.deepcopy(car)

    def list(self) -> List[Car]:
        with self._lock:
            return [copy.deepcopy(c) for c in self._cars.values()]

    def __iter__(self) -> Iterator[Car]:
        return iter(self.list())

    def get(self, car_id: str) -> Car:
        with self._lock:
            car = self._cars.get(car_id)
            if car is None:
                raise NotFoundError(car_id)
            return copy.deepcopy(car)

    def update(self, car_id: str, car: Car) -> Car:
        """Replace the car stored at ``car_id`` with ``car``.

        The embedded ``car.id`` is neither validated nor reconciled with
        ``car_id``; the record is stored as given.
        """
        with self._lock:
            if car_id not in self._cars:
                raise NotFoundError(car_id)
            if not self.validate(car, require_id=False):
                raise ValidationError()
            self._cars[car_id] = copy.deepcopy(car)
            logger.info("Updated car %s", car_id)
            return copy.deepcopy(car)

    def delete(self, car_id: str) -> None:
        with self._lock:
            if car_id not in self._cars:
                raise NotFoundError(car_id)
            del self._cars[car_id]
            logger.info("Deleted car %s", car_id)
