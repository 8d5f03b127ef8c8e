"""Tests for building Car records from JSON payloads."""

import copy

from models import MISSING, Car, Place


def test_from_payload_reads_every_field(car_payload):
    car = Car.from_payload(car_payload)

    assert car.id == "001"
    assert car.licence == "ABC-1234"
    assert car.place == Place(lat=0, long=0)
    assert car.to_json() == car_payload


def test_to_json_leaves_out_missing_fields():
    car = Car.from_payload({"id": "7", "place": {"long": 3}})

    assert car.name is MISSING
    assert car.place.lat is MISSING
    assert car.to_json() == {"id": "7", "place": {"long": 3}}


def test_explicit_null_is_kept_apart_from_missing():
    car = Car.from_payload({"id": None, "place": {"lat": None}})

    assert car.id is None
    assert car.place.lat is None
    assert car.place.long is MISSING
    assert car.to_json() == {"id": None, "place": {"lat": None}}


def test_non_object_payload_is_echoed_as_sent():
    assert Car.from_payload(["not", "a", "car"]).to_json() == ["not", "a", "car"]
    assert Car.from_payload(None).to_json() is None


def test_non_object_place_is_echoed_as_sent(car_payload):
    car = Car.from_payload(dict(car_payload, place="here"))

    assert car.place == "here"
    assert car.to_json()["place"] == "here"


def test_unknown_keys_are_kept(car_payload):
    payload = dict(car_payload, colour="red", place={"lat": 1, "long": 2, "alt": 760})

    assert Car.from_payload(payload).to_json() == payload


def test_missing_survives_deepcopy():
    assert copy.deepcopy(Car()).id is MISSING
