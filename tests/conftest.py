"""
Configuration module for pytest.

This module contains fixtures shared by the car store and route tests.
"""

import json

import azure.functions as func
import pytest

from models import Car
from services.car_store import CarStore


@pytest.fixture
def store():
    """Return an empty car store."""
    return CarStore()


@pytest.fixture
def car_payload():
    """Return the JSON payload of a complete car."""
    return {
        "id": "001",
        "imageUrl": "https://x",
        "year": "2020/2020",
        "name": "Gaspar",
        "licence": "ABC-1234",
        "place": {"lat": 0, "long": 0},
    }


@pytest.fixture
def make_car(car_payload):
    """Build a Car from the sample payload, overriding selected fields."""

    def _make(**overrides):
        return Car.from_payload({**car_payload, **overrides})

    return _make


@pytest.fixture
def make_request():
    """Build an azure.functions.HttpRequest the way the host would."""

    def _make(method, url="/car", body=None, route_params=None, raw=None):
        if raw is None:
            raw = json.dumps(body).encode() if body is not None else b""
        return func.HttpRequest(
            method=method,
            url=url,
            headers={"Content-Type": "application/json"},
            route_params=route_params or {},
            body=raw,
        )

    return _make
