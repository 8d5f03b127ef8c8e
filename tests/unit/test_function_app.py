"""
Tests for the function app entry point.

Imports function_app the way the Functions host does and calls the ping and
diagnostics functions it registers.
"""

import json

import azure.functions as func
import pytest

import function_app
from models import Car


@pytest.fixture(scope="module")
def functions():
    """Map registered function names to their user functions.

    Module-scoped: FunctionApp.get_functions() caches bindings and rejects a
    second call as duplicate function names.
    """
    return {f.get_function_name(): f.get_user_function() for f in function_app.app.get_functions()}


@pytest.fixture
def get_request():
    def _make(url):
        return func.HttpRequest(method="GET", url=url, body=b"")

    return _make


@pytest.fixture
def clean_store():
    yield function_app.STORE
    for car in function_app.STORE.list():
        function_app.STORE.delete(car.id)


class TestFunctionApp:
    """Test suite for the startup registration, ping and diagnostics."""

    def test_all_functions_registered(self, functions):
        assert {"Cars", "CarItem", "Ping", "Diag"} <= set(functions)

    def test_ping_answers_ok(self, functions, get_request):
        response = functions["Ping"](get_request("/ping"))

        assert response.status_code == 200
        assert response.get_body() == b"ok"

    def test_diag_reports_registration_and_car_count(self, functions, get_request, clean_store, car_payload):
        body = json.loads(functions["Diag"](get_request("/_diag")).get_body())
        assert body["registered"] == ["cars"]
        assert body["failures"] == {}
        assert body["cars"] == 0

        clean_store.create(Car.from_payload(car_payload))

        body = json.loads(functions["Diag"](get_request("/_diag")).get_body())
        assert body["cars"] == 1


class TestLogLevel:
    """Test suite for reading LOG_LEVEL."""

    @pytest.mark.parametrize(
        "value, expected",
        [(None, "INFO"), ("", "INFO"), ("debug", "DEBUG"), ("WARNING", "WARNING"), ("verbose", "INFO")],
    )
    def test_log_level(self, value, expected):
        assert function_app._log_level(value) == expected
