import azure.functions as func
import logging
from utils.cors import cors_response, json_response
from models import Car
from services.car_store import (
    CarStore,
    CarStoreError,
    BatchCreateError,
    NotFoundError,
    INVALID_CAR_MSG,
)

logger = logging.getLogger(__name__)

DELETED_MSG = "Carro deletado com sucesso"
INTERNAL_ERROR_MSG = "Erro interno"


def _error(e: CarStoreError) -> func.HttpResponse:
    if isinstance(e, BatchCreateError):
        return json_response({"errors": e.failures}, 400)
    return json_response({"error": e.error}, 404 if isinstance(e, NotFoundError) else 400)


def _read_json(req: func.HttpRequest):
    """Decoded body, or ``None`` when the body is not JSON at all."""
    try:
        return req.get_json()
    except ValueError:
        return None


# ───────────── /car ────────────────────────────────────────────────────────────
def car_collection(store: CarStore, req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(204)

    try:
        if req.method == "GET":
            return json_response([c.to_json() for c in store.list()], 200)

        # POST
        body = _read_json(req)
        if isinstance(body, list):
            created = store.create([Car.from_payload(item) for item in body])
            return json_response([c.to_json() for c in created], 201)

        if body is None:
            logger.warning("Rejected car: body is not JSON")
            return json_response({"error": INVALID_CAR_MSG}, 400)
        car = store.create(Car.from_payload(body))
        return json_response(car.to_json(), 201)

    except CarStoreError as e:
        logger.warning("Car request rejected: %s", e)
        return _error(e)
    except Exception:
        logger.exception("car_collection: unhandled")
        return json_response({"error": INTERNAL_ERROR_MSG}, 500)


# ───────────── /car/{id} ───────────────────────────────────────────────────────
def car_item(store: CarStore, req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(204)

    car_id = req.route_params.get("id")
    try:
        if req.method == "GET":
            car = store.get(car_id)
            return json_response({"id": car_id, "value": car.to_json()}, 200)

        if req.method == "PATCH":
            car = store.update(car_id, Car.from_payload(_read_json(req)))
            # 201 on update is what existing clients expect
            return json_response(car.to_json(), 201)

        # DELETE
        store.delete(car_id)
        return json_response({"message": DELETED_MSG}, 200)

    except CarStoreError as e:
        logger.warning("Car %s request rejected: %s", car_id, e)
        return _error(e)
    except Exception:
        logger.exception("car_item: unhandled")
        return json_response({"error": INTERNAL_ERROR_MSG}, 500)


def create_blueprint(store: CarStore) -> func.Blueprint:
    """Blueprint exposing ``store`` under ``car`` and ``car/{id}``."""
    bp = func.Blueprint()

    @bp.function_name(name="Cars")
    @bp.route(route="car", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
    def cars(req: func.HttpRequest) -> func.HttpResponse:
        return car_collection(store, req)

    @bp.function_name(name="CarItem")
    @bp.route(route="car/{id}", methods=["GET", "PATCH", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
    def car(req: func.HttpRequest) -> func.HttpResponse:
        return car_item(store, req)

    return bp
