import json
import os
from typing import Any, Union
import azure.functions as func

ALLOW_METHODS = "GET,POST,PATCH,DELETE,OPTIONS"


def cors_response(
    body: Union[str, bytes, int] = b"",
    status: int = 200,
    mime: str = "text/plain"
) -> func.HttpResponse:
    # cors_response(204) is shorthand for an empty preflight answer
    if isinstance(body, int):
        body, status = b"", body
    return func.HttpResponse(
        body=body,
        status_code=status,
        mimetype=mime,
        headers={
            "Access-Control-Allow-Origin": os.getenv("CORS_ALLOW_ORIGIN", "*"),
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


def json_response(payload: Any, status: int = 200) -> func.HttpResponse:
    return cors_response(json.dumps(payload, ensure_ascii=False), status, "application/json")
