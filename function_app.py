import os, json, logging, traceback
import azure.functions as func

# Only try dotenv locally (Azure sets WEBSITE_SITE_NAME on the host)
IS_AZURE = bool(os.getenv("WEBSITE_SITE_NAME"))
if not IS_AZURE:
    from dotenv import load_dotenv
    load_dotenv()

def _log_level(value: str | None) -> str:
    # unknown names fall back to INFO instead of failing the whole app at import
    level = (value or "INFO").upper()
    return level if isinstance(logging.getLevelName(level), int) else "INFO"

logging.getLogger().setLevel(_log_level(os.getenv("LOG_LEVEL")))
logger = logging.getLogger(__name__)

from services.car_store import CarStore
from routes import cars

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# one store per worker process, owned by the app and handed to the blueprints
STORE = CarStore()

REGISTERED: list[str] = []
FAILURES: dict[str, dict] = {}

def _try(name: str, build):
    try:
        app.register_functions(build())
        REGISTERED.append(name)
    except Exception as e:
        logger.exception("Failed to register %s", name)
        FAILURES[name] = {"error": repr(e), "trace": traceback.format_exc()}

# 🔹 Register AT STARTUP so the Functions host discovers HTTP triggers
_try("cars", lambda: cars.create_blueprint(STORE))
logger.info("Car API ready: registered=%s failed=%s", REGISTERED, list(FAILURES))

@app.function_name(name="Ping")
@app.route(route="ping", methods=["GET"])
def ping(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse("ok", mimetype="text/plain")

# Diagnostics (read-only)
@app.function_name(name="Diag")
@app.route(route="_diag", methods=["GET"])
def diag(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"registered": REGISTERED, "failures": FAILURES, "cars": len(STORE)}),
        mimetype="application/json"
    )
