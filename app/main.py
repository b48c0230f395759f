import logging
import math
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.shared.config import Settings, get_settings
from app.shared.log import configure_logging
from app.shared.metrics import install_metrics, route_path
from app.events.store import EventStore

# Routers Import
from app.events.api import router as events_router

logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Events", "description": "Create, update, delete and query calendar events"},
    {"name": "Health", "description": "Service health"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    configure_logging(cfg.LOG_LEVEL, cfg.LOG_FILE)
    logger.info("Starting calendar events service (env=%s)", cfg.ENV)
    yield
    logger.info("Shutting down...")


def _validation_code(errors: list[dict]) -> str:
    fields = {str(e["loc"][-1]) for e in errors if e.get("loc")}
    if "date" in fields:
        return "invalid_date"
    if "user_id" in fields:
        return "invalid_user_id"
    return "invalid_request"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Calendar Events API",
        version="1.0.0",
        description="HTTP API for managing per-user calendar events.",
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = EventStore()

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(x) for x in e['loc'][1:]) or 'body'}: {e['msg']}" for e in errors
        )
        logger.warning("invalid request %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=400,
            content={"error": f"invalid request: {message}", "code": _validation_code(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict):
            content = exc.detail
        else:
            content = {"error": str(exc.detail), "code": "http_error"}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unexpected error on %s %s", request.method, request.url.path)
        message = str(exc) if settings.ENV == "dev" else "internal server error"
        return JSONResponse(status_code=500, content={"error": message, "code": "internal_error"})

    if settings.METRICS_ENABLED:
        install_metrics(app)

    @app.middleware("http")
    async def _request_log(request: Request, call_next):
        start = time.perf_counter()
        logger.info("%s %s started", request.method, request.url.path)
        response = await call_next(request)
        logger.info(
            "%s %s completed in %.2f ms with status %d",
            request.method, route_path(request), (time.perf_counter() - start) * 1000, response.status_code,
        )
        return response

    @app.get("/healthz", tags=["Health"])
    def healthz():
        return {"ok": True}

    app.include_router(events_router)
    return app


app = create_app()


def keep_alive_seconds(timeout: float) -> int:
    # uvicorn wants whole seconds; round up so 0.5 doesn't become 0
    return max(1, math.ceil(timeout))


def run() -> None:
    import uvicorn

    cfg = get_settings()
    configure_logging(cfg.LOG_LEVEL, cfg.LOG_FILE)
    logger.info("Starting server on %s:%d", cfg.HOST, cfg.PORT)
    uvicorn.run(app, host=cfg.HOST, port=cfg.PORT, timeout_keep_alive=keep_alive_seconds(cfg.TIMEOUT))


if __name__ == "__main__":
    run()
