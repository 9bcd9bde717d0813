"""FastAPI application factory. No business logic; only wiring, middleware and error mapping."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mindfulme.api import health
from mindfulme.api import router as api_router
from mindfulme.core.config import Settings, load_settings
from mindfulme.core.errors import MindfulMeError, UnauthorizedError
from mindfulme.services.auth import AuthService
from mindfulme.storage import create_storage

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 1000.0


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = next(
        (str(part) for part in reversed(first.get("loc", ())) if not isinstance(part, int)),
        None,
    )
    msg = first.get("msg", "Invalid value")
    if field and field not in ("body", "query", "path"):
        return f"{field}: {msg}"
    return msg


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(MindfulMeError)
    async def handle_app_error(request: Request, exc: MindfulMeError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def _install_timing_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def time_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.1f}"
        if elapsed_ms > SLOW_REQUEST_MS:
            logger.warning(
                "Slow request",
                extra={"path": request.url.path, "method": request.method, "elapsed_ms": elapsed_ms},
            )
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the app from one Settings object. Storage and the auth service are
    created here and kept on app.state for the request dependencies.
    """
    settings = settings or load_settings()
    storage = create_storage(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        storage.close()

    app = FastAPI(
        title="MindfulMe API",
        lifespan=lifespan,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.auth = AuthService(storage, settings)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    if settings.ENABLE_PERFORMANCE_MONITORING:
        _install_timing_middleware(app)
    _install_error_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix=settings.API_PREFIX)

    logger.info(
        "App created",
        extra={"environment": settings.APP_ENV, "database": storage.kind},
    )
    return app
