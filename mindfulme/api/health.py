"""Liveness, readiness and detailed health endpoints (served outside the API prefix)."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from mindfulme.api.deps import SettingsDep, StorageDep
from mindfulme.schemas.health import HealthResponse, ReadyResponse

router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse)
def healthz() -> str:
    """Liveness: the process is up. Never touches the database."""
    return "OK"


@router.get("/ready", response_model=ReadyResponse)
def ready(storage: StorageDep):
    """Readiness: 503 while the database is unreachable."""
    if not storage.check_connection():
        return JSONResponse(status_code=503, content={"ready": False})
    return ReadyResponse(ready=True)


@router.get("/health", response_model=HealthResponse)
def health(request: Request, settings: SettingsDep, storage: StorageDep) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    connected = storage.check_connection()
    return HealthResponse(
        status="ok" if connected else "degraded",
        timestamp=datetime.now(UTC),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        environment=settings.APP_ENV,
        database=storage.kind,
        database_status="connected" if connected else "disconnected",
        version=settings.APP_VERSION,
    )
