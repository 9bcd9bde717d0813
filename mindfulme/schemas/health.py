"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the detailed health endpoint."""

    status: Literal["ok", "degraded"] = Field(default="ok", description="Service status")
    timestamp: datetime = Field(description="Server time (UTC)")
    uptime: float = Field(description="Seconds since the app was created")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["sqlite", "postgresql"] = Field(description="Backing store kind")
    database_status: Literal["connected", "disconnected"] = Field(
        description="Database connectivity when the check ran"
    )
    version: str


class ReadyResponse(BaseModel):
    ready: bool
