"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus credential store reachability."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: Literal["dev", "prod"] = Field(description="APP_ENV the service runs under")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether a trivial query against the credential store succeeded",
    )
