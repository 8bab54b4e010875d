"""Liveness schema for the content resolver."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """GET /health body. Does not contact the content backend."""

    status: str = Field(default="ok", description="'ok' while the process serves requests")
