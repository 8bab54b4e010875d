"""Health check endpoint. No dependencies; used as a liveness check."""

from fastapi import APIRouter

from site_content.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()
