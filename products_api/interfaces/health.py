"""
Health check and service info routers.

No authentication, no business logic.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str
    message: str
    timestamp: datetime
    uptime: float
    version: str


class ServiceInfoResponse(BaseModel):
    message: str
    service: str
    version: str
    timestamp: datetime
    endpoints: dict[str, str]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns liveness status, uptime in seconds and version.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    settings = request.app.state.settings
    return HealthResponse(
        status="success",
        message="Server is healthy and running",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        version=settings.version,
    )


@router.get("/", response_model=ServiceInfoResponse, summary="Service info")
def service_info(request: Request) -> ServiceInfoResponse:
    settings = request.app.state.settings
    return ServiceInfoResponse(
        message="Products API is running",
        service=settings.project_name,
        version=settings.version,
        timestamp=datetime.now(timezone.utc),
        endpoints={
            "root": "/",
            "health": "/health",
            "products": "/api/products",
        },
    )
