"""Health check endpoint. Stateless: the catalog file is not touched."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request

from catalog.domain.model.product import format_timestamp, utc_now
from catalog.infrastructure.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    """Returns 200 whenever the process is serving requests."""
    return HealthResponse(
        message="API is running",
        timestamp=format_timestamp(utc_now()),
        version=request.app.state.settings.version,
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
    )
