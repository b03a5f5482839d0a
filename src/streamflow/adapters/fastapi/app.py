"""FastAPI adapter – application factory."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from streamflow.adapters.fastapi.exception_mapper import FastAPIExceptionMapper, _require_fastapi
from streamflow.adapters.fastapi.routers import (
    FastAPIHealthRouter,
    FastAPIMetricsRouter,
    NotificationRouter,
    ReadinessCheck,
)

if TYPE_CHECKING:
    from streamflow.application.service import NotificationService


def create_app(
    service: "NotificationService",
    *,
    readiness_checks: list[ReadinessCheck] | None = None,
    metrics_registry: Any = None,
    expose_metrics: bool = True,
    title: str = "streamflow",
) -> Any:
    """Build a FastAPI app exposing *service* plus health and metrics routes."""
    _require_fastapi()
    from fastapi import FastAPI  # type: ignore[import-untyped]

    app = FastAPI(title=title)
    FastAPIExceptionMapper().register(app)
    app.include_router(NotificationRouter(service))
    app.include_router(FastAPIHealthRouter(readiness_checks=readiness_checks))
    if expose_metrics:
        app.include_router(FastAPIMetricsRouter(registry=metrics_registry))
    return app


__all__ = ["create_app"]
