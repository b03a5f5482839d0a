"""FastAPI adapter – notification API, exception mapper, health/metrics routers."""
from streamflow.adapters.fastapi.app import create_app
from streamflow.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from streamflow.adapters.fastapi.routers import (
    FastAPIHealthRouter,
    FastAPIMetricsRouter,
    NotificationRouter,
    ReadinessCheck,
)

__all__ = [
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPIMetricsRouter",
    "NotificationRouter",
    "ReadinessCheck",
    "create_app",
]
