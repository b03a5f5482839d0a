"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

import logging
from typing import Any, Callable

from streamflow.kernel.time import utc_now

logger = logging.getLogger(__name__)


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            "Install 'streamflow[fastapi]' to use the FastAPI adapter"
        ) from exc


class FastAPIExceptionMapper:
    """Register streamflow error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "validation_error", "message": "...", "detail": {...},
         "errors": [...], "timestamp": "..."}

    Mappings
    --------
    ``ValidationError``     → 400
    ``DomainError``         → 422
    ``InfrastructureError`` → 503
    ``ConfigError``         → 500
    ``BaseError``           → 500
    """

    def __init__(self) -> None:
        _require_fastapi()
        from streamflow.config.validation import ConfigError
        from streamflow.kernel.errors import BaseError, DomainError, InfrastructureError, ValidationError

        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (DomainError, 422),
            (InfrastructureError, 503),
            (ConfigError, 500),
            (BaseError, 500),
        ]

    @property
    def mappings(self) -> list[tuple[type[Exception], int]]:
        return list(self._map)

    def status_for(self, exc: BaseException) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        from fastapi.responses import JSONResponse  # type: ignore[import-untyped]

        for exc_type, status in self._map:

            def make_handler(code: int) -> Callable[[Any, Any], Any]:
                def handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
                    from streamflow.kernel.errors.base import BaseError

                    if isinstance(exc, BaseError):
                        body = exc.to_dict(include_cause=False)
                    else:
                        body = {"code": "error", "message": str(exc)}
                    if code >= 500:
                        logger.error("http.error status=%d code=%s message=%s", code, body["code"], body["message"])
                    body["timestamp"] = utc_now().isoformat()
                    return JSONResponse(status_code=code, content=body)

                return handler

            app.add_exception_handler(exc_type, make_handler(status))


__all__ = ["FastAPIExceptionMapper"]
