"""Infrastructure errors – I/O and wire-format failures."""

from __future__ import annotations

from typing import Any

from streamflow.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload.

    ``payload`` keeps a bounded preview of the offending bytes for logs.
    """

    default_code = "serialization_error"

    def __init__(self, message: str, *, payload: bytes | str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        self.payload_preview: str | None = payload[:200] if payload is not None else None


__all__ = ["InfrastructureError", "SerializationError"]
