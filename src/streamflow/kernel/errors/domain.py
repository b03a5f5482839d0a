"""Domain errors – rejected input and broken business rules."""

from __future__ import annotations

from typing import Any

from streamflow.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level failures, each a dict with at least
    ``field`` and ``message`` keys.  Never retried: the caller gets it back
    synchronously and nothing is queued.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    @classmethod
    def for_field(cls, field: str, message: str, value: Any = None) -> "ValidationError":
        """Shorthand for a single-field failure."""
        error: dict[str, Any] = {"field": field, "message": message}
        if value is not None:
            error["value"] = value
        return cls(f"{field}: {message}", errors=[error])

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        base = super().to_dict(include_cause=include_cause)
        base["errors"] = self.errors
        return base


__all__ = ["DomainError", "ValidationError"]
