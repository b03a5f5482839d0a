"""Kernel errors – BaseError and error descriptions.

Every error raised by streamflow carries a machine-readable ``code`` next to
its human message.  The same ``to_dict()`` shape ends up in HTTP error bodies,
structured log lines and (through :func:`describe_error`) in the failure
reason of dead-lettered messages.
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the streamflow error hierarchy.

    Args:
        message: Human-readable description.
        code: Slug identifying the failure (defaults to ``default_code``).
        detail: Extra context; must be JSON-serialisable.
        cause: Lower-level exception this error wraps.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        """Plain dict view; HTTP responses leave *cause* out."""
        body: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if include_cause and self.cause is not None:
            body["cause"] = repr(self.cause)
        return body

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


def describe_error(exc: BaseException) -> str:
    """Short reason text for *exc*: the bare message of a :class:`BaseError`."""
    if isinstance(exc, BaseError):
        return exc.message
    return str(exc) or type(exc).__name__


__all__ = ["BaseError", "describe_error"]
