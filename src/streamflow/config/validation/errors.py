"""Config validation – errors raised while loading or checking settings."""
from __future__ import annotations

from typing import Any

from streamflow.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded; the process should not start.

    *setting_name* is the environment variable or field at fault, when known.
    """

    default_code = "config_error"

    def __init__(self, message: str, *, setting_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.setting_name = setting_name


class MissingRequiredSettingError(ConfigError):
    """A field without default has no environment variable."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"{setting_name} is not set and has no default",
            setting_name=setting_name,
            detail={"setting": setting_name},
        )


class InvalidSettingValueError(ConfigError):
    """A value that parses but breaks a rule (range, cross-field check)."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} rejected: {reason}",
            setting_name=setting_name,
            detail={"setting": setting_name, "reason": reason},
        )
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
