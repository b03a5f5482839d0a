"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

_MASK = "***"


@dataclasses.dataclass
class Settings:
    """Dataclass settings read from ``<PREFIX>_<FIELD>`` environment variables.

    Subclasses declare fields with defaults, override :meth:`_validate` for
    range and cross-field checks, and list connection strings that may embed
    credentials in ``_secret_fields`` so :meth:`redacted` hides them.
    """

    _prefix: ClassVar[str] = ""
    _secret_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Raise :class:`InvalidSettingValueError` on a bad combination."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """``STREAMFLOW`` + ``main_topic`` -> ``STREAMFLOW_MAIN_TOPIC``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def redacted(self) -> dict[str, Any]:
        """Field values for logging, secrets masked."""
        return {
            f.name: _MASK if f.name in self._secret_fields else getattr(self, f.name)
            for f in dataclasses.fields(self)
        }


__all__ = ["Settings"]
