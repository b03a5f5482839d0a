"""Unit tests for config validation errors."""

from __future__ import annotations

import pytest

from streamflow.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from streamflow.kernel.errors import ApplicationError


# ---------------------------------------------------------------------------
# ConfigError
# ---------------------------------------------------------------------------


class TestConfigError:
    def test_is_application_error(self) -> None:
        assert isinstance(ConfigError("something went wrong"), ApplicationError)

    def test_default_code(self) -> None:
        assert ConfigError("bad").code == "config_error"

    def test_message_stored(self) -> None:
        assert "invalid configuration" in str(ConfigError("invalid configuration"))


# ---------------------------------------------------------------------------
# MissingRequiredSettingError / InvalidSettingValueError
# ---------------------------------------------------------------------------


class TestMissingRequiredSettingError:
    def test_names_setting(self) -> None:
        err = MissingRequiredSettingError("STREAMFLOW_MONGO_URL")
        assert err.setting_name == "STREAMFLOW_MONGO_URL"
        assert "STREAMFLOW_MONGO_URL" in err.message
        assert err.code == "missing_required_setting"

    def test_caught_as_config_error(self) -> None:
        with pytest.raises(ConfigError):
            raise MissingRequiredSettingError("X")


class TestInvalidSettingValueError:
    def test_detail(self) -> None:
        err = InvalidSettingValueError("retry_max_attempts", 0, "must be >= 1")
        assert err.value == 0
        assert err.reason == "must be >= 1"
        assert err.detail == {"setting": "retry_max_attempts", "reason": "must be >= 1"}
        assert err.to_dict()["code"] == "invalid_setting_value"
