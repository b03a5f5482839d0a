"""Config validation – ConfigError family."""
from streamflow.config.validation.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
