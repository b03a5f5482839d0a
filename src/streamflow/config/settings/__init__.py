"""Config settings – 12-factor env-based configuration."""
from streamflow.config.settings.base import Settings
from streamflow.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from streamflow.config.settings.notification import NotificationSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "NotificationSettings",
    "Settings",
    "SettingsLoader",
]
