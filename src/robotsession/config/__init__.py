"""Settings store, settings sources and the legacy configure block."""

from .configure import CONFIG_OPTIONS, ConfigProxy, configure
from .loader import SettingsDocument, load_settings, settings_from_env
from .settings import ConfigStore, is_absolute_url

__all__ = [
    "CONFIG_OPTIONS",
    "ConfigProxy",
    "ConfigStore",
    "SettingsDocument",
    "configure",
    "is_absolute_url",
    "load_settings",
    "settings_from_env",
]
