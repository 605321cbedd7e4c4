"""Configuration package for client settings and logging setup."""

from .logging_config import config_get_logger, config_setup_logging
from .settings import JOB_OUTPUT_MAX_BYTES_DEFAULT, ClientSettings, SettingsLoadError, config_load_settings

__all__ = [
    "ClientSettings",
    "JOB_OUTPUT_MAX_BYTES_DEFAULT",
    "SettingsLoadError",
    "config_get_logger",
    "config_load_settings",
    "config_setup_logging",
]
