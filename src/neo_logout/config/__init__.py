"""Configuration for neo-logout: settings and logging."""

from .logging_config import LoggingConfig, LogFormat, LogVerbosity, get_logger, setup_logging
from .settings import LogoutSettings, get_logout_settings

__all__ = [
    "LoggingConfig",
    "LogFormat",
    "LogVerbosity",
    "get_logger",
    "setup_logging",
    "LogoutSettings",
    "get_logout_settings",
]
