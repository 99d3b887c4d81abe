"""Configuration module for authflow.

Usage:
    from authflow.core.config import settings, LogLevel

    if settings.LOG_LEVEL == LogLevel.DEBUG:
        ...
"""

from authflow.core.config.enums import LogLevel
from authflow.core.config.settings import Settings

__all__ = [
    "Settings",
    "LogLevel",
    "settings",
]

# Singleton settings instance
settings = Settings()
