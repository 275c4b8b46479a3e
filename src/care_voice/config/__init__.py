"""
Configuration package
"""

from .settings import (
    CareVoiceSettings,
    LoggingSettings,
    get_settings,
    get_logging_settings,
    reset_settings
)

__all__ = [
    "CareVoiceSettings",
    "LoggingSettings",
    "get_settings",
    "get_logging_settings",
    "reset_settings"
]
