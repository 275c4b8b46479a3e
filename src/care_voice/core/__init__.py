"""
Core wiring for CareVoice
"""

from .notifications import Notifier, LoggingNotifier, Severity

__all__ = [
    "Notifier",
    "LoggingNotifier",
    "Severity"
]
