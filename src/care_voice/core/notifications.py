"""
Toast/alert collaborator used for user-visible advisories
"""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Advisory severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notifier(Protocol):
    """Anything that can surface a message to the user"""

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        ...


class LoggingNotifier:
    """Notifier that writes advisories to the application log"""

    _levels = {
        Severity.INFO: logging.INFO,
        Severity.WARNING: logging.WARNING,
        Severity.ERROR: logging.ERROR,
    }

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        logger.log(self._levels.get(severity, logging.INFO), message)
