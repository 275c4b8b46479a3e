"""
Logging configuration for CareVoice
"""

import logging
import sys
from pathlib import Path

from ..config.settings import get_logging_settings

# Chatty loggers of the speech libraries
QUIET_LOGGERS = ("comtypes", "gtts", "urllib3")


def setup_logger(name: str = "care_voice") -> logging.Logger:
    """
    Attach console and optional file handlers to the CareVoice logger

    Args:
        name: Logger name; module loggers below it inherit the handlers

    Returns:
        Configured logger instance
    """
    logging_settings = get_logging_settings()
    logger = logging.getLogger(name)

    # Already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, logging_settings.log_level.upper(), logging.INFO))
    formatter = logging.Formatter(logging_settings.log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logging_settings.log_file:
        log_file_path = Path(logging_settings.log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
