"""Logging for the outreach backend.

Everything logs under the ``outreach`` namespace. ``configure_logging`` wires
that logger from Settings; when file logging is enabled, authorization
denials are additionally written to their own audit file.
"""

import logging
import logging.handlers
import os
from typing import Optional

from outreach.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
DENIAL_FORMAT = "%(asctime)s %(principal)s denied: requires %(requirement)s"
DENIAL_LOG_FILE = "access_denials.log"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AccessDenialFilter(logging.Filter):
    """Pass only records emitted for a gate denial (``extra={"access_denied": True}``)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, "access_denied", False))


def _rotating_handler(path: str, max_bytes: int, backup_count: int) -> logging.Handler:
    return logging.handlers.RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)


def configure_logging(
    settings: Optional[Settings] = None,
    name: str = "outreach",
    console_logging: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the package logger from Settings.

    Child loggers (``outreach.core.rbac.dependencies`` and friends) propagate
    here. With ``log_to_file`` enabled, ``<log_dir>/<name>.log`` receives
    every record and ``<log_dir>/access_denials.log`` only denials.

    Raises:
        ValueError: If ``log_level`` is not a standard level name
    """
    settings = settings or get_settings()
    logger = logging.getLogger(name)

    level = settings.log_level.upper()
    if level not in _LEVELS:
        raise ValueError(f"Invalid log level: {settings.log_level}. Must be one of: {', '.join(_LEVELS)}")
    logger.setLevel(getattr(logging, level))

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if settings.log_to_file:
        os.makedirs(settings.log_dir, exist_ok=True)
        file_handler = _rotating_handler(
            os.path.join(settings.log_dir, f"{name}.log"), max_bytes, backup_count
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        denial_handler = _rotating_handler(
            os.path.join(settings.log_dir, DENIAL_LOG_FILE), max_bytes, backup_count
        )
        denial_handler.addFilter(AccessDenialFilter())
        denial_handler.setFormatter(logging.Formatter(DENIAL_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(denial_handler)

    if console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
