"""Logging configuration driven by application settings."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from team_roster.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure the root logger once; safe to call repeatedly."""
    root = logging.getLogger()
    if getattr(root, "_team_roster_configured", False):
        return

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.LOG_TO_FILE:
        log_dir = Path(settings.LOG_DIRECTORY)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / f"{settings.SERVICE_NAME}.log",
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root._team_roster_configured = True  # type: ignore[attr-defined]
    logging.getLogger(__name__).info(f"Logging configured for {settings.SERVICE_NAME} at {settings.LOG_LEVEL}")
