from __future__ import annotations

import logging.config
import os
import sys
from typing import Any, Dict, Optional


def _log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def _log_destination() -> str:
    return os.getenv("LOG_DESTINATION", "stdout").lower()


def _log_file_path() -> Optional[str]:
    return os.getenv("LOG_FILE")


def _handler(destination: str, level: str) -> Dict[str, Any]:
    if destination == "file":
        log_file = _log_file_path()
        if not log_file:
            raise RuntimeError("LOG_FILE is required when LOG_DESTINATION=file")
        return {
            "class": "logging.FileHandler",
            "level": level,
            "filename": log_file,
            "formatter": "standard",
        }
    return {
        "class": "logging.StreamHandler",
        "level": level,
        "stream": sys.stderr if destination == "stderr" else sys.stdout,
        "formatter": "standard",
    }


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or _log_level()).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": {"default": _handler(_log_destination(), level)},
            "loggers": {
                # route uvicorn records through the root handler
                "uvicorn": {"handlers": [], "propagate": True},
                "uvicorn.access": {"handlers": [], "propagate": True},
            },
            "root": {"handlers": ["default"], "level": level},
        }
    )
