"""Logging config for the scheduling-gate webhook server."""

from __future__ import annotations

import copy
import logging.config
from typing import Any

LOG_FORMAT = "[%(asctime)s] {%(filename)s:%(lineno)d} %(levelname)s - %(message)s"

LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "webhook": {
            "format": LOG_FORMAT,
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "webhook",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "podplacement_webhook": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "werkzeug": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
}


def logging_config(level: str = "INFO") -> dict[str, Any]:
    """Return a copy of LOGGING_CONFIG with the package and root loggers at ``level``."""
    level = level.upper()
    config = copy.deepcopy(LOGGING_CONFIG)
    config["loggers"]["podplacement_webhook"]["level"] = level
    config["root"]["level"] = level
    return config


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(logging_config(level))
