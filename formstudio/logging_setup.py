"""Logging bootstrap for the desktop app."""

from __future__ import annotations

import logging
import logging.config
import os

from formstudio.config import Settings


def build_logging_config(settings: Settings) -> dict:
    level = logging.DEBUG if settings.debug else logging.INFO
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
            "stream": "ext://sys.stderr",
        },
    }
    if settings.log_dir:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "level": level,
            "filename": os.path.join(settings.log_dir, "formstudio.log"),
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": list(handlers),
            "level": level,
        },
    }


def setup_logging(settings: Settings) -> logging.Logger:
    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if settings.debug else logging.WARNING)
    return logging.getLogger("formstudio")
