# cliopts/config/logging_config.py

import logging
import logging.config
import logging.handlers
import os
from typing import Any, Dict, List

from cliopts.config.settings import Settings


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """
    dictConfig mapping for the cliopts command-line tool.

    - Console (stderr) always; stdout is reserved for the tool's output.
    - Rotating file (<logs_dir>/app/cliopts.log) when `logs_dir` is set.
    """

    # ------------------------------------------------------------------ #
    # 1) Global log level
    # ------------------------------------------------------------------ #
    level = logging.DEBUG if settings.debug else logging.WARNING

    # ------------------------------------------------------------------ #
    # 2) Handlers
    # ------------------------------------------------------------------ #
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        },
    }

    if settings.logs_dir:
        app_dir = os.path.join(settings.logs_dir, "app")
        os.makedirs(app_dir, exist_ok=True)
        handlers["app_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "standard",
            "filename": os.path.join(app_dir, "cliopts.log"),
            "mode": "a",
            "maxBytes": 1_000_000,   # 1 MB
            "backupCount": 3,
            "encoding": "utf-8",
        }

    handler_names: List[str] = list(handlers)

    # ------------------------------------------------------------------ #
    # 3) dictConfig
    # ------------------------------------------------------------------ #
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "py.warnings": {
                "handlers": handler_names,
                "level": "WARNING",
                "propagate": False,
            },
        },
        "root": {
            "handlers": handler_names,
            "level": level,
        },
    }


def configure_logging(settings: Settings) -> None:
    """Configure application-wide logging from Settings."""
    logging.captureWarnings(True)
    logging.config.dictConfig(build_logging_config(settings))
