# src/quizzical/core/logging/builder.py
"""
Logging builder: turn Settings into a dictConfig mapping and apply it.

    make_dict_config(settings) -> dict   (pure, easy to assert on)
    setup_logging(settings)              (applies it; call once at startup)

Handler selection:
  - console is always on
  - LOG_TO_STDOUT=False with a LOG_DIR -> file + error_file
  - otherwise                          -> error_console

Settings knobs used: ENV, LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR,
LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENABLE_SQL_LOGGING.
"""

from pathlib import Path
import logging
import logging.config

from quizzical.config.settings import Settings
from quizzical.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping for `settings`.

    The returned mapping includes:
      - formatters: "standard" (color in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console plus either file/error_file or error_console
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL text may include bound values; keep it off unless asked for
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration built from `settings`.

    Creates LOG_DIR first when file handlers are wired, and adds a
    RequestIdFilter on the root logger so records logged straight to the root
    still have a request_id.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
