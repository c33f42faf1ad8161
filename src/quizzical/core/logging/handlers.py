# src/quizzical/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a plain handler configuration dict, so the choice of
destination, formatter and level lives in one testable place and builder.py
only decides which handlers to wire.

  console       StreamHandler, every record >= LOG_LEVEL
  file          RotatingFileHandler <LOG_DIR>/app.log, every record >= LOG_LEVEL
  error_file    RotatingFileHandler <LOG_DIR>/errors.log, ERROR and above, always JSON
  error_console StreamHandler, ERROR and above, always JSON (used when not writing files)
"""

from pathlib import Path

from quizzical.config.settings import Settings

# Filter names as declared in builder.make_dict_config
_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(_FILTERS),
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


# Errors go to a separate structured file for alerting and archival.
def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(_FILTERS),
    }
