from .base import (
    RepositoryError,
    ConnectionFailedError,
    DatabaseError,
    ConversionError,
    DatabaseIOError,
    UnknownDatabaseError,
    NotFoundError,
)
from .validation import ValidationError
from .mapper import db_error_handler, map_database_error

__all__ = [
    "RepositoryError",
    "ConnectionFailedError",
    "DatabaseError",
    "ConversionError",
    "DatabaseIOError",
    "UnknownDatabaseError",
    "NotFoundError",
    "ValidationError",
    "db_error_handler",
    "map_database_error",
]
