import re
import logging
from contextlib import asynccontextmanager

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import ConstraintKind, classify_integrity_error
from .base import (
    RepositoryError,
    ConnectionFailedError,
    DatabaseError,
    ConversionError,
    DatabaseIOError,
    UnknownDatabaseError,
)

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Try to extract involved column names from common Postgres messages:
      - 'null value in column "text" of relation "choices" violates not-null constraint'
      - 'DETAIL:  Key (name)=(Science) already exists.'
    """
    if not msg:
        return None

    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # SQLite: 'NOT NULL constraint failed: choices.text' / 'UNIQUE constraint failed: categories.name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[^\n\[]+)', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols").strip())]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite).
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)
    return _extract_columns_postgres(msg) or _extract_columns_sqlite(msg)


# -----------------------
# Mapper
# -----------------------

_KIND_DESCRIPTIONS = {
    ConstraintKind.UNIQUE: "duplicate value",
    ConstraintKind.NOT_NULL: "missing required value",
    ConstraintKind.FOREIGN_KEY: "referenced row not found",
    ConstraintKind.CHECK: "business rule violated",
    ConstraintKind.UNKNOWN: "integrity violation",
}


def _integrity_detail(exc: IntegrityError, operation: str) -> str:
    kind, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    detail = f"Failed to {operation}: {_KIND_DESCRIPTIONS[kind]}"
    if columns:
        detail += f" ({', '.join(columns)})"
    logger.info(
        "mapper.integrity_violation",
        extra={"operation": operation, "kind": kind.value, "fields": columns, "constraint": constraint_name},
    )
    return detail


def map_database_error(exc: BaseException, operation: str) -> RepositoryError:
    """
    Translate any exception raised while talking to the store into a RepositoryError.

    Classification order:
      - RepositoryError instances pass through untouched
      - pool timeouts, and DBAPI errors raised before any statement ran, mean no
        connection could be obtained -> ConnectionFailedError
      - integrity violations and every other statement failure -> DatabaseError
      - pydantic validation failures while building domain values -> ConversionError
      - refused/reset sockets outside the driver -> ConnectionFailedError
      - other OS-level I/O failures -> DatabaseIOError
      - anything else -> UnknownDatabaseError
    """
    if isinstance(exc, RepositoryError):
        return exc

    if isinstance(exc, PoolTimeoutError):
        return ConnectionFailedError(f"Timed out waiting for a connection to {operation}")

    if isinstance(exc, DBAPIError) and exc.statement is None:
        return ConnectionFailedError(f"Could not connect to the database to {operation}")

    if isinstance(exc, IntegrityError):
        return DatabaseError(_integrity_detail(exc, operation))

    if isinstance(exc, SQLAlchemyError):
        return DatabaseError(f"Failed to {operation}")

    if isinstance(exc, PydanticValidationError):
        return ConversionError(f"Stored data could not be converted while trying to {operation}")

    if isinstance(exc, ConnectionError):
        return ConnectionFailedError(f"Could not connect to the database to {operation}")

    if isinstance(exc, OSError):
        return DatabaseIOError(f"I/O failure while trying to {operation}")

    return UnknownDatabaseError()


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, operation: str, *, rollback: bool = True):
    """
    Usage:
        async with db_error_handler(self.db, "save question"):
            ... DB statements ...
    Any failure rolls the session back and is re-raised as a RepositoryError.
    """
    try:
        yield
    except Exception as exc:
        if rollback:
            try:
                await db.rollback()
            except Exception:
                logger.exception("Failed to rollback session", extra={"operation": operation})

        # Domain errors raised inside the block (e.g. NotFoundError) are already mapped
        if isinstance(exc, RepositoryError):
            raise

        mapped = map_database_error(exc, operation)
        logger.error(
            "repo.%s.failed", operation.replace(" ", "_"),
            extra={"operation": operation, "error_code": mapped.error_code, "exc_type": type(exc).__name__},
        )
        # Raw driver text stays at DEBUG only
        logger.debug("repo.failure_raw", extra={"operation": operation, "raw": str(exc)})
        raise mapped from exc


# quizzical/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Repository error kinds (DatabaseError, NotFoundError, ...)
# │   ├── validation.py              # ValidationError raised before the store is called
# │   ├── integrity_classifier.py    # SQL-level constraint classification
# │   └── mapper.py                  # Map driver/SQLAlchemy errors to repository error kinds
