"""
Custom exceptions for repository-related operations.

Every storage failure leaves the repository layer as one of a closed set of
kinds. Each kind knows its own HTTP status and how to render itself as a
client-safe payload, so the API layer never has to look at driver errors.
"""

from typing import Any

# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - detail: human-friendly message (safe to show to clients)
    - error_code: canonical short code (e.g., 'db.execution', 'not_found') used by clients
    - title: short summary of the error kind, rendered next to the detail
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "db": 500,
        "db.connection": 500,
        "db.execution": 500,
        "db.conversion": 500,
        "db.io": 500,
        "not_found": 404,
    }

    error_code: str = "db"
    title: str = "Database error"

    def __init__(self, detail: str | None = None, *, error_code: str | None = None):
        super().__init__(detail or self.title)
        self.detail = detail
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        base = self.detail or self.title
        return f"{base} (code: {self.error_code})"

    def to_payload(self) -> dict[str, Any]:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

        Standard shape:
            {
                "code": "db.execution",
                "title": "Database error",
                "detail": "A human-friendly message",   # omitted when there is none
            }

        The payload never carries raw driver messages; those go to DEBUG logs only.
        """
        payload: dict[str, Any] = {"code": self.error_code, "title": self.title}
        if self.detail:
            payload["detail"] = self.detail
        return payload

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error.
        Unknown codes fall back to 500: a storage failure is never the client's fault.
        """
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)


# Subclasses pin their canonical error code so http_status() is automatic

class ConnectionFailedError(RepositoryError):
    """No connection to the store could be obtained."""
    error_code = "db.connection"
    title = "Database connection error"


class DatabaseError(RepositoryError):
    """A statement failed while executing (constraint violation, syntax, lost connection mid-query)."""
    error_code = "db.execution"
    title = "Database error"


class ConversionError(RepositoryError):
    """A stored value could not be converted into a domain value."""
    error_code = "db.conversion"
    title = "Data conversion error"


class DatabaseIOError(RepositoryError):
    """An I/O failure outside the driver's own error reporting."""
    error_code = "db.io"
    title = "Database I/O error"


class UnknownDatabaseError(RepositoryError):
    """Anything the classifier could not place; detail is optional."""
    error_code = "db"
    title = "Unknown database error"


class NotFoundError(RepositoryError):
    error_code = "not_found"
    title = "Not found"

    def __init__(self, detail: str = "Not found"):
        super().__init__(detail)


__all__ = [
    "RepositoryError",
    "ConnectionFailedError",
    "DatabaseError",
    "ConversionError",
    "DatabaseIOError",
    "UnknownDatabaseError",
    "NotFoundError",
]
