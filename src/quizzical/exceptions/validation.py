"""
Input validation errors.

These are raised before any repository is called and never travel through the
database error codes. They render with a JSON pointer to the offending body
field, or with the name of the offending query parameter.
"""

from typing import Any, Literal


class ValidationError(Exception):
    """
    A request value broke a business rule.

    - field: name of the offending field or query parameter (e.g., 'choices', 'category')
    - message: human-friendly explanation, safe for clients
    - location: 'pointer' for body fields, 'parameter' for query parameters
    """

    error_code = "validation"
    title = "Validation error"

    def __init__(self, field: str, message: str, *, location: Literal["pointer", "parameter"] = "pointer"):
        super().__init__(message)
        self.field = field
        self.message = message
        self.location = location

    def __str__(self) -> str:
        return f"{self.message} (field: {self.field})"

    def source(self) -> dict[str, str]:
        if self.location == "parameter":
            return {"parameter": self.field}
        return {"pointer": f"/{self.field}"}

    def to_payload(self) -> dict[str, Any]:
        return {
            "code": self.error_code,
            "title": self.title,
            "detail": self.message,
            "source": self.source(),
        }

    def http_status(self) -> int:
        return 400


__all__ = ["ValidationError"]
