# src/quizzical/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter stamps every LogRecord with the id of the HTTP request being
  served, read from a ContextVar. A ContextVar (rather than a thread-local)
  follows the request across `await` points, so repository logs emitted deep
  inside a request carry the same id as the route that called them.
- RedactFilter masks record attributes whose names look like secrets.

Outside any request (startup code, tests, scripts) the id is the sentinel "-",
so format strings referencing %(request_id)s never fail.
"""

import logging
from logging import LogRecord
import contextvars

# Request id for the current execution context. None means "no request".
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id for the current context.

    Returns:
        token: pass it to reset_request_id() to restore the previous value
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee that every LogRecord has a `request_id` attribute.

    Precedence: an explicit `extra={"request_id": ...}` on the call, then the
    context value set by the middleware, then "-".
    Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """
    Mask record attributes named like credentials.

    Repositories log connection-related context (e.g. a sanitized URL), and a
    careless `extra={"password": ...}` must never reach a log sink.
    """

    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "conn_string"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
