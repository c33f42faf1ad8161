# src/quizzical/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Every request gets a correlation id: the incoming `X-Request-ID` header when
it is a sane value, otherwise a fresh UUID4. The id is stored in the
request_id ContextVar for the duration of the request (so RequestIdFilter can
stamp it onto log records) and echoed back in the `X-Request-ID` response
header.

Register it before the routers:
    app.add_middleware(RequestIDMiddleware)
"""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Printable token, no whitespace, bounded length: keeps log lines single-line
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")


def _incoming_or_new(value: str | None) -> str:
    if value and _VALID_REQUEST_ID.match(value):
        return value
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware that sets a request id for each incoming request.
    """

    async def dispatch(self, request: Request, call_next):
        rid = _incoming_or_new(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
