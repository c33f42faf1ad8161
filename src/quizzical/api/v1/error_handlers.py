# quizzical/api/v1/error_handlers.py
"""
FastAPI exception handlers that map exceptions to HTTP responses.

Status and body come from the exception itself (.http_status() and
.to_payload()); these handlers only log and wrap. Register them from the app
factory with register_exception_handlers(app).
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quizzical.exceptions import NotFoundError, RepositoryError, ValidationError

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """
    400 Bad Request for business-rule violations, with a pointer to the field.
    """
    logger.info("ValidationError for %s %s: field=%s", request.method, request.url.path, exc.field)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    400 Bad Request for bodies/parameters FastAPI could not parse.

    Only the first error is reported; its location becomes a JSON pointer
    ("/choices/0/title") for body fields or a parameter name for query values.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())]

    if loc and loc[0] in ("query", "path", "header"):
        source = {"parameter": loc[-1]}
    else:
        # Drop the leading "body" marker
        source = {"pointer": "/" + "/".join(loc[1:] if loc[:1] == ["body"] else loc)}

    logger.info("RequestValidationError for %s %s: %s", request.method, request.url.path, source)
    return JSONResponse(
        status_code=400,
        content={
            "code": "request.invalid",
            "title": "Invalid request",
            "detail": first.get("msg", "Invalid request"),
            "source": source,
        },
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """
    404 Not Found.
    """
    logger.info("NotFoundError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Storage failures -> 500 (or the status the error code maps to).
    The payload never contains driver text.
    """
    logger.error("RepositoryError for %s %s: code=%s", request.method, request.url.path, exc.error_code)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


# Helper to register all handlers on an app (call this from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
