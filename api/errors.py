# ============================================================================
# API ERROR MAPPING
# ============================================================================
# STATUS: Transport - Domain exceptions to HTTP responses
# PURPOSE: One place mapping the error taxonomy to status codes
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Error Mapping

    ValidationFailed                  400  {"error", "fields": [...]}
    NotFoundError                     404
    InconsistentError                 409
    LockNotAcquired                   409
    PersistenceError, OverwriteError  500

Services have already logged the failure with its request payload, so
the handlers only translate.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.errors import (
    BackofficeError,
    InconsistentError,
    LockNotAcquired,
    NotFoundError,
    OverwriteError,
    PersistenceError,
    ValidationFailed,
)

STATUS_CODES = [
    (ValidationFailed, 400),
    (NotFoundError, 404),
    (InconsistentError, 409),
    (LockNotAcquired, 409),
    (PersistenceError, 500),
]


def status_for(error: BackofficeError) -> int:
    for error_type, status in STATUS_CODES:
        if isinstance(error, error_type):
            return status
    return 500


def error_body(error: BackofficeError) -> dict:
    if isinstance(error, ValidationFailed):
        return error.to_dict()
    body = {"error": str(error)}
    if isinstance(error, OverwriteError):
        body["step"] = error.step.value
        body["rolled_back"] = error.rolled_back
    return body


async def backoffice_error_handler(request: Request, exc: BackofficeError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content=error_body(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain exception handler on the app."""
    app.add_exception_handler(BackofficeError, backoffice_error_handler)


__all__ = ["register_error_handlers", "status_for", "error_body"]
