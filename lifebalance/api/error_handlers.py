"""Error Handlers — map every failure to the life-balance JSON error envelope.

Invariants:
    - LifeBalanceError → its own to_response() envelope and http_status
    - Errors with retry_after_ms set also carry a Retry-After header (whole seconds)
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per offending field
    - Anything else → 500 INTERNAL_ERROR with no internal details

Design Decisions:
    - Client errors log at WARNING, store failures at ERROR with the error code
    - Validation field names drop FastAPI's location prefix ("body", "query", "path");
      the prefix moves to a separate "location" key
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from lifebalance.core.errors import LifeBalanceError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOCATIONS = ("body", "query", "path", "header")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LifeBalanceError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_domain_error(request: Request, exc: LifeBalanceError):
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        headers=retry_headers(exc),
    )


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request: {', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def retry_headers(exc: LifeBalanceError) -> dict[str, str]:
    """Retry-After in seconds, rounded up, when the error names a retry delay."""
    ms = exc.context.retry_after_ms
    if not ms:
        return {}
    return {"Retry-After": str(max(1, math.ceil(ms / 1000)))}


def _field_detail(error: dict) -> dict:
    loc = [str(part) for part in error["loc"]]
    location = loc[0] if loc and loc[0] in _LOCATIONS else None
    field = ".".join(loc[1:] if location else loc)
    return {
        "field": field or (location or ""),
        "location": location,
        "message": error["msg"],
        "type": error["type"],
    }


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }
