"""Error Handlers — translate ledger errors and request errors into HTTP responses.

Invariants:
    - HTTP status chosen here from ErrorKind; core errors carry no transport data
    - Every ErrorKind has a status in STATUS_BY_KIND
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Dispatch on exc.kind, not on message text or exception class
    - NOT_FOUND logged at INFO (routine client lookup), rule violations at WARNING
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from budget_api.core.errors import (
    BudgetError, ErrorCategory, ErrorKind, ErrorSeverity,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.BUDGET_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INSUFFICIENT_BALANCE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_CATEGORY: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def status_for(exc: BudgetError) -> int:
    return STATUS_BY_KIND[exc.kind]


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(BudgetError, handle_budget_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_budget_error(request: Request, exc: BudgetError) -> JSONResponse:
    level = logging.INFO if exc.kind is ErrorKind.NOT_FOUND else logging.WARNING
    logger.log(
        level,
        f"Ledger rejected {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "kind": exc.kind.value,
            "envelope_id": exc.context.envelope_id,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=status_for(exc), content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Malformed request on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "kind": ErrorKind.VALIDATION.value,
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
