"""
HTTP mapping of domain errors for FastAPI applications.

Responses carry the same JSON shape as HTTPException ("detail") plus the
error code and offending field:

    {"detail": "Slug \"x\" is already in use", "code": "conflict", "field": "slug"}
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cms_core.errors import (
    ConflictError,
    DomainError,
    ResourceExhaustedError,
    StateError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific class first
STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StateError, status.HTTP_409_CONFLICT),
    (ResourceExhaustedError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error; unknown subclasses map to 400."""
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_body(error: DomainError) -> dict[str, str | None]:
    return {"detail": error.message, "code": error.code, "field": error.field}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(
        "%s %s rejected with %d: %s", request.method, request.url.path, status_code, exc.code
    )
    return JSONResponse(status_code=status_code, content=error_body(exc))


def register_domain_error_handlers(app: FastAPI) -> None:
    """Install the DomainError handler on app."""
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
