"""RFC 7807 Problem Details error response formatting"""

import logging
from typing import Optional, Dict, Any, List
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from estate_pulse.services.project_gateway import (
    CHECK_VIOLATION,
    FOREIGN_KEY_VIOLATION,
    NOT_FOUND,
    NOT_NULL_VIOLATION,
    UNIQUE_VIOLATION,
    StoreError,
)

logger = logging.getLogger(__name__)

ERROR_TYPE_BASE = "https://api.estatepulse.dev/errors"

# Store rejection code -> (HTTP status, title, explanation)
STORE_ERROR_MAP = {
    UNIQUE_VIOLATION: (
        status.HTTP_409_CONFLICT,
        "Conflict",
        "A record with this value already exists",
    ),
    FOREIGN_KEY_VIOLATION: (
        status.HTTP_409_CONFLICT,
        "Conflict",
        "Referenced record does not exist or is still referenced",
    ),
    NOT_NULL_VIOLATION: (
        status.HTTP_400_BAD_REQUEST,
        "Validation Error",
        "A required field is missing",
    ),
    CHECK_VIOLATION: (
        status.HTTP_400_BAD_REQUEST,
        "Validation Error",
        "A value is out of the allowed range",
    ),
}


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific field"""
    field: str
    message: str


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs"""
    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference identifying the specific occurrence")
    errors: Optional[List[ValidationErrorDetail]] = Field(None, description="Validation errors")


def create_error_response(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Create an RFC 7807 compliant error response

    Args:
        status_code: HTTP status code
        title: Short error title
        detail: Detailed error message
        error_type: Error type URI (defaults to generic type based on status code)
        instance: Request path or identifier
        errors: List of validation errors with field and message
        extra: Additional members, e.g. the store error code

    Returns:
        JSONResponse with problem details
    """
    # Default error types based on status code
    error_type_map = {
        400: "validation_error",
        404: "not_found",
        409: "conflict",
        500: "internal_server_error",
        502: "bad_gateway",
        503: "service_unavailable"
    }

    if not error_type:
        error_type = error_type_map.get(status_code, "error")

    problem = ProblemDetail(
        type=f"{ERROR_TYPE_BASE}/{error_type}",
        title=title,
        status=status_code,
        detail=detail,
        instance=instance or None,
        errors=errors or None,
    ).model_dump(exclude_none=True)

    if extra:
        problem.update(extra)

    return JSONResponse(
        status_code=status_code,
        content=problem
    )


def not_found_error(detail: str = "Resource not found", instance: Optional[str] = None) -> JSONResponse:
    """Create a 404 Not Found error response"""
    return create_error_response(
        status_code=status.HTTP_404_NOT_FOUND,
        title="Not Found",
        detail=detail,
        instance=instance
    )


def validation_error(
    detail: str = "Validation failed",
    errors: Optional[List[Dict[str, str]]] = None,
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 400 Validation Error response"""
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail=detail,
        errors=errors,
        instance=instance
    )


def conflict_error(
    detail: str = "Resource conflict",
    instance: Optional[str] = None,
    code: Optional[str] = None
) -> JSONResponse:
    """Create a 409 Conflict error response"""
    return create_error_response(
        status_code=status.HTTP_409_CONFLICT,
        title="Conflict",
        detail=detail,
        instance=instance,
        extra={"code": code} if code else None
    )


def bad_gateway_error(detail: str = "Upstream service failed", instance: Optional[str] = None) -> JSONResponse:
    """Create a 502 Bad Gateway error response"""
    return create_error_response(
        status_code=status.HTTP_502_BAD_GATEWAY,
        title="Bad Gateway",
        detail=detail,
        instance=instance
    )


def internal_server_error(
    detail: str = "An internal server error occurred",
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 500 Internal Server Error response"""
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail=detail,
        instance=instance
    )


def store_error_response(error: StoreError, instance: Optional[str] = None) -> JSONResponse:
    """
    Explain a store rejection.

    Known constraint codes get a fixed message; anything else is reported
    with the store's own message as a 400.
    """
    if error.code == NOT_FOUND:
        return not_found_error(detail=error.message, instance=instance)

    status_code, title, detail = STORE_ERROR_MAP.get(
        error.code,
        (status.HTTP_400_BAD_REQUEST, "Bad Request", error.message),
    )
    if status_code == status.HTTP_409_CONFLICT:
        return conflict_error(detail=detail, instance=instance, code=error.code)

    return create_error_response(
        status_code=status_code,
        title=title,
        detail=detail,
        error_type="store_error",
        instance=instance,
        extra={"code": error.code} if error.code else None,
    )


def _field_path(loc) -> str:
    # Drop the leading "body"/"query"/"path" segment
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "form"):
        parts = parts[1:]
    return ".".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return request validation failures as a 400 with one entry per field"""
    errors = [
        {"field": _field_path(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    return validation_error(
        detail="Request validation failed",
        errors=errors,
        instance=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected failure and hide its details from the client"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return internal_server_error(instance=request.url.path)
