"""
API exception handlers.

This module maps domain and framework exceptions to the
``{"success": false, "code", "message"}`` response shape.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AccountNotFoundError,
    DomainException,
    DuplicateLicenseKeyError,
    DuplicateUsernameError,
    ForbiddenError,
    InvalidCredentialsError,
    LicenseKeyNotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"

DOMAIN_STATUS_CODES = (
    ((LicenseKeyNotFoundError, AccountNotFoundError), status.HTTP_404_NOT_FOUND),
    ((UnauthorizedError, InvalidCredentialsError), status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    ((ValidationError, DuplicateUsernameError, DuplicateLicenseKeyError), status.HTTP_400_BAD_REQUEST),
)


def failure_body(code: str, message: str, **extra: Any) -> Dict[str, Any]:
    """Build the failure response body."""
    return {"success": False, "code": code, "message": message, **extra}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, StoreUnavailableError):
        errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
        logger.error("Store unavailable: %s", exc.message, extra={"trace_id": trace_id})
        response = Response(
            failure_body("INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    elif isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, DRFValidationError):
        response = Response(
            failure_body("VALIDATION_ERROR", first_error_message(exc.detail), errors=exc.detail),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = failure_body(code, str(exc.detail))
    elif isinstance(exc, Http404):
        response = Response(
            failure_body("NOT_FOUND", "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, endpoint, trace_id)

    if getattr(context.get("view"), "reports_validity", False):
        # Verify answers every failure in its own {valid, message} shape
        response.data = {
            "valid": False,
            "message": response.data.get("message", INTERNAL_ERROR_MESSAGE),
        }

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else "unknown"


def first_error_message(detail: Any) -> str:
    """Flatten DRF error detail to one readable message."""
    if isinstance(detail, dict):
        for field_name, errors in detail.items():
            message = first_error_message(errors)
            if field_name == "non_field_errors":
                return message
            return f"{field_name}: {message}"
    if isinstance(detail, list) and detail:
        return first_error_message(detail[0])
    return str(detail) or "Invalid input"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    for exception_types, mapped_status in DOMAIN_STATUS_CODES:
        if isinstance(exc, exception_types):
            status_code = mapped_status
            break

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(failure_body(exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, endpoint: str, trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=endpoint).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        failure_body("INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
