"""
Response helpers shared by API views.
"""

from opentelemetry.trace import Span, Status, StatusCode
from rest_framework import serializers, status
from rest_framework.response import Response

from api.exceptions import failure_body, first_error_message


def validation_failed(span: Span, serializer: serializers.Serializer) -> Response:
    """Mark the span as failed and return a 400 with the serializer errors."""
    span.set_attribute("error", "validation_failed")
    span.set_attribute("error.details", str(serializer.errors))
    span.set_status(Status(StatusCode.ERROR, "Validation failed"))
    return Response(
        failure_body(
            "VALIDATION_ERROR",
            first_error_message(serializer.errors),
            errors=serializer.errors,
        ),
        status=status.HTTP_400_BAD_REQUEST,
    )
