"""
Client API views.

These endpoints are used by running client installations and operators to:
- Verify license keys
- Send heartbeats and log posted comments
- Log in and read key statistics
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.login import LoginCommand
from accounts.application.handlers.account_handlers import LoginHandler
from accounts.infrastructure.factory import build_account_directory
from api.v1.client.serializers import (
    LicenseKeyRequestSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    OperatorStatsResponseSerializer,
    PublicStatsResponseSerializer,
    VerifyRequestSerializer,
    VerifyResponseSerializer,
)
from api.exceptions import first_error_message
from api.v1.responses import validation_failed
from api.v1.serializers import FailureSerializer, SuccessMessageSerializer
from core.http import client_address
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.log_comment import LogCommentCommand
from licenses.application.commands.record_heartbeat import RecordHeartbeatCommand
from licenses.application.commands.verify_license_key import VerifyLicenseKeyCommand
from licenses.application.handlers.client_handlers import (
    LogCommentHandler,
    RecordHeartbeatHandler,
    VerifyLicenseKeyHandler,
)
from licenses.application.handlers.statistics_handlers import (
    GetOperatorStatsHandler,
    GetPublicStatsHandler,
)
from licenses.application.queries.get_key_statistics import (
    GetOperatorStatsQuery,
    GetPublicStatsQuery,
)
from licenses.infrastructure.factory import build_key_store
from presence.infrastructure.factory import build_presence_tracker

# Initialize services (in production, use DI container)
_key_store = build_key_store()
_presence_tracker = build_presence_tracker()
_account_directory = build_account_directory()

tracer = get_tracer(__name__)

MISSING_VALUE_CODES = {"required", "blank", "null"}


def _verify_input_error(serializer: VerifyRequestSerializer) -> str:
    codes = {error.code for error in serializer.errors.get("license_key", [])}
    if codes & MISSING_VALUE_CODES:
        return "License key is required"
    return first_error_message(serializer.errors)


class VerifyLicenseKeyView(APIView):
    """View for verifying license keys."""

    reports_validity = True

    @extend_schema(
        operation_id="verify_license_key",
        summary="Verify License Key",
        description=(
            "Check that a license key exists and is active. Unknown and inactive keys "
            "answer 200 with valid=false; every attempt is recorded in the access log."
        ),
        tags=["Client API"],
        request=VerifyRequestSerializer,
        responses={
            200: VerifyResponseSerializer,
            400: VerifyResponseSerializer,
            500: VerifyResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license key."""
        return async_to_sync(self._handle_verify)(request)

    async def _handle_verify(self, request: Request) -> Response:
        """Async handler for verify."""
        with tracer.start_as_current_span("verify_license_key") as span:
            span.set_attribute("operation", "verify_license_key")

            serializer = VerifyRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    {"valid": False, "message": _verify_input_error(serializer)},
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = VerifyLicenseKeyHandler(key_store=_key_store)
            result = await handler.handle(
                VerifyLicenseKeyCommand(
                    license_key=serializer.validated_data["license_key"],
                    address=client_address(request),
                )
            )

            body = {"valid": result.valid, "message": result.message}
            if result.owner is not None:
                body["owner"] = result.owner
            span.set_attribute("valid", result.valid)
            span.set_status(Status(StatusCode.OK))
            return Response(body, status=status.HTTP_200_OK)


class HeartbeatView(APIView):
    """View for client heartbeats."""

    @extend_schema(
        operation_id="heartbeat",
        summary="Heartbeat",
        description=(
            "Liveness signal from a running client. Stamps the key with the caller's "
            "address and records the address sighting."
        ),
        tags=["Client API"],
        request=LicenseKeyRequestSerializer,
        responses={
            200: SuccessMessageSerializer,
            400: FailureSerializer,
            404: FailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Record a heartbeat."""
        return async_to_sync(self._handle_heartbeat)(request)

    async def _handle_heartbeat(self, request: Request) -> Response:
        """Async handler for heartbeat."""
        with tracer.start_as_current_span("heartbeat") as span:
            span.set_attribute("operation", "heartbeat")

            serializer = LicenseKeyRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            address = client_address(request) or ""
            span.set_attribute("address", address)

            handler = RecordHeartbeatHandler(key_store=_key_store)
            await handler.handle(
                RecordHeartbeatCommand(
                    license_key=serializer.validated_data["license_key"],
                    address=address,
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Heartbeat recorded"},
                status=status.HTTP_200_OK,
            )


class LogCommentView(APIView):
    """View for logging posted comments."""

    @extend_schema(
        operation_id="log_comment",
        summary="Log Comment",
        description="Count one posted comment against an existing license key.",
        tags=["Client API"],
        request=LicenseKeyRequestSerializer,
        responses={
            200: SuccessMessageSerializer,
            400: FailureSerializer,
            404: FailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Log a posted comment."""
        return async_to_sync(self._handle_log_comment)(request)

    async def _handle_log_comment(self, request: Request) -> Response:
        """Async handler for log comment."""
        with tracer.start_as_current_span("log_comment") as span:
            span.set_attribute("operation", "log_comment")

            serializer = LicenseKeyRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = LogCommentHandler(key_store=_key_store)
            await handler.handle(
                LogCommentCommand(
                    license_key=serializer.validated_data["license_key"],
                    address=client_address(request),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Comment logged"},
                status=status.HTTP_200_OK,
            )


class PublicStatsView(APIView):
    """View for the public leaderboard."""

    @extend_schema(
        operation_id="public_stats",
        summary="Public Statistics",
        description=(
            "Active keys ranked by posted comments. Owners only; "
            "license keys are never disclosed."
        ),
        tags=["Client API"],
        responses={200: PublicStatsResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Get the public leaderboard."""
        return async_to_sync(self._handle_public_stats)(request)

    async def _handle_public_stats(self, request: Request) -> Response:
        """Async handler for public stats."""
        with tracer.start_as_current_span("public_stats") as span:
            span.set_attribute("operation", "public_stats")

            handler = GetPublicStatsHandler(key_store=_key_store)
            stats = await handler.handle(GetPublicStatsQuery())

            span.set_attribute("stats.count", len(stats))
            span.set_status(Status(StatusCode.OK))
            return Response(
                PublicStatsResponseSerializer({"success": True, "stats": stats}).data,
                status=status.HTTP_200_OK,
            )


class LoginView(APIView):
    """View for account login."""

    @extend_schema(
        operation_id="login",
        summary="Login",
        description="Authenticate with username and password and return the account role.",
        tags=["Client API"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: FailureSerializer,
            401: FailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Log in."""
        return async_to_sync(self._handle_login)(request)

    async def _handle_login(self, request: Request) -> Response:
        """Async handler for login."""
        with tracer.start_as_current_span("login") as span:
            span.set_attribute("operation", "login")

            serializer = LoginRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = LoginHandler(account_directory=_account_directory)
            result = await handler.handle(
                LoginCommand(
                    username=serializer.validated_data["username"],
                    password=serializer.validated_data["password"],
                )
            )

            span.set_attribute("role", result.role)
            span.set_status(Status(StatusCode.OK))
            return Response(LoginResponseSerializer(result).data, status=status.HTTP_200_OK)


class OperatorStatsView(APIView):
    """View for an operator's own key statistics."""

    @extend_schema(
        operation_id="operator_stats",
        summary="Operator Statistics",
        description=(
            "Statistics of one license key. Presenting an existing key is the only "
            "credential required."
        ),
        tags=["Client API"],
        request=LicenseKeyRequestSerializer,
        responses={
            200: OperatorStatsResponseSerializer,
            400: FailureSerializer,
            404: FailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Get statistics for one key."""
        return async_to_sync(self._handle_operator_stats)(request)

    async def _handle_operator_stats(self, request: Request) -> Response:
        """Async handler for operator stats."""
        with tracer.start_as_current_span("operator_stats") as span:
            span.set_attribute("operation", "operator_stats")

            serializer = LicenseKeyRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = GetOperatorStatsHandler(
                key_store=_key_store, presence_tracker=_presence_tracker
            )
            stats = await handler.handle(
                GetOperatorStatsQuery(license_key=serializer.validated_data["license_key"])
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                OperatorStatsResponseSerializer({"success": True, "stats": stats}).data,
                status=status.HTTP_200_OK,
            )
