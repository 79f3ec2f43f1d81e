"""
Admin API views.

Every request reaching these views has been authorized by
AdminAuthorizationMiddleware, which sets ``request.admin_principal``.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from access_logs.application.handlers.access_event_handlers import ListAccessEventsHandler
from access_logs.application.queries.list_access_events import ListAccessEventsQuery
from access_logs.infrastructure.factory import build_access_log
from accounts.application.commands.create_account import CreateAccountCommand
from accounts.application.commands.delete_account import DeleteAccountCommand
from accounts.application.commands.update_account_role import UpdateAccountRoleCommand
from accounts.application.handlers.account_handlers import (
    CreateAccountHandler,
    DeleteAccountHandler,
    UpdateAccountRoleHandler,
)
from accounts.application.handlers.account_query_handlers import (
    ListAccountsHandler,
    ListKeysWithAccountsHandler,
)
from accounts.application.queries.list_accounts import (
    ListAccountsQuery,
    ListKeysWithAccountsQuery,
)
from accounts.infrastructure.factory import build_account_directory
from api.v1.admin.serializers import (
    AccessEventListResponseSerializer,
    AccountListResponseSerializer,
    AccountResponseSerializer,
    AdminCredentialsSerializer,
    AdminLicenseKeySerializer,
    CreateAccountSerializer,
    CreateLicenseKeyResponseSerializer,
    CreateLicenseKeySerializer,
    DeleteAccountSerializer,
    DetailedStatsResponseSerializer,
    KeysWithAccountsResponseSerializer,
    LicenseKeyListResponseSerializer,
    ListAccessEventsSerializer,
    ListLicenseKeysSerializer,
    ResetCommentsResponseSerializer,
    ToggleLicenseKeyResponseSerializer,
    UpdateAccountRoleSerializer,
)
from api.v1.responses import validation_failed
from api.v1.serializers import FailureSerializer, SuccessMessageSerializer
from core.http import client_address
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license_key import CreateLicenseKeyCommand
from licenses.application.commands.delete_license_key import DeleteLicenseKeyCommand
from licenses.application.commands.reset_comments import ResetCommentsCommand
from licenses.application.commands.toggle_license_key import ToggleLicenseKeyCommand
from licenses.application.handlers.license_key_admin_handlers import (
    CreateLicenseKeyHandler,
    DeleteLicenseKeyHandler,
    ResetCommentsHandler,
    ToggleLicenseKeyHandler,
)
from licenses.application.handlers.statistics_handlers import (
    GetDetailedStatsHandler,
    ListLicenseKeysHandler,
)
from licenses.application.queries.get_key_statistics import GetDetailedStatsQuery
from licenses.application.queries.list_license_keys import ListLicenseKeysQuery
from licenses.infrastructure.factory import build_key_store
from presence.infrastructure.factory import build_presence_tracker

# Initialize services (in production, use DI container)
_key_store = build_key_store()
_presence_tracker = build_presence_tracker()
_account_directory = build_account_directory()
_access_log = build_access_log()

tracer = get_tracer(__name__)

ADMIN_ERROR_RESPONSES = {
    400: FailureSerializer,
    401: FailureSerializer,
    403: FailureSerializer,
    404: FailureSerializer,
}


def _actor(request: Request) -> str:
    return request.admin_principal.actor


class CreateLicenseKeyView(APIView):
    """View for issuing license keys."""

    @extend_schema(
        operation_id="admin_create_license_key",
        summary="Create License Key",
        description="Issue a new active license key for an owner.",
        tags=["Admin API"],
        request=CreateLicenseKeySerializer,
        responses={201: CreateLicenseKeyResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create a license key."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        """Async handler for create."""
        with tracer.start_as_current_span("admin_create_license_key") as span:
            span.set_attribute("operation", "create_license_key")
            span.set_attribute("actor", _actor(request))

            serializer = CreateLicenseKeySerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = CreateLicenseKeyHandler(key_store=_key_store)
            key = await handler.handle(
                CreateLicenseKeyCommand(
                    owner=serializer.validated_data["owner"],
                    actor=_actor(request),
                    address=client_address(request),
                )
            )

            span.set_attribute("license_key", key.license_key)
            span.set_status(Status(StatusCode.OK))
            return Response(
                CreateLicenseKeyResponseSerializer(
                    {
                        "success": True,
                        "license_key": key.license_key,
                        "message": "License key created",
                        "key": key,
                    }
                ).data,
                status=status.HTTP_201_CREATED,
            )


class ToggleLicenseKeyView(APIView):
    """View for activating and deactivating license keys."""

    @extend_schema(
        operation_id="admin_toggle_license_key",
        summary="Toggle License Key",
        description="Flip the active flag of a license key.",
        tags=["Admin API"],
        request=AdminLicenseKeySerializer,
        responses={200: ToggleLicenseKeyResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Toggle a license key."""
        return async_to_sync(self._handle_toggle)(request)

    async def _handle_toggle(self, request: Request) -> Response:
        """Async handler for toggle."""
        with tracer.start_as_current_span("admin_toggle_license_key") as span:
            span.set_attribute("operation", "toggle_license_key")
            span.set_attribute("actor", _actor(request))

            serializer = AdminLicenseKeySerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = ToggleLicenseKeyHandler(key_store=_key_store)
            active = await handler.handle(
                ToggleLicenseKeyCommand(
                    license_key=serializer.validated_data["license_key"],
                    actor=_actor(request),
                    address=client_address(request),
                )
            )

            span.set_attribute("active", active)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "active": active,
                    "message": "License key activated" if active else "License key deactivated",
                },
                status=status.HTTP_200_OK,
            )


class DeleteLicenseKeyView(APIView):
    """View for deleting license keys."""

    @extend_schema(
        operation_id="admin_delete_license_key",
        summary="Delete License Key",
        description="Delete a license key. Its access history and address sightings are kept.",
        tags=["Admin API"],
        request=AdminLicenseKeySerializer,
        responses={200: SuccessMessageSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Delete a license key."""
        return async_to_sync(self._handle_delete)(request)

    async def _handle_delete(self, request: Request) -> Response:
        """Async handler for delete."""
        with tracer.start_as_current_span("admin_delete_license_key") as span:
            span.set_attribute("operation", "delete_license_key")
            span.set_attribute("actor", _actor(request))

            serializer = AdminLicenseKeySerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = DeleteLicenseKeyHandler(key_store=_key_store)
            await handler.handle(
                DeleteLicenseKeyCommand(
                    license_key=serializer.validated_data["license_key"],
                    actor=_actor(request),
                    address=client_address(request),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "License key deleted"},
                status=status.HTTP_200_OK,
            )


class ResetCommentsView(APIView):
    """View for zeroing the comment counter of a key."""

    @extend_schema(
        operation_id="admin_reset_comments",
        summary="Reset Comments",
        description="Remove every comment_posted event of a license key.",
        tags=["Admin API"],
        request=AdminLicenseKeySerializer,
        responses={200: ResetCommentsResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Reset comments of a license key."""
        return async_to_sync(self._handle_reset)(request)

    async def _handle_reset(self, request: Request) -> Response:
        """Async handler for reset comments."""
        with tracer.start_as_current_span("admin_reset_comments") as span:
            span.set_attribute("operation", "reset_comments")
            span.set_attribute("actor", _actor(request))

            serializer = AdminLicenseKeySerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = ResetCommentsHandler(key_store=_key_store)
            result = await handler.handle(
                ResetCommentsCommand(
                    license_key=serializer.validated_data["license_key"],
                    actor=_actor(request),
                )
            )

            span.set_attribute("deleted_count", result.deleted_count)
            span.set_status(Status(StatusCode.OK))
            return Response(
                ResetCommentsResponseSerializer(
                    {
                        "success": True,
                        "license_key": result.license_key,
                        "deleted_count": result.deleted_count,
                        "message": f"Removed {result.deleted_count} comment events",
                    }
                ).data,
                status=status.HTTP_200_OK,
            )


class ListLicenseKeysView(APIView):
    """View for listing license keys."""

    @extend_schema(
        operation_id="admin_list_license_keys",
        summary="List License Keys",
        description="All license keys, newest first.",
        tags=["Admin API"],
        request=ListLicenseKeysSerializer,
        responses={200: LicenseKeyListResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """List license keys."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        """Async handler for list."""
        with tracer.start_as_current_span("admin_list_license_keys") as span:
            span.set_attribute("operation", "list_license_keys")

            serializer = ListLicenseKeysSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = ListLicenseKeysHandler(key_store=_key_store)
            keys = await handler.handle(
                ListLicenseKeysQuery(active_only=serializer.validated_data["active_only"])
            )

            span.set_attribute("keys.count", len(keys))
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseKeyListResponseSerializer({"success": True, "keys": keys}).data,
                status=status.HTTP_200_OK,
            )


class DetailedStatsView(APIView):
    """View for per-key statistics."""

    @extend_schema(
        operation_id="admin_detailed_stats",
        summary="Detailed Statistics",
        description=(
            "Every license key with online state, comment count and the "
            "addresses it has been seen from."
        ),
        tags=["Admin API"],
        request=AdminCredentialsSerializer,
        responses={200: DetailedStatsResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Get detailed statistics."""
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        """Async handler for detailed stats."""
        with tracer.start_as_current_span("admin_detailed_stats") as span:
            span.set_attribute("operation", "detailed_stats")

            handler = GetDetailedStatsHandler(
                key_store=_key_store, presence_tracker=_presence_tracker
            )
            stats = await handler.handle(GetDetailedStatsQuery())

            span.set_attribute("stats.count", len(stats))
            span.set_status(Status(StatusCode.OK))
            return Response(
                DetailedStatsResponseSerializer({"success": True, "stats": stats}).data,
                status=status.HTTP_200_OK,
            )


class KeysWithAccountsView(APIView):
    """View for license keys grouped with their accounts."""

    @extend_schema(
        operation_id="admin_keys_with_accounts",
        summary="Keys With Accounts",
        description=(
            "Every license key with its comment count and bound operator "
            "accounts, plus admin accounts bound to no key."
        ),
        tags=["Admin API"],
        request=AdminCredentialsSerializer,
        responses={200: KeysWithAccountsResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Get keys with their accounts."""
        return async_to_sync(self._handle_keys_with_accounts)(request)

    async def _handle_keys_with_accounts(self, request: Request) -> Response:
        """Async handler for keys with accounts."""
        with tracer.start_as_current_span("admin_keys_with_accounts") as span:
            span.set_attribute("operation", "keys_with_accounts")

            handler = ListKeysWithAccountsHandler(
                account_directory=_account_directory, key_store=_key_store
            )
            overview = await handler.handle(ListKeysWithAccountsQuery())

            span.set_status(Status(StatusCode.OK))
            return Response(
                KeysWithAccountsResponseSerializer(
                    {
                        "success": True,
                        "keys_with_accounts": overview.keys_with_accounts,
                        "admins_without_keys": overview.admins_without_keys,
                    }
                ).data,
                status=status.HTTP_200_OK,
            )


class AccessEventsView(APIView):
    """View for the access log."""

    @extend_schema(
        operation_id="admin_access_events",
        summary="Access Log",
        description="Most recent access events, newest first.",
        tags=["Admin API"],
        request=ListAccessEventsSerializer,
        responses={200: AccessEventListResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """List access events."""
        return async_to_sync(self._handle_logs)(request)

    async def _handle_logs(self, request: Request) -> Response:
        """Async handler for access events."""
        with tracer.start_as_current_span("admin_access_events") as span:
            span.set_attribute("operation", "access_events")

            serializer = ListAccessEventsSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = ListAccessEventsHandler(access_log=_access_log)
            events = await handler.handle(
                ListAccessEventsQuery(limit=serializer.validated_data.get("limit"))
            )

            span.set_attribute("logs.count", len(events))
            span.set_status(Status(StatusCode.OK))
            return Response(
                AccessEventListResponseSerializer({"success": True, "logs": events}).data,
                status=status.HTTP_200_OK,
            )


class ListAccountsView(APIView):
    """View for listing accounts."""

    @extend_schema(
        operation_id="admin_list_accounts",
        summary="List Accounts",
        description="All accounts except the creator, newest first.",
        tags=["Admin API"],
        request=AdminCredentialsSerializer,
        responses={200: AccountListResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """List accounts."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        """Async handler for list accounts."""
        with tracer.start_as_current_span("admin_list_accounts") as span:
            span.set_attribute("operation", "list_accounts")

            handler = ListAccountsHandler(account_directory=_account_directory)
            accounts = await handler.handle(ListAccountsQuery())

            span.set_attribute("accounts.count", len(accounts))
            span.set_status(Status(StatusCode.OK))
            return Response(
                AccountListResponseSerializer({"success": True, "accounts": accounts}).data,
                status=status.HTTP_200_OK,
            )


class CreateAccountView(APIView):
    """View for creating accounts."""

    @extend_schema(
        operation_id="admin_create_account",
        summary="Create Account",
        description=(
            "Create an admin or operator account. Operators must be bound to an "
            "existing license key; admins must not be bound to any."
        ),
        tags=["Admin API"],
        request=CreateAccountSerializer,
        responses={201: AccountResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create an account."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        """Async handler for create account."""
        with tracer.start_as_current_span("admin_create_account") as span:
            span.set_attribute("operation", "create_account")
            span.set_attribute("actor", _actor(request))

            serializer = CreateAccountSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            data = serializer.validated_data
            handler = CreateAccountHandler(account_directory=_account_directory)
            account = await handler.handle(
                CreateAccountCommand(
                    username=data["new_username"],
                    password=data["new_password"],
                    role=data["role"],
                    license_key=data.get("license_key"),
                    actor=_actor(request),
                )
            )

            span.set_attribute("role", account.role)
            span.set_status(Status(StatusCode.OK))
            return Response(
                AccountResponseSerializer(
                    {"success": True, "message": "Account created", "account": account}
                ).data,
                status=status.HTTP_201_CREATED,
            )


class UpdateAccountRoleView(APIView):
    """View for changing account roles."""

    @extend_schema(
        operation_id="admin_update_account_role",
        summary="Update Account Role",
        description="Change the role and bound key of an account. The creator cannot be changed.",
        tags=["Admin API"],
        request=UpdateAccountRoleSerializer,
        responses={200: AccountResponseSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Update an account role."""
        return async_to_sync(self._handle_update)(request)

    async def _handle_update(self, request: Request) -> Response:
        """Async handler for update role."""
        with tracer.start_as_current_span("admin_update_account_role") as span:
            span.set_attribute("operation", "update_account_role")
            span.set_attribute("actor", _actor(request))

            serializer = UpdateAccountRoleSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            data = serializer.validated_data
            handler = UpdateAccountRoleHandler(account_directory=_account_directory)
            account = await handler.handle(
                UpdateAccountRoleCommand(
                    username=data["target_username"],
                    new_role=data["new_role"],
                    new_license_key=data.get("new_license_key"),
                    actor=_actor(request),
                )
            )

            span.set_attribute("role", account.role)
            span.set_status(Status(StatusCode.OK))
            return Response(
                AccountResponseSerializer(
                    {"success": True, "message": "Account role updated", "account": account}
                ).data,
                status=status.HTTP_200_OK,
            )


class DeleteAccountView(APIView):
    """View for deleting accounts."""

    @extend_schema(
        operation_id="admin_delete_account",
        summary="Delete Account",
        description="Delete an account. The creator cannot be deleted.",
        tags=["Admin API"],
        request=DeleteAccountSerializer,
        responses={200: SuccessMessageSerializer, **ADMIN_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Delete an account."""
        return async_to_sync(self._handle_delete)(request)

    async def _handle_delete(self, request: Request) -> Response:
        """Async handler for delete account."""
        with tracer.start_as_current_span("admin_delete_account") as span:
            span.set_attribute("operation", "delete_account")
            span.set_attribute("actor", _actor(request))

            serializer = DeleteAccountSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer)

            handler = DeleteAccountHandler(account_directory=_account_directory)
            await handler.handle(
                DeleteAccountCommand(
                    username=serializer.validated_data["target_username"],
                    actor=_actor(request),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Account deleted"},
                status=status.HTTP_200_OK,
            )
