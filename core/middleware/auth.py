"""
Administrative authorization middleware.

This middleware resolves an administrative role for every request
to the admin API before any view runs.
"""

import json
import logging
from typing import Optional, Tuple

from asgiref.sync import async_to_sync
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from accounts.infrastructure.factory import build_authorization_gate
from core.domain.exceptions import StoreUnavailableError, UnauthorizedError
from core.metrics import admin_auth_failures_total

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"
USERNAME_HEADER = "HTTP_X_ADMIN_USERNAME"
PASSWORD_HEADER = "HTTP_X_ADMIN_PASSWORD"


class AdminAuthorizationMiddleware(MiddlewareMixin):
    """
    Middleware gating the admin API.

    This middleware:
    1. Reads caller credentials from the JSON body (``username``/``password``)
       or the ``X-Admin-Username``/``X-Admin-Password`` headers
    2. Asks the AuthorizationGate for an admin or creator role
    3. Sets ``request.admin_principal`` or returns 401 without running the view
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and authorize admin calls.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401/500 if the call is rejected, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None

        username, password = self._extract_credentials(request)
        gate = build_authorization_gate()
        try:
            request.admin_principal = async_to_sync(gate.authorize)(username, password)
        except UnauthorizedError as exc:
            admin_auth_failures_total.inc()
            logger.warning(
                "Rejected admin request",
                extra={"path": request.path, "method": request.method},
            )
            return JsonResponse(
                {"success": False, "code": exc.code, "message": exc.message},
                status=401,
            )
        except StoreUnavailableError:
            logger.error("Store unavailable while authorizing %s", request.path)
            return JsonResponse(
                {
                    "success": False,
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                },
                status=500,
            )
        return None

    def _extract_credentials(self, request: HttpRequest) -> Tuple[Optional[str], Optional[str]]:
        """
        Read credentials from the JSON body, falling back to headers.

        A body that is not a JSON object carries no credentials.
        """
        body = {}
        if request.body:
            try:
                body = json.loads(request.body)
            except ValueError:
                logger.debug("Admin request body is not JSON: %s", request.path)
            if not isinstance(body, dict):
                body = {}

        username = body.get("username") or request.META.get(USERNAME_HEADER)
        password = body.get("password") or request.META.get(PASSWORD_HEADER)
        return (
            username if isinstance(username, str) else None,
            password if isinstance(password, str) else None,
        )
