"""
HTTP request helpers shared by middleware and views.
"""

from typing import Optional

from django.http import HttpRequest

from core.domain.value_objects import MAX_ADDRESS_LENGTH


def client_address(request: HttpRequest) -> Optional[str]:
    """
    Source address of the caller.

    First entry of ``X-Forwarded-For`` when present, else ``REMOTE_ADDR``,
    cut to the width of the address columns.
    """
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR", "")
    address = forwarded_for.split(",")[0].strip() if forwarded_for else ""
    if not address:
        address = (request.META.get("REMOTE_ADDR") or "").strip()
    return address[:MAX_ADDRESS_LENGTH] or None
