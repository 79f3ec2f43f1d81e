"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import LicenseKey


@admin.register(LicenseKey)
class LicenseKeyAdmin(admin.ModelAdmin):
    """Admin interface for LicenseKey model."""

    list_display = [
        "license_key",
        "owner",
        "active_display",
        "last_used_at",
        "last_heartbeat_at",
        "last_address",
        "created_at",
    ]
    list_filter = ["active", "created_at"]
    search_fields = ["license_key", "owner", "last_address"]
    readonly_fields = [
        "license_key",
        "created_at",
        "last_used_at",
        "last_heartbeat_at",
        "last_address",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("license_key", "owner", "active"),
            },
        ),
        (
            "Usage",
            {
                "fields": ("last_used_at", "last_heartbeat_at", "last_address"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def active_display(self, obj):
        """Display active flag with color coding."""
        if obj.active:
            return format_html('<span style="color: green; font-weight: bold;">ACTIVE</span>')
        return format_html('<span style="color: gray; font-weight: bold;">INACTIVE</span>')

    active_display.short_description = "Status"

    def has_add_permission(self, request):
        """Keys are issued through the admin API only."""
        return False
