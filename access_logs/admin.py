"""
Django admin configuration for access_logs app.
"""
from django.contrib import admin

from access_logs.infrastructure.models import AccessEvent


@admin.register(AccessEvent)
class AccessEventAdmin(admin.ModelAdmin):
    """Admin interface for AccessEvent model."""

    list_display = ["timestamp", "license_key", "action", "status", "address"]
    list_filter = ["action", "status", "timestamp"]
    search_fields = ["license_key", "address"]
    readonly_fields = ["id", "license_key", "action", "status", "address", "timestamp"]

    def has_add_permission(self, request):
        """Access events are read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Access events are read-only."""
        return False
