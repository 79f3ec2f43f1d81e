"""
Django admin configuration for presence app.
"""
from django.contrib import admin

from presence.infrastructure.models import AddressSighting


@admin.register(AddressSighting)
class AddressSightingAdmin(admin.ModelAdmin):
    """Admin interface for AddressSighting model."""

    list_display = ["license_key", "address", "first_seen_at", "last_seen_at"]
    list_filter = ["last_seen_at"]
    search_fields = ["license_key", "address"]
    readonly_fields = ["license_key", "address", "first_seen_at", "last_seen_at"]

    def has_add_permission(self, request):
        """Sightings are recorded by heartbeats only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Sightings are read-only."""
        return False
