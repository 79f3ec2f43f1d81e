"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin interface for Account model."""

    list_display = ["username", "role", "bound_license_key", "last_login_at", "created_at"]
    list_filter = ["role", "created_at"]
    search_fields = ["username", "bound_license_key"]
    readonly_fields = ["username", "password", "created_at", "last_login_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("username", "role", "bound_license_key"),
            },
        ),
        (
            "Credentials",
            {
                "fields": ("password", "last_login_at"),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
            },
        ),
    )

    def has_add_permission(self, request):
        """Accounts are created through the admin API only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """The creator account is never deleted."""
        if obj is not None and obj.role == "creator":
            return False
        return super().has_delete_permission(request, obj)
