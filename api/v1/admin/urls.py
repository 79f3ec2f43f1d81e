"""
Admin API URLs.
"""
from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path("keys", views.ListLicenseKeysView.as_view(), name="admin-list-keys"),
    path("keys/create", views.CreateLicenseKeyView.as_view(), name="admin-create-key"),
    path("keys/toggle", views.ToggleLicenseKeyView.as_view(), name="admin-toggle-key"),
    path("keys/delete", views.DeleteLicenseKeyView.as_view(), name="admin-delete-key"),
    path(
        "keys/reset-comments",
        views.ResetCommentsView.as_view(),
        name="admin-reset-comments",
    ),
    path(
        "keys/with-accounts",
        views.KeysWithAccountsView.as_view(),
        name="admin-keys-with-accounts",
    ),
    path("stats/detailed", views.DetailedStatsView.as_view(), name="admin-detailed-stats"),
    path("logs", views.AccessEventsView.as_view(), name="admin-logs"),
    path("accounts", views.ListAccountsView.as_view(), name="admin-list-accounts"),
    path("accounts/create", views.CreateAccountView.as_view(), name="admin-create-account"),
    path(
        "accounts/update-role",
        views.UpdateAccountRoleView.as_view(),
        name="admin-update-account-role",
    ),
    path("accounts/delete", views.DeleteAccountView.as_view(), name="admin-delete-account"),
]
