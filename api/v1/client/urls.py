"""
URL configuration for client API endpoints.
"""

from django.urls import path

from api.v1.client import views

urlpatterns = [
    path("verify", views.VerifyLicenseKeyView.as_view(), name="verify-license-key"),
    path("heartbeat", views.HeartbeatView.as_view(), name="heartbeat"),
    path("log-comment", views.LogCommentView.as_view(), name="log-comment"),
    path("stats", views.PublicStatsView.as_view(), name="public-stats"),
    path("login", views.LoginView.as_view(), name="login"),
    path("operator/stats", views.OperatorStatsView.as_view(), name="operator-stats"),
]
