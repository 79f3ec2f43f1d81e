"""
Model registry for the access_logs app.
"""
from access_logs.infrastructure.models import AccessEvent  # noqa: F401
