"""
Model registry for the presence app.
"""
from presence.infrastructure.models import AddressSighting  # noqa: F401
