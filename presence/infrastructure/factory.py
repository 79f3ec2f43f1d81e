"""
Presence wiring.
"""
from presence.domain.services import PresenceTracker
from presence.infrastructure.repositories.django_address_sighting_repository import (
    DjangoAddressSightingRepository,
)


def build_presence_tracker() -> PresenceTracker:
    """Build the PresenceTracker over the Django repository."""
    return PresenceTracker(repository=DjangoAddressSightingRepository())
