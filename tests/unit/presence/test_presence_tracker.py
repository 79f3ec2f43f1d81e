"""
Unit tests for PresenceTracker and AddressSighting.
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import ValidationError
from presence.domain.address_sighting import AddressSighting
from presence.domain.services import PresenceTracker
from tests.fakes import InMemoryAddressSightingRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestAddressSighting:
    """Tests for AddressSighting entity."""

    def test_first_sighting(self):
        """Test first sighting has equal first and last times."""
        sighting = AddressSighting.first("TW-A", "10.0.0.1", NOW)
        assert sighting.first_seen_at == sighting.last_seen_at == NOW
        assert str(sighting.address) == "10.0.0.1"

    def test_seen_again_moves_forward_only(self):
        """Test last_seen_at never decreases."""
        sighting = AddressSighting.first("TW-A", "10.0.0.1", NOW)
        later = sighting.seen_again(NOW + timedelta(minutes=1))
        stale = later.seen_again(NOW + timedelta(seconds=10))

        assert later.last_seen_at == NOW + timedelta(minutes=1)
        assert stale.last_seen_at == NOW + timedelta(minutes=1)
        assert stale.first_seen_at == NOW

    def test_last_before_first_rejected(self):
        """Test an inconsistent sighting is rejected."""
        with pytest.raises(ValueError):
            AddressSighting(
                license_key="TW-A",
                address=AddressSighting.first("TW-A", "10.0.0.1", NOW).address,
                first_seen_at=NOW,
                last_seen_at=NOW - timedelta(seconds=1),
            )


class TestPresenceTracker:
    """Tests for PresenceTracker service."""

    @pytest.fixture
    def tracker(self):
        return PresenceTracker(InMemoryAddressSightingRepository())

    @pytest.mark.asyncio
    async def test_record_is_idempotent_per_address(self, tracker):
        """Test repeated sightings keep one row per address."""
        await tracker.record("TW-A", "10.0.0.1", NOW)
        await tracker.record("TW-A", "10.0.0.1", NOW + timedelta(seconds=30))

        assert await tracker.unique_address_count("TW-A") == 1

    @pytest.mark.asyncio
    async def test_addresses_most_recent_first(self, tracker):
        """Test sightings are listed by last sighting, newest first."""
        await tracker.record("TW-A", "10.0.0.1", NOW)
        await tracker.record("TW-A", "10.0.0.2", NOW + timedelta(seconds=5))
        await tracker.record("TW-B", "10.0.0.3", NOW)

        addresses = [str(s.address) for s in await tracker.addresses_for("TW-A")]

        assert addresses == ["10.0.0.2", "10.0.0.1"]

    @pytest.mark.asyncio
    async def test_record_rejects_bad_address(self, tracker):
        """Test empty and over-long addresses are rejected."""
        with pytest.raises(ValidationError):
            await tracker.record("TW-A", "", NOW)
        with pytest.raises(ValidationError):
            await tracker.record("TW-A", "9" * 46, NOW)
