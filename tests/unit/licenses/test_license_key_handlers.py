"""
Unit tests for license key command and query handlers.
"""
from datetime import timedelta

import pytest

from core.domain.events import EventHandler
from core.infrastructure.events import InMemoryEventBus
from licenses.application.commands.create_license_key import CreateLicenseKeyCommand
from licenses.application.commands.reset_comments import ResetCommentsCommand
from licenses.application.commands.toggle_license_key import ToggleLicenseKeyCommand
from licenses.application.commands.verify_license_key import VerifyLicenseKeyCommand
from licenses.application.handlers.client_handlers import VerifyLicenseKeyHandler
from licenses.application.handlers.license_key_admin_handlers import (
    CreateLicenseKeyHandler,
    ResetCommentsHandler,
    ToggleLicenseKeyHandler,
)
from licenses.application.handlers.statistics_handlers import (
    GetDetailedStatsHandler,
    GetOperatorStatsHandler,
    GetPublicStatsHandler,
)
from licenses.application.queries.get_key_statistics import (
    GetDetailedStatsQuery,
    GetOperatorStatsQuery,
    GetPublicStatsQuery,
)
from licenses.domain.events import CommentsReset, LicenseKeyCreated, LicenseKeyToggled


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def recorded_events(monkeypatch):
    """Route handler events to a private bus and record them."""
    bus = InMemoryEventBus()
    recorder = RecordingHandler()
    for event_type in (LicenseKeyCreated, LicenseKeyToggled, CommentsReset):
        bus.subscribe(event_type, recorder)
    monkeypatch.setattr(
        "licenses.application.handlers.license_key_admin_handlers.event_bus", bus
    )
    return recorder.events


class TestAdminHandlers:
    """Tests for license key admin handlers."""

    @pytest.mark.asyncio
    async def test_create_publishes_event(self, key_store, recorded_events):
        """Test creating a key returns its DTO and publishes LicenseKeyCreated."""
        dto = await CreateLicenseKeyHandler(key_store).handle(
            CreateLicenseKeyCommand(owner="Alice", actor="creator")
        )

        assert dto.owner == "Alice"
        assert dto.active is True
        assert dto.is_online is False
        (event,) = recorded_events
        assert isinstance(event, LicenseKeyCreated)
        assert event.aggregate_id == dto.license_key
        assert event.actor == "creator"

    @pytest.mark.asyncio
    async def test_toggle_publishes_new_state(self, key_store, recorded_events):
        """Test toggling publishes the new active flag."""
        key = await key_store.create("Alice")

        active = await ToggleLicenseKeyHandler(key_store).handle(
            ToggleLicenseKeyCommand(license_key=key.key, actor="creator")
        )

        assert active is False
        assert recorded_events[-1].active is False

    @pytest.mark.asyncio
    async def test_reset_comments_result(self, key_store, recorded_events):
        """Test reset reports the removed count."""
        key = await key_store.create("Alice")
        await key_store.log_comment(key.key)
        await key_store.log_comment(key.key)

        result = await ResetCommentsHandler(key_store).handle(
            ResetCommentsCommand(license_key=key.key, actor="creator")
        )

        assert result.license_key == key.key
        assert result.deleted_count == 2
        assert recorded_events[-1].deleted_count == 2


class TestClientHandlers:
    """Tests for client handlers."""

    @pytest.mark.asyncio
    async def test_verify_dto(self, key_store):
        """Test the verification DTO carries the outcome message."""
        key = await key_store.create("Alice")
        handler = VerifyLicenseKeyHandler(key_store)

        valid = await handler.handle(VerifyLicenseKeyCommand(license_key=key.key))
        invalid = await handler.handle(VerifyLicenseKeyCommand(license_key="TW-NOPE"))

        assert (valid.valid, valid.owner, valid.message) == (
            True,
            "Alice",
            "License key is valid",
        )
        assert (invalid.valid, invalid.owner) == (False, None)


class TestStatisticsHandlers:
    """Tests for statistics handlers."""

    @pytest.mark.asyncio
    async def test_public_stats_ranking(self, key_store, clock):
        """Test public stats rank active keys by comments and hide keys."""
        quiet = await key_store.create("Quiet")
        clock.advance(timedelta(seconds=1))
        busy = await key_store.create("Busy")
        clock.advance(timedelta(seconds=1))
        hidden = await key_store.create("Hidden")
        for _ in range(3):
            await key_store.log_comment(busy.key)
        await key_store.log_comment(hidden.key)
        await key_store.toggle_active(hidden.key)

        stats = await GetPublicStatsHandler(key_store).handle(GetPublicStatsQuery())

        assert [(s.owner, s.comments_count) for s in stats] == [("Busy", 3), ("Quiet", 0)]
        assert all(not hasattr(s, "license_key") for s in stats)
        assert quiet.key not in repr(stats)

    @pytest.mark.asyncio
    async def test_operator_stats(self, key_store, presence_tracker):
        """Test operator stats for one key."""
        key = await key_store.create("Alice")
        await key_store.record_heartbeat(key.key, "10.0.0.1")
        await key_store.record_heartbeat(key.key, "10.0.0.2")
        await key_store.log_comment(key.key)

        stats = await GetOperatorStatsHandler(key_store, presence_tracker).handle(
            GetOperatorStatsQuery(license_key=key.key)
        )

        assert stats.license_key == key.key
        assert stats.is_online is True
        assert stats.comments_count == 1
        assert stats.unique_addresses == 2
        assert {a.address for a in stats.addresses} == {"10.0.0.1", "10.0.0.2"}

    @pytest.mark.asyncio
    async def test_detailed_stats_cover_every_key(self, key_store, presence_tracker):
        """Test detailed stats include inactive keys."""
        alice = await key_store.create("Alice")
        await key_store.create("Bob")
        await key_store.toggle_active(alice.key)

        stats = await GetDetailedStatsHandler(key_store, presence_tracker).handle(
            GetDetailedStatsQuery()
        )

        assert {s.owner for s in stats} == {"Alice", "Bob"}
