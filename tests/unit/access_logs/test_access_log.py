"""
Unit tests for the AccessLog service and the bounded memory journal.
"""
from datetime import datetime, timedelta, timezone

import pytest

from access_logs.domain.access_event import AccessEvent
from access_logs.domain.services import AccessLog
from access_logs.infrastructure.repositories.memory_access_event_repository import (
    BoundedMemoryAccessEventRepository,
)
from core.domain.value_objects import AccessAction, AccessStatus
from tests.fakes import FailingAccessEventRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestAccessEvent:
    """Tests for AccessEvent entity."""

    def test_record_normalizes_fields(self):
        """Test record() stores string actions and empty keys."""
        event = AccessEvent.record(None, AccessAction.ACCOUNT_CREATED, "success", NOW, "")
        assert event.license_key == ""
        assert event.action == "account_created"
        assert event.address is None

    def test_status_required(self):
        """Test an event needs a status."""
        with pytest.raises(ValueError):
            AccessEvent.record("TW-A", AccessAction.VERIFY, "", NOW)


class TestAccessLog:
    """Tests for AccessLog service."""

    @pytest.fixture
    def access_log(self):
        return AccessLog(
            repository=BoundedMemoryAccessEventRepository(max_events=50),
            recent_limit=10,
            clock=lambda: NOW,
        )

    @pytest.mark.asyncio
    async def test_append_and_recent(self, access_log):
        """Test events come back newest first."""
        for n in range(3):
            await access_log.append(
                f"TW-{n}",
                AccessAction.VERIFY,
                AccessStatus.SUCCESS,
                "10.0.0.1",
                NOW + timedelta(seconds=n),
            )

        events = await access_log.recent()

        assert [e.license_key for e in events] == ["TW-2", "TW-1", "TW-0"]
        assert all(e.id is not None for e in events)

    @pytest.mark.asyncio
    async def test_recent_defaults_to_limit(self, access_log):
        """Test recent() honours the configured default limit."""
        for _ in range(15):
            await access_log.append("TW-A", AccessAction.VERIFY, AccessStatus.SUCCESS)

        assert len(await access_log.recent()) == 10
        assert len(await access_log.recent(3)) == 3

    @pytest.mark.asyncio
    async def test_append_failure_is_swallowed(self):
        """Test a failing journal never raises to the caller."""
        access_log = AccessLog(repository=FailingAccessEventRepository())

        result = await access_log.append("TW-A", AccessAction.VERIFY, AccessStatus.SUCCESS)

        assert result is None

    @pytest.mark.asyncio
    async def test_purge_counts(self, access_log):
        """Test purge removes only matching events and returns the count."""
        await access_log.append("TW-A", AccessAction.COMMENT_POSTED, AccessStatus.SUCCESS)
        await access_log.append("TW-A", AccessAction.COMMENT_POSTED, AccessStatus.SUCCESS)
        await access_log.append("TW-A", AccessAction.VERIFY, AccessStatus.SUCCESS)

        assert await access_log.purge("TW-A", AccessAction.COMMENT_POSTED) == 2
        assert await access_log.count_by_action("TW-A", AccessAction.COMMENT_POSTED) == 0
        assert await access_log.count_by_action("TW-A", AccessAction.VERIFY) == 1

    @pytest.mark.asyncio
    async def test_enforce_retention(self, access_log):
        """Test retention keeps the newest events."""
        for n in range(8):
            await access_log.append(f"TW-{n}", AccessAction.VERIFY, AccessStatus.SUCCESS)

        deleted = await access_log.enforce_retention(keep=5)

        assert deleted == 3
        assert await access_log.size() == 5
        assert (await access_log.recent())[-1].license_key == "TW-3"


class TestBoundedMemoryAccessEventRepository:
    """Tests for the bounded in-memory journal."""

    @pytest.mark.asyncio
    async def test_evicts_oldest(self):
        """Test the buffer never exceeds its cap."""
        repository = BoundedMemoryAccessEventRepository(max_events=3)
        for n in range(5):
            await repository.insert(AccessEvent.record(f"TW-{n}", "verify", "success", NOW))

        assert await repository.count() == 3
        assert [e.license_key for e in await repository.recent(10)] == ["TW-4", "TW-3", "TW-2"]

    def test_rejects_non_positive_cap(self):
        """Test the cap must be positive."""
        with pytest.raises(ValueError):
            BoundedMemoryAccessEventRepository(max_events=0)
