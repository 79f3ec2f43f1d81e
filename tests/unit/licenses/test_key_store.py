"""
Unit tests for the KeyStore domain service.
"""
import asyncio
from datetime import timedelta

import pytest

from core.domain.exceptions import LicenseKeyNotFoundError, ValidationError
from core.domain.value_objects import AccessAction, AccessStatus
from licenses.domain.services import KeyStore
from tests.fakes import FailingAccessEventRepository, build_services


class TestKeyStoreCreate:
    """Tests for issuing keys."""

    @pytest.mark.asyncio
    async def test_create_and_verify(self, key_store, access_log):
        """Test a new key verifies with its owner."""
        key = await key_store.create("Alice")

        result = await key_store.verify(key.key)

        assert result.valid is True
        assert result.owner == "Alice"
        assert result.message == "License key is valid"
        successes = [e for e in await access_log.recent() if e.status == AccessStatus.SUCCESS]
        assert [e.action for e in successes] == ["verify", "create"]

    @pytest.mark.asyncio
    async def test_create_requires_owner(self, key_store):
        """Test an empty owner is rejected."""
        with pytest.raises(ValidationError):
            await key_store.create("   ")

    @pytest.mark.asyncio
    async def test_create_rejects_long_owner(self, key_store):
        """Test an over-long owner is rejected."""
        with pytest.raises(ValidationError):
            await key_store.create("x" * 256)

    @pytest.mark.asyncio
    async def test_create_retries_on_collision(self, key_store, monkeypatch):
        """Test a colliding generated key is replaced by a fresh one."""
        existing = await key_store.create("Alice")
        candidates = iter([existing.key, "TW-FRESHKEY0001"])
        monkeypatch.setattr(
            "licenses.domain.license_key.generate_license_key", lambda: next(candidates)
        )

        created = await key_store.create("Bob")

        assert created.key == "TW-FRESHKEY0001"
        assert created.owner == "Bob"


class TestKeyStoreVerify:
    """Tests for verification outcomes."""

    @pytest.mark.asyncio
    async def test_unknown_key(self, key_store, access_log):
        """Test verifying a key that was never issued."""
        result = await key_store.verify("TW-NOPE")

        assert result.valid is False
        assert result.reason == AccessStatus.INVALID_KEY
        assert result.message == "Invalid license key"
        (event,) = await access_log.recent()
        assert (event.action, event.status, event.license_key) == (
            "verify",
            "invalid_key",
            "TW-NOPE",
        )

    @pytest.mark.asyncio
    async def test_toggle_deactivates_and_restores(self, key_store):
        """Test toggling twice restores a valid key."""
        key = await key_store.create("Alice")

        assert await key_store.toggle_active(key.key) is False
        inactive = await key_store.verify(key.key)
        assert inactive.valid is False
        assert inactive.reason == AccessStatus.INACTIVE
        assert inactive.message == "License key is inactive"

        assert await key_store.toggle_active(key.key) is True
        assert (await key_store.verify(key.key)).valid is True

    @pytest.mark.asyncio
    async def test_verify_stamps_last_used(self, key_store, clock):
        """Test a valid verification stamps last_used_at."""
        key = await key_store.create("Alice")
        clock.advance(timedelta(minutes=5))

        await key_store.verify(key.key)

        assert (await key_store.get(key.key)).last_used_at == clock.now

    @pytest.mark.asyncio
    async def test_over_long_key_is_invalid(self, key_store, access_log):
        """Test an over-long key is reported as invalid and logged truncated."""
        result = await key_store.verify("K" * 200)

        assert result.valid is False
        (event,) = await access_log.recent()
        assert len(event.license_key) == 50

    @pytest.mark.asyncio
    async def test_failed_journal_never_fails_verify(self, clock):
        """Test verification succeeds while the access journal is down."""
        services = build_services(clock, access_repository=FailingAccessEventRepository())
        key = await services["key_store"].create("Alice")

        result = await services["key_store"].verify(key.key)

        assert result.valid is True


class TestKeyStoreHeartbeat:
    """Tests for heartbeats and presence."""

    @pytest.mark.asyncio
    async def test_heartbeat_then_online(self, key_store, clock):
        """Test a key is online after a heartbeat and offline after the window."""
        key = await key_store.create("Alice")

        await key_store.record_heartbeat(key.key, "10.0.0.1")
        assert await key_store.is_online(key.key) is True

        clock.advance(timedelta(seconds=61))
        assert await key_store.is_online(key.key) is False

    @pytest.mark.asyncio
    async def test_heartbeat_stamps_key(self, key_store, clock):
        """Test heartbeat sets last address and time."""
        key = await key_store.create("Alice")

        await key_store.record_heartbeat(key.key, "10.0.0.1")

        stored = await key_store.get(key.key)
        assert stored.last_address == "10.0.0.1"
        assert stored.last_heartbeat_at == clock.now

    @pytest.mark.asyncio
    async def test_repeat_address_counts_once(self, key_store, presence_tracker, clock):
        """Test N heartbeats from one address yield one sighting."""
        key = await key_store.create("Alice")
        first_seen = clock.now

        for _ in range(5):
            await key_store.record_heartbeat(key.key, "10.0.0.1")
            clock.advance(timedelta(seconds=10))

        assert await presence_tracker.unique_address_count(key.key) == 1
        (sighting,) = await presence_tracker.addresses_for(key.key)
        assert sighting.first_seen_at == first_seen
        assert sighting.last_seen_at == first_seen + timedelta(seconds=40)

    @pytest.mark.asyncio
    async def test_distinct_addresses_counted(self, key_store, presence_tracker):
        """Test M distinct addresses yield M sightings."""
        key = await key_store.create("Alice")

        for n in range(4):
            await key_store.record_heartbeat(key.key, f"10.0.0.{n}")

        assert await presence_tracker.unique_address_count(key.key) == 4

    @pytest.mark.asyncio
    async def test_concurrent_heartbeats(self, key_store, presence_tracker):
        """Test simultaneous heartbeats from two addresses both land."""
        key = await key_store.create("Alice")

        await asyncio.gather(
            key_store.record_heartbeat(key.key, "10.0.0.1"),
            key_store.record_heartbeat(key.key, "10.0.0.2"),
        )

        assert await presence_tracker.unique_address_count(key.key) == 2

    @pytest.mark.asyncio
    async def test_heartbeat_unknown_key(self, key_store, presence_tracker, access_log):
        """Test heartbeat on an unknown key records only the failed attempt."""
        with pytest.raises(LicenseKeyNotFoundError):
            await key_store.record_heartbeat("TW-NOPE", "10.0.0.1")

        assert await presence_tracker.unique_address_count("TW-NOPE") == 0
        (event,) = await access_log.recent()
        assert (event.action, event.status) == ("heartbeat", "invalid_key")

    @pytest.mark.asyncio
    async def test_heartbeat_requires_address(self, key_store):
        """Test heartbeat rejects an empty address."""
        key = await key_store.create("Alice")
        with pytest.raises(ValidationError):
            await key_store.record_heartbeat(key.key, "")


class TestKeyStoreComments:
    """Tests for comment counting."""

    @pytest.mark.asyncio
    async def test_log_comment_unknown_key(self, key_store):
        """Test comments need an existing key."""
        with pytest.raises(LicenseKeyNotFoundError):
            await key_store.log_comment("TW-NOPE")

    @pytest.mark.asyncio
    async def test_reset_comments_is_selective(self, key_store, access_log):
        """Test reset removes exactly the comment events of one key."""
        alice = await key_store.create("Alice")
        bob = await key_store.create("Bob")
        for _ in range(3):
            await key_store.log_comment(alice.key)
        await key_store.log_comment(bob.key)
        await key_store.verify(alice.key)
        await key_store.record_heartbeat(alice.key, "10.0.0.1")

        deleted = await key_store.reset_comments(alice.key)

        assert deleted == 3
        assert await key_store.comment_count(alice.key) == 0
        assert await key_store.comment_count(bob.key) == 1
        remaining = {(e.license_key, e.action) for e in await access_log.recent()}
        assert (alice.key, "verify") in remaining
        assert (alice.key, "heartbeat") in remaining
        assert (alice.key, str(AccessAction.COMMENT_POSTED)) not in remaining

    @pytest.mark.asyncio
    async def test_reset_comments_requires_key(self, key_store):
        """Test reset needs a key."""
        with pytest.raises(ValidationError):
            await key_store.reset_comments("")


class TestKeyStoreDelete:
    """Tests for deleting keys."""

    @pytest.mark.asyncio
    async def test_delete_then_verify(self, key_store, access_log):
        """Test a deleted key no longer verifies but its history stays."""
        key = await key_store.create("Alice")

        await key_store.delete(key.key)

        assert (await key_store.verify(key.key)).valid is False
        actions = [e.action for e in await access_log.recent()]
        assert actions == ["verify", "delete", "create"]

    @pytest.mark.asyncio
    async def test_delete_unknown_key(self, key_store):
        """Test deleting a missing key."""
        with pytest.raises(LicenseKeyNotFoundError):
            await key_store.delete("TW-NOPE")

    @pytest.mark.asyncio
    async def test_toggle_unknown_key(self, key_store):
        """Test toggling a missing key."""
        with pytest.raises(LicenseKeyNotFoundError):
            await key_store.toggle_active("TW-NOPE")


def test_default_online_window(key_store):
    """Test the key store defaults to a sixty second window."""
    assert isinstance(key_store, KeyStore)
    assert key_store.online_window == timedelta(seconds=60)
