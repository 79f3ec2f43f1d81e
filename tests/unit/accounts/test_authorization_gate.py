"""
Unit tests for AuthorizationGate.
"""
import pytest

from accounts.domain.authorization import AuthorizationGate
from core.domain.exceptions import UnauthorizedError
from core.domain.value_objects import Role


class TestAuthorizationGate:
    """Tests for AuthorizationGate."""

    @pytest.mark.asyncio
    async def test_creator_authorized(self, gate):
        """Test the creator is granted its role."""
        principal = await gate.authorize("creator", "creator-secret")
        assert principal.role == Role.CREATOR
        assert principal.actor == "creator"

    @pytest.mark.asyncio
    async def test_admin_authorized(self, gate, account_directory):
        """Test admin accounts are granted admin."""
        await account_directory.create("alice", "pw", "admin")

        principal = await gate.authorize("alice", "pw")

        assert principal.role == Role.ADMIN
        assert principal.legacy is False

    @pytest.mark.asyncio
    async def test_operator_rejected(self, gate, account_directory, key_store):
        """Test operators never reach the admin surface."""
        key = await key_store.create("Alice")
        await account_directory.create("op", "pw", "operator", key.key)

        with pytest.raises(UnauthorizedError):
            await gate.authorize("op", "pw")

    @pytest.mark.asyncio
    async def test_rejections_are_indistinguishable(self, gate):
        """Test every rejection carries the same message."""
        messages = set()
        for username, password in [
            ("nobody", "x"),
            ("creator", "wrong"),
            (None, None),
            ("creator", ""),
        ]:
            with pytest.raises(UnauthorizedError) as exc:
                await gate.authorize(username, password)
            messages.add(exc.value.message)
        assert messages == {"Authentication required"}

    @pytest.mark.asyncio
    async def test_gate_does_not_stamp_login(self, gate, account_directory):
        """Test authorizing a request is not a login."""
        await gate.authorize("creator", "creator-secret")
        assert (await account_directory.get("creator")).last_login_at is None

    @pytest.mark.asyncio
    async def test_legacy_secret(self, account_directory):
        """Test the deprecated static secret grants admin."""
        gate = AuthorizationGate(account_directory, legacy_admin_secret="legacy-pass")

        principal = await gate.authorize(None, "legacy-pass")

        assert principal.role == Role.ADMIN
        assert principal.legacy is True
        assert principal.actor == "legacy-admin"

    @pytest.mark.asyncio
    async def test_legacy_secret_disabled(self, gate):
        """Test the legacy path is off without a configured secret."""
        with pytest.raises(UnauthorizedError):
            await gate.authorize(None, "legacy-pass")
