"""
Unit tests for Account entity and AccountDirectory service.
"""
from datetime import timedelta

import pytest

from accounts.domain.account import Account
from core.domain.exceptions import (
    AccountNotFoundError,
    DuplicateUsernameError,
    ForbiddenError,
    InvalidCredentialsError,
    ValidationError,
)
from core.domain.value_objects import Role


class TestAccount:
    """Tests for Account entity."""

    def test_password_is_hashed(self):
        """Test the raw password is never stored."""
        account = Account.create(username="alice", password="s3cret", role=Role.ADMIN)
        assert account.password_hash != "s3cret"
        assert account.check_password("s3cret") is True
        assert account.check_password("wrong") is False

    def test_operator_requires_key(self):
        """Test operators must be bound to a key."""
        with pytest.raises(ValueError):
            Account.create(username="op", password="pw", role=Role.OPERATOR)

    def test_admin_cannot_bind_key(self):
        """Test only operators carry a key."""
        with pytest.raises(ValueError):
            Account.create(
                username="admin", password="pw", role=Role.ADMIN, bound_license_key="TW-A"
            )


class TestAccountDirectory:
    """Tests for AccountDirectory service."""

    @pytest.mark.asyncio
    async def test_bootstrap_is_idempotent(self, account_directory):
        """Test the creator is inserted once and never overwritten."""
        creator = await account_directory.get("creator")
        account, created = await account_directory.bootstrap_creator()

        assert created is False
        assert account.password_hash == creator.password_hash
        assert account.role == Role.CREATOR

    @pytest.mark.asyncio
    async def test_authenticate_stamps_login(self, account_directory, clock):
        """Test a successful login stamps last_login_at."""
        clock.advance(timedelta(hours=1))

        account = await account_directory.authenticate("creator", "creator-secret")

        assert account.last_login_at == clock.now
        assert (await account_directory.get("creator")).last_login_at == clock.now

    @pytest.mark.asyncio
    async def test_authenticate_without_stamp(self, account_directory):
        """Test authorization checks can skip the login stamp."""
        account = await account_directory.authenticate(
            "creator", "creator-secret", record_login=False
        )
        assert account.last_login_at is None

    @pytest.mark.asyncio
    async def test_authenticate_failures_are_uniform(self, account_directory):
        """Test unknown users and wrong passwords fail the same way."""
        with pytest.raises(InvalidCredentialsError) as unknown:
            await account_directory.authenticate("nobody", "x")
        with pytest.raises(InvalidCredentialsError) as wrong:
            await account_directory.authenticate("creator", "x")
        assert unknown.value.message == wrong.value.message

    @pytest.mark.asyncio
    async def test_create_operator_requires_key(self, account_directory):
        """Test an operator without a key is rejected."""
        with pytest.raises(ValidationError):
            await account_directory.create("op", "pw", "operator")

    @pytest.mark.asyncio
    async def test_create_operator_requires_existing_key(self, account_directory):
        """Test an operator bound to an unknown key is rejected."""
        with pytest.raises(ValidationError, match="does not exist"):
            await account_directory.create("op", "pw", "operator", "TW-NOPE")

    @pytest.mark.asyncio
    async def test_create_operator(self, account_directory, key_store, access_log):
        """Test creating an operator bound to a key."""
        key = await key_store.create("Alice")

        account = await account_directory.create("op", "pw", "operator", key.key)

        assert account.role == Role.OPERATOR
        assert account.bound_license_key == key.key
        latest = (await access_log.recent())[0]
        assert (latest.action, latest.license_key) == ("account_created", key.key)

    @pytest.mark.asyncio
    async def test_create_legacy_role(self, account_directory, key_store):
        """Test the legacy ``va`` role creates an operator."""
        key = await key_store.create("Alice")

        account = await account_directory.create("va-user", "pw", "va", key.key)

        assert account.role == Role.OPERATOR

    @pytest.mark.asyncio
    async def test_create_creator_rejected(self, account_directory):
        """Test a second creator cannot be created."""
        with pytest.raises(ValidationError):
            await account_directory.create("boss", "pw", "creator")

    @pytest.mark.asyncio
    async def test_create_invalid_role(self, account_directory):
        """Test an unknown role is rejected."""
        with pytest.raises(ValidationError, match="Invalid role"):
            await account_directory.create("someone", "pw", "root")

    @pytest.mark.asyncio
    async def test_create_duplicate_username(self, account_directory):
        """Test usernames are unique."""
        await account_directory.create("alice", "pw", "admin")
        with pytest.raises(DuplicateUsernameError):
            await account_directory.create("alice", "other", "admin")

    @pytest.mark.asyncio
    async def test_creator_is_protected(self, account_directory):
        """Test the creator cannot be deleted or demoted."""
        with pytest.raises(ForbiddenError):
            await account_directory.delete("creator")
        with pytest.raises(ForbiddenError):
            await account_directory.update_role("creator", "admin")
        assert (await account_directory.get("creator")).role == Role.CREATOR

    @pytest.mark.asyncio
    async def test_cannot_grant_creator(self, account_directory):
        """Test no account can be promoted to creator."""
        await account_directory.create("alice", "pw", "admin")
        with pytest.raises(ForbiddenError):
            await account_directory.update_role("alice", "creator")

    @pytest.mark.asyncio
    async def test_update_role(self, account_directory, key_store):
        """Test demoting an admin to an operator."""
        key = await key_store.create("Alice")
        await account_directory.create("alice", "pw", "admin")

        updated = await account_directory.update_role("alice", "operator", key.key)

        assert updated.role == Role.OPERATOR
        stored = await account_directory.get("alice")
        assert stored.bound_license_key == key.key

    @pytest.mark.asyncio
    async def test_update_missing_account(self, account_directory):
        """Test updating an unknown account."""
        with pytest.raises(AccountNotFoundError):
            await account_directory.update_role("ghost", "admin")

    @pytest.mark.asyncio
    async def test_delete(self, account_directory):
        """Test deleting an account."""
        await account_directory.create("alice", "pw", "admin")

        await account_directory.delete("alice")

        with pytest.raises(AccountNotFoundError):
            await account_directory.get("alice")
        with pytest.raises(AccountNotFoundError):
            await account_directory.delete("alice")

    @pytest.mark.asyncio
    async def test_list_excludes_creator(self, account_directory):
        """Test the creator is hidden from listings."""
        await account_directory.create("alice", "pw", "admin")

        usernames = [a.username for a in await account_directory.list_accounts()]

        assert usernames == ["alice"]
