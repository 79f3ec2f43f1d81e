"""
Account query handlers.
"""
from collections import defaultdict
from typing import List

from accounts.application.dto.account_dto import (
    AccountDTO,
    KeysWithAccountsDTO,
    KeyWithAccountsDTO,
)
from accounts.application.queries.list_accounts import (
    ListAccountsQuery,
    ListKeysWithAccountsQuery,
)
from accounts.domain.services import AccountDirectory
from core.domain.value_objects import Role
from licenses.domain.services import KeyStore


class ListAccountsHandler:
    """Handler for ListAccountsQuery."""

    def __init__(self, account_directory: AccountDirectory):
        """Initialize handler with the account directory."""
        self.account_directory = account_directory

    async def handle(self, query: ListAccountsQuery) -> List[AccountDTO]:
        """
        Handle list accounts query.

        Returns:
            List of AccountDTO, newest first
        """
        accounts = await self.account_directory.list_accounts(
            include_creator=query.include_creator
        )
        return [AccountDTO.from_entity(account) for account in accounts]


class ListKeysWithAccountsHandler:
    """Handler for ListKeysWithAccountsQuery."""

    def __init__(self, account_directory: AccountDirectory, key_store: KeyStore):
        """Initialize handler with the account directory and key store."""
        self.account_directory = account_directory
        self.key_store = key_store

    async def handle(self, query: ListKeysWithAccountsQuery) -> KeysWithAccountsDTO:
        """
        Handle keys with accounts query.

        Returns:
            Every key with its bound accounts, plus accounts bound to none
        """
        accounts = await self.account_directory.list_accounts()
        by_key = defaultdict(list)
        unbound = []
        for account in accounts:
            if account.bound_license_key:
                by_key[account.bound_license_key].append(AccountDTO.from_entity(account))
            elif account.role == Role.ADMIN:
                unbound.append(AccountDTO.from_entity(account))

        keys = [
            KeyWithAccountsDTO(
                license_key=key.key,
                owner=key.owner,
                active=key.active,
                created_at=key.created_at,
                comments_count=await self.key_store.comment_count(key.key),
                accounts=by_key.get(key.key, []),
            )
            for key in await self.key_store.list_keys()
        ]
        return KeysWithAccountsDTO(keys_with_accounts=keys, admins_without_keys=unbound)
