"""
Statistics handlers.

Handlers for per-key statistics: the admin detailed view, the
operator self-view and the public leaderboard.
"""
from datetime import datetime
from typing import List

from core.metrics import license_keys_online
from licenses.application.dto.license_key_dto import (
    AddressSightingDTO,
    KeyStatisticsDTO,
    LicenseKeyDTO,
    PublicKeyStatsDTO,
)
from licenses.application.queries.get_key_statistics import (
    GetDetailedStatsQuery,
    GetOperatorStatsQuery,
    GetPublicStatsQuery,
)
from licenses.application.queries.list_license_keys import ListLicenseKeysQuery
from licenses.domain.license_key import LicenseKey
from licenses.domain.services import KeyStore
from presence.domain.services import PresenceTracker


async def _key_statistics(
    key_store: KeyStore,
    presence_tracker: PresenceTracker,
    license_key: LicenseKey,
    now: datetime,
    include_addresses: bool = True,
) -> KeyStatisticsDTO:
    base = LicenseKeyDTO.from_entity(license_key, now, key_store.online_window)
    sightings = await presence_tracker.addresses_for(license_key.key) if include_addresses else []
    unique_addresses = (
        len(sightings)
        if include_addresses
        else await presence_tracker.unique_address_count(license_key.key)
    )
    return KeyStatisticsDTO(
        **vars(base),
        comments_count=await key_store.comment_count(license_key.key),
        unique_addresses=unique_addresses,
        addresses=[AddressSightingDTO.from_entity(sighting) for sighting in sightings],
    )


class ListLicenseKeysHandler:
    """Handler for ListLicenseKeysQuery."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, query: ListLicenseKeysQuery) -> List[LicenseKeyDTO]:
        """
        Handle list license keys query.

        Returns:
            List of LicenseKeyDTO, newest first
        """
        now = self.key_store.clock()
        keys = await self.key_store.list_keys(active_only=query.active_only)
        return [LicenseKeyDTO.from_entity(key, now, self.key_store.online_window) for key in keys]


class GetDetailedStatsHandler:
    """Handler for GetDetailedStatsQuery."""

    def __init__(self, key_store: KeyStore, presence_tracker: PresenceTracker):
        """Initialize handler with the key store and presence tracker."""
        self.key_store = key_store
        self.presence_tracker = presence_tracker

    async def handle(self, query: GetDetailedStatsQuery) -> List[KeyStatisticsDTO]:
        """
        Handle detailed stats query.

        Returns:
            KeyStatisticsDTO for every key, newest first
        """
        now = self.key_store.clock()
        stats = [
            await _key_statistics(
                self.key_store, self.presence_tracker, key, now, query.include_addresses
            )
            for key in await self.key_store.list_keys()
        ]
        license_keys_online.set(sum(1 for item in stats if item.is_online))
        return stats


class GetOperatorStatsHandler:
    """Handler for GetOperatorStatsQuery."""

    def __init__(self, key_store: KeyStore, presence_tracker: PresenceTracker):
        """Initialize handler with the key store and presence tracker."""
        self.key_store = key_store
        self.presence_tracker = presence_tracker

    async def handle(self, query: GetOperatorStatsQuery) -> KeyStatisticsDTO:
        """
        Handle operator stats query.

        Knowing an existing key is the only credential required.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.key_store.get(query.license_key)
        return await _key_statistics(
            self.key_store, self.presence_tracker, license_key, self.key_store.clock()
        )


class GetPublicStatsHandler:
    """Handler for GetPublicStatsQuery."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, query: GetPublicStatsQuery) -> List[PublicKeyStatsDTO]:
        """
        Handle public stats query.

        Returns:
            Active keys ranked by comment count, most first
        """
        now = self.key_store.clock()
        entries = [
            PublicKeyStatsDTO(
                owner=key.owner,
                comments_count=await self.key_store.comment_count(key.key),
                created_at=key.created_at,
                is_online=key.is_online(now, self.key_store.online_window),
            )
            for key in await self.key_store.list_keys(active_only=True)
        ]
        entries.sort(key=lambda entry: (-entry.comments_count, entry.created_at))
        return entries[: query.limit]
