"""
Concurrency tests for the address sighting upsert.

These need real concurrent writers, so they run against PostgreSQL
(``DATABASE_URL=postgresql://...``). The in-memory SQLite test database
locks the whole table and is skipped.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync
from django.conf import settings
from django.db import connection

from presence.infrastructure.models import AddressSighting
from presence.infrastructure.repositories.django_address_sighting_repository import (
    DjangoAddressSightingRepository,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
WORKERS = 8

pytestmark = [
    pytest.mark.integration,
    pytest.mark.postgres,
    pytest.mark.skipif(
        not settings.DATABASES["default"]["ENGINE"].endswith("postgresql"),
        reason="concurrent upserts need PostgreSQL",
    ),
]


def run_concurrently(calls):
    """Start every call at once, each on its own thread and connection."""
    barrier = threading.Barrier(len(calls))

    def run(call):
        barrier.wait()
        try:
            return call()
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        return list(executor.map(run, calls))


@pytest.mark.django_db(transaction=True)
class TestConcurrentSightings:
    """Concurrent heartbeats against DjangoAddressSightingRepository."""

    def test_same_pair_races_to_one_row(self):
        """Test racing inserts of one (key, address) pair keep a single row."""
        repository = DjangoAddressSightingRepository()
        upsert = async_to_sync(repository.upsert)
        seen = [NOW + timedelta(seconds=n) for n in range(WORKERS)]

        results = run_concurrently(
            [lambda at=at: upsert("TW-RACE", "10.0.0.1", at) for at in seen]
        )

        assert len(results) == WORKERS
        row = AddressSighting.objects.get(license_key="TW-RACE")  # pylint: disable=no-member
        assert row.first_seen_at in seen
        assert row.last_seen_at == seen[-1]
        assert row.first_seen_at <= row.last_seen_at

    def test_distinct_addresses_are_all_kept(self):
        """Test simultaneous heartbeats from different addresses lose nothing."""
        repository = DjangoAddressSightingRepository()
        upsert = async_to_sync(repository.upsert)

        run_concurrently(
            [lambda n=n: upsert("TW-RACE", f"10.0.0.{n}", NOW) for n in range(WORKERS)]
        )

        assert async_to_sync(repository.count_for_key)("TW-RACE") == WORKERS
