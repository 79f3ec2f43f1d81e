"""
Statistics queries.

Queries for the admin, operator and public statistics views.
"""
from dataclasses import dataclass


@dataclass
class GetDetailedStatsQuery:
    """Query for statistics of every license key (admin)."""

    include_addresses: bool = True


@dataclass
class GetOperatorStatsQuery:
    """Query for statistics of one license key (operator)."""

    license_key: str


@dataclass
class GetPublicStatsQuery:
    """Query for the public leaderboard of active keys."""

    limit: int = 100
