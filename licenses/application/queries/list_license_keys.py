"""
ListLicenseKeysQuery.

Query to list license keys, newest first.
"""
from dataclasses import dataclass


@dataclass
class ListLicenseKeysQuery:
    """Query to list license keys."""

    active_only: bool = False
