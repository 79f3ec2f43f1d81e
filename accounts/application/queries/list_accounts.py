"""
Account queries.
"""
from dataclasses import dataclass


@dataclass
class ListAccountsQuery:
    """Query to list accounts other than the creator."""

    include_creator: bool = False


@dataclass
class ListKeysWithAccountsQuery:
    """Query to list license keys with their bound accounts."""

    pass
