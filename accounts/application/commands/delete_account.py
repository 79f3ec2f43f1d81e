"""
DeleteAccountCommand.

Command to delete an account.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class DeleteAccountCommand:
    """Command to delete an account."""

    username: str
    actor: Optional[str] = None
