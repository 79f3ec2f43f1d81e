"""
ResetCommentsCommand.

Command to zero the comment counter of a license key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ResetCommentsCommand:
    """Command to remove all comment events of a license key."""

    license_key: str
    actor: Optional[str] = None
