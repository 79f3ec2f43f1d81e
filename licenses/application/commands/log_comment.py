"""
LogCommentCommand.

Command to count one posted comment against a license key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class LogCommentCommand:
    """Command to log a posted comment."""

    license_key: str
    address: Optional[str] = None
