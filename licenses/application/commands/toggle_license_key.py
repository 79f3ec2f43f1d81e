"""
ToggleLicenseKeyCommand.

Command to activate or deactivate a license key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ToggleLicenseKeyCommand:
    """Command to flip the active flag of a license key."""

    license_key: str
    actor: Optional[str] = None
    address: Optional[str] = None
