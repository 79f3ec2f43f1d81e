"""
DeleteLicenseKeyCommand.

Command to delete a license key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class DeleteLicenseKeyCommand:
    """Command to delete a license key."""

    license_key: str
    actor: Optional[str] = None
    address: Optional[str] = None
