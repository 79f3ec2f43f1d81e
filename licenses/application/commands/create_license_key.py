"""
CreateLicenseKeyCommand.

Command to issue a new license key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateLicenseKeyCommand:
    """Command to issue a new license key for an owner."""

    owner: str
    actor: Optional[str] = None
    address: Optional[str] = None
