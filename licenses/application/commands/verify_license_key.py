"""
VerifyLicenseKeyCommand.

Verification stamps ``last_used_at``, so it is a command, not a query.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyLicenseKeyCommand:
    """Command to verify a license key."""

    license_key: str
    address: Optional[str] = None
