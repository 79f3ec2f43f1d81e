"""
UpdateAccountRoleCommand.

Command to change the role and bound key of an account.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateAccountRoleCommand:
    """Command to update an account role."""

    username: str
    new_role: str
    new_license_key: Optional[str] = None
    actor: Optional[str] = None
