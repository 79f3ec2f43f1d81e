"""
CreateAccountCommand.

Command to create an admin or operator account.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateAccountCommand:
    """Command to create an account."""

    username: str
    password: str
    role: str
    license_key: Optional[str] = None
    actor: Optional[str] = None
