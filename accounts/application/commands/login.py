"""
LoginCommand.

Login stamps ``last_login_at``, so it is a command.
"""
from dataclasses import dataclass


@dataclass
class LoginCommand:
    """Command to log in with username and password."""

    username: str
    password: str
