"""
RecordHeartbeatCommand.

Command to record a liveness signal from a running client.
"""
from dataclasses import dataclass


@dataclass
class RecordHeartbeatCommand:
    """Command to record a heartbeat for a license key."""

    license_key: str
    address: str
