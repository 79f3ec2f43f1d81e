"""
Client handlers.

Handlers for the calls a running client application makes:
verify, heartbeat and comment logging.
"""
from licenses.application.commands.log_comment import LogCommentCommand
from licenses.application.commands.record_heartbeat import RecordHeartbeatCommand
from licenses.application.commands.verify_license_key import VerifyLicenseKeyCommand
from licenses.application.dto.license_key_dto import VerificationDTO
from licenses.domain.services import KeyStore


class VerifyLicenseKeyHandler:
    """Handler for VerifyLicenseKeyCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: VerifyLicenseKeyCommand) -> VerificationDTO:
        """
        Handle verify command.

        Unknown and inactive keys are outcomes, not errors.

        Args:
            command: VerifyLicenseKeyCommand

        Returns:
            VerificationDTO
        """
        result = await self.key_store.verify(command.license_key, address=command.address)
        return VerificationDTO(valid=result.valid, message=result.message, owner=result.owner)


class RecordHeartbeatHandler:
    """Handler for RecordHeartbeatCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: RecordHeartbeatCommand) -> None:
        """
        Handle heartbeat command.

        Raises:
            ValidationError: If the address is invalid
            LicenseKeyNotFoundError: If the key does not exist
        """
        await self.key_store.record_heartbeat(command.license_key, command.address)


class LogCommentHandler:
    """Handler for LogCommentCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: LogCommentCommand) -> None:
        """
        Handle log comment command.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        await self.key_store.log_comment(command.license_key, address=command.address)
