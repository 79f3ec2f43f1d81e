"""
License key administration handlers.

Handlers for create, toggle, delete and reset comments commands.
"""
import logging

from core.infrastructure.events import event_bus
from licenses.application.commands.create_license_key import CreateLicenseKeyCommand
from licenses.application.commands.delete_license_key import DeleteLicenseKeyCommand
from licenses.application.commands.reset_comments import ResetCommentsCommand
from licenses.application.commands.toggle_license_key import ToggleLicenseKeyCommand
from licenses.application.dto.license_key_dto import LicenseKeyDTO, ResetCommentsResultDTO
from licenses.domain.events import (
    CommentsReset,
    LicenseKeyCreated,
    LicenseKeyDeleted,
    LicenseKeyToggled,
)
from licenses.domain.services import KeyStore

logger = logging.getLogger(__name__)


class CreateLicenseKeyHandler:
    """Handler for CreateLicenseKeyCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: CreateLicenseKeyCommand) -> LicenseKeyDTO:
        """
        Handle create license key command.

        Args:
            command: CreateLicenseKeyCommand

        Returns:
            LicenseKeyDTO of the new key

        Raises:
            ValidationError: If the owner is empty
        """
        license_key = await self.key_store.create(command.owner, address=command.address)

        await event_bus.publish(
            LicenseKeyCreated(
                aggregate_id=license_key.key,
                owner=license_key.owner,
                actor=command.actor,
            )
        )

        return LicenseKeyDTO.from_entity(
            license_key, self.key_store.clock(), self.key_store.online_window
        )


class ToggleLicenseKeyHandler:
    """Handler for ToggleLicenseKeyCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: ToggleLicenseKeyCommand) -> bool:
        """
        Handle toggle license key command.

        Returns:
            The new active flag

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        active = await self.key_store.toggle_active(command.license_key, address=command.address)

        await event_bus.publish(
            LicenseKeyToggled(
                aggregate_id=command.license_key,
                active=active,
                actor=command.actor,
            )
        )
        return active


class DeleteLicenseKeyHandler:
    """Handler for DeleteLicenseKeyCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: DeleteLicenseKeyCommand) -> None:
        """
        Handle delete license key command.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        await self.key_store.delete(command.license_key, address=command.address)

        await event_bus.publish(
            LicenseKeyDeleted(aggregate_id=command.license_key, actor=command.actor)
        )


class ResetCommentsHandler:
    """Handler for ResetCommentsCommand."""

    def __init__(self, key_store: KeyStore):
        """Initialize handler with the key store."""
        self.key_store = key_store

    async def handle(self, command: ResetCommentsCommand) -> ResetCommentsResultDTO:
        """
        Handle reset comments command.

        Only ``comment_posted`` events of the key are removed.

        Returns:
            ResetCommentsResultDTO with the exact number removed
        """
        deleted = await self.key_store.reset_comments(command.license_key)

        await event_bus.publish(
            CommentsReset(
                aggregate_id=command.license_key,
                deleted_count=deleted,
                actor=command.actor,
            )
        )
        return ResetCommentsResultDTO(license_key=command.license_key, deleted_count=deleted)
