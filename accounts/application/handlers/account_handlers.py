"""
Account command handlers.

Handlers for login, create, update role and delete account commands.
"""
from accounts.application.commands.create_account import CreateAccountCommand
from accounts.application.commands.delete_account import DeleteAccountCommand
from accounts.application.commands.login import LoginCommand
from accounts.application.commands.update_account_role import UpdateAccountRoleCommand
from accounts.application.dto.account_dto import AccountDTO, LoginResultDTO
from accounts.domain.events import AccountCreated, AccountDeleted, AccountRoleUpdated
from accounts.domain.services import AccountDirectory
from core.infrastructure.events import event_bus


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(self, account_directory: AccountDirectory):
        """Initialize handler with the account directory."""
        self.account_directory = account_directory

    async def handle(self, command: LoginCommand) -> LoginResultDTO:
        """
        Handle login command.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        account = await self.account_directory.authenticate(command.username, command.password)
        return LoginResultDTO(
            username=account.username,
            role=account.role.value,
            bound_license_key=account.bound_license_key,
        )


class CreateAccountHandler:
    """Handler for CreateAccountCommand."""

    def __init__(self, account_directory: AccountDirectory):
        """Initialize handler with the account directory."""
        self.account_directory = account_directory

    async def handle(self, command: CreateAccountCommand) -> AccountDTO:
        """
        Handle create account command.

        Raises:
            ValidationError: If input or the role/key combination is invalid
            DuplicateUsernameError: If the username is taken
        """
        account = await self.account_directory.create(
            username=command.username,
            password=command.password,
            role=command.role,
            bound_license_key=command.license_key,
        )

        await event_bus.publish(
            AccountCreated(
                aggregate_id=account.username,
                role=account.role.value,
                actor=command.actor,
            )
        )
        return AccountDTO.from_entity(account)


class UpdateAccountRoleHandler:
    """Handler for UpdateAccountRoleCommand."""

    def __init__(self, account_directory: AccountDirectory):
        """Initialize handler with the account directory."""
        self.account_directory = account_directory

    async def handle(self, command: UpdateAccountRoleCommand) -> AccountDTO:
        """
        Handle update account role command.

        Raises:
            ForbiddenError: If the target is the creator
            AccountNotFoundError: If the account does not exist
        """
        account = await self.account_directory.update_role(
            command.username, command.new_role, command.new_license_key
        )

        await event_bus.publish(
            AccountRoleUpdated(
                aggregate_id=account.username,
                role=account.role.value,
                actor=command.actor,
            )
        )
        return AccountDTO.from_entity(account)


class DeleteAccountHandler:
    """Handler for DeleteAccountCommand."""

    def __init__(self, account_directory: AccountDirectory):
        """Initialize handler with the account directory."""
        self.account_directory = account_directory

    async def handle(self, command: DeleteAccountCommand) -> None:
        """
        Handle delete account command.

        Raises:
            ForbiddenError: If the target is the creator
            AccountNotFoundError: If the account does not exist
        """
        await self.account_directory.delete(command.username)

        await event_bus.publish(AccountDeleted(aggregate_id=command.username, actor=command.actor))
