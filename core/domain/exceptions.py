"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class LicenseKeyException(DomainException):
    """Base exception for license key errors."""

    pass


class LicenseKeyNotFoundError(LicenseKeyException):
    """Raised when a license key is not found."""

    def __init__(self, message: str = "License key not found"):
        super().__init__(message, code="LICENSE_KEY_NOT_FOUND")


class DuplicateLicenseKeyError(LicenseKeyException):
    """Raised when a generated license key collides with an existing one."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE_KEY")


class AccountException(DomainException):
    """Base exception for account errors."""

    pass


class AccountNotFoundError(AccountException):
    """Raised when an account is not found."""

    def __init__(self, message: str = "Account not found"):
        super().__init__(message, code="ACCOUNT_NOT_FOUND")


class DuplicateUsernameError(AccountException):
    """Raised when a username is already taken."""

    def __init__(self, message: str = "Username already exists"):
        super().__init__(message, code="DUPLICATE_USERNAME")


class InvalidCredentialsError(AccountException):
    """Raised when a username/password pair does not match an account."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class UnauthorizedError(DomainException):
    """Raised when a caller cannot be granted an administrative role."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(DomainException):
    """Raised when an operation targets a protected account."""

    def __init__(self, message: str = "Operation not permitted"):
        super().__init__(message, code="FORBIDDEN")


class StoreUnavailableError(DomainException):
    """Raised when the backing store is unreachable or timed out."""

    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message, code="STORE_UNAVAILABLE")
