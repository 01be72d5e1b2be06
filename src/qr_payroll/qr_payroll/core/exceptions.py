class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCodeError(ValidationError):
    """Raised when a scanned payload does not identify an employee."""


class NotFoundError(DomainError):
    """Raised when an employee/record does not exist or is inactive."""


class ConflictError(DomainError):
    """Raised when an attendance transition violates the current state."""


class PreconditionError(ConflictError):
    """Raised when an exit is attempted without an open entry."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class UnknownEmployeeTypeError(DomainError):
    """Raised by the payroll engine for an unrecognized employee class."""


class StorageConflict(Exception):
    """Unique-constraint race reported by a repository.

    Never surfaced to callers: the attendance service converts it to ConflictError.
    """
