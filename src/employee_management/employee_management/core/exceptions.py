class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransitionError(ValidationError):
    """Raised when a leave request cannot move to the requested status."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when the identity provider and the store disagree, or a concurrent write won."""


class EmailInUseError(ConflictError):
    """Raised when an account exists for an email that has no employee record."""


class DuplicateAttendanceError(DomainError):
    """Raised when attendance was already marked for the day."""


class AuthError(DomainError):
    """Raised when authentication fails."""


class InvalidCredentialsError(AuthError):
    """Raised when login credentials are invalid."""


class TooManyAttemptsError(AuthError):
    """Raised when an account is temporarily locked after repeated failures."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RemoteUnavailableError(DomainError):
    """Raised when the database or mail server cannot be reached."""


class DataIntegrityError(DomainError):
    """Raised when stored data breaks an invariant (e.g. duplicate emails)."""


class NotificationError(DomainError):
    """Raised when a notification could not be delivered."""
