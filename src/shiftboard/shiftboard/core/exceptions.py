class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidFormatError(ValidationError):
    """Raised when a date, time or identifier is malformed."""


class PastBookingError(ValidationError):
    """Raised when a shift would start before the current moment."""


class TooShortError(ValidationError):
    """Raised when a shift is shorter than the minimum duration."""


class OverlappingShiftError(ValidationError):
    """Raised when a shift overlaps another shift of the same employee."""


class NotFoundError(DomainError):
    """Raised when a shift or employee does not exist."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class ForbiddenError(AuthorizationError):
    """Raised when a user touches a shift owned by another employee."""


class StoreUnavailableError(DomainError):
    """Raised when the backing store cannot be reached."""


class StoreTimeoutError(StoreUnavailableError):
    """Raised when the store did not answer in time. Never retried."""
