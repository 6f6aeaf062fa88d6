class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a student, RFID tag, event or transaction cannot be resolved."""


class ConfigurationError(DomainError):
    """Raised when an event is not configured to evaluate the requested scan."""
