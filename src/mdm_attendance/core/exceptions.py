class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is invalid (bad date, half, month, breakAt)."""


class DataIntegrityError(DomainError):
    """Raised when persisted data violates a precondition of the report engine."""
