class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class SchedulingViolation(DomainError):
    """Raised when a payroll run is requested on a day its kind is not allowed."""


class DataAccessError(Exception):
    """Raised when the store is unreachable or rejects a statement."""


class PersistenceError(DataAccessError):
    """Raised when a payroll run fails mid-transaction (after full rollback)."""
