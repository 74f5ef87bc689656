from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an operation requires an entity that does not exist."""


class StoreError(DomainError):
    """Raised when the record store fails for a reason other than a key collision."""


class ConstraintViolation(DomainError):
    """Raised when a write collides with a uniqueness key."""

    def __init__(self, message: str, *, key: tuple | None = None):
        super().__init__(message)
        self.key = key


class DuplicatePeriodError(ConstraintViolation):
    """A payroll record already exists for the employee and period."""


class PartialReconciliationFailure(DomainError):
    """One or more days of a leave range could not be written.

    Successful days are kept; ``result`` lists which dates went through.
    """

    def __init__(self, message: str, *, result):
        super().__init__(message)
        self.result = result
