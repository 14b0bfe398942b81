"""Exceptions for the tenancy bounded context.

"Not found" is deliberately absent: a missing garage or role is a valid,
displayable state and lookups return None for it. These exceptions cover
conditions the caller must handle differently from absence.
"""


class TenancyError(Exception):
    """Base class for tenant resolution errors."""

    pass


class TransientStoreError(TenancyError):
    """Raised when the data-access boundary fails or times out.

    Safe to retry with backoff. Never raised for a row that simply does
    not exist.
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class AccessDeniedError(TenancyError):
    """Raised when a user reached an entry point their role may not use.

    The session has already been signed out when this is raised.
    """

    pass


class UnauthorizedError(TenancyError):
    """Raised when an operation requires an authenticated user and there is none."""

    pass


class InvalidReferenceError(TenancyError):
    """Raised when a write was rejected because the garage id does not exist."""

    pass


class ProfileNotFoundError(TenancyError):
    """Raised when an authenticated user has no profile row.

    Profiles are created together with the identity, so this indicates an
    integrity problem rather than a transient condition.
    """

    pass
