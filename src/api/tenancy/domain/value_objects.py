"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant (garage) aggregate.

    Opaque to the resolution logic; newly created garages get a ULID so
    identifiers sort by creation time.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from a raw string.

        Args:
            value: Identifier as stored in the data-access boundary

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is empty
        """
        value = value.strip()
        if not value:
            raise ValueError("TenantId must not be empty")
        return cls(value=value)


@dataclass(frozen=True)
class UserId:
    """Identifier of an authenticated user.

    Issued by the authentication collaborator, so no format is assumed.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from a raw string.

        Raises:
            ValueError: If value is empty
        """
        value = value.strip()
        if not value:
            raise ValueError("UserId must not be empty")
        return cls(value=value)


class Role(StrEnum):
    """Roles a user can be assigned in the role_assignments collection.

    Tenant resolution only distinguishes administrators from everyone else.
    """

    ADMINISTRATOR = "administrator"
    TECHNICIAN = "technician"
    FRONT_DESK = "front_desk"


class EntryPoint(StrEnum):
    """Sign-in area the user arrived through."""

    OWNER = "owner"
    STAFF = "staff"


class ContextSource(StrEnum):
    """How the effective tenant of a session was determined."""

    EXPLICIT = "explicit"
    SUBDOMAIN = "subdomain"
    PROFILE = "profile"
    NONE = "none"


@dataclass(frozen=True)
class VerifiedRole:
    """Outcome of a role lookup.

    ``role`` is None when the user has no role row; such a user is treated
    as the least-privileged, non-administrator user.
    """

    user_id: UserId
    role: Role | None

    @property
    def is_administrator(self) -> bool:
        """Check if the user holds the administrator role."""
        return self.role == Role.ADMINISTRATOR
