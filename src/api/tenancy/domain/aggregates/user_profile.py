"""User profile aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.value_objects import TenantId, UserId


@dataclass(frozen=True)
class UserProfile:
    """Profile of an authenticated user, one-to-one with the identity.

    ``assigned_tenant_id`` is the single piece of mutable tenant-assignment
    state. A profile is assigned to at most one garage at a time.
    """

    user_id: UserId
    assigned_tenant_id: TenantId | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def is_assigned(self) -> bool:
        """Check if the profile already points at a garage."""
        return self.assigned_tenant_id is not None

    @property
    def display_name(self) -> str:
        """Full name, falling back to the user id."""
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.user_id.value
