"""Repository protocols (ports) for the tenancy bounded context.

These form the data-access boundary: row-level reads against the
``tenants``, ``profiles`` and ``role_assignments`` collections plus the two
profile writes tenant resolution needs. Implementations raise
TransientStoreError for store failures and return None / empty results for
absent rows, never conflating the two.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.aggregates import Tenant, UserProfile
from tenancy.domain.value_objects import Role, TenantId, UserId


@runtime_checkable
class ITenantRepository(Protocol):
    """Read access to garages."""

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Retrieve a garage by its unique slug.

        Returns:
            The Tenant aggregate, or None if no garage has that slug

        Raises:
            TransientStoreError: If the store could not be queried
        """
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a garage by id.

        Returns:
            The Tenant aggregate, or None if not found

        Raises:
            TransientStoreError: If the store could not be queried
        """
        ...

    async def list_owned_by(self, owner_id: UserId) -> list[Tenant]:
        """List garages owned by a user, oldest first.

        Raises:
            TransientStoreError: If the store could not be queried
        """
        ...

    async def get_first(self) -> Tenant | None:
        """Retrieve the oldest garage in the store.

        Ordered by creation time, then id, so the choice is stable while no
        garages are being created.

        Raises:
            TransientStoreError: If the store could not be queried
        """
        ...


@runtime_checkable
class IProfileRepository(Protocol):
    """Access to user profiles and their garage assignment."""

    async def get_by_user_id(self, user_id: UserId) -> UserProfile | None:
        """Retrieve the profile of a user, or None if it does not exist.

        Raises:
            TransientStoreError: If the store could not be queried
        """
        ...

    async def assign_if_unassigned(self, user_id: UserId, tenant_id: TenantId) -> bool:
        """Assign a garage only while the profile has none.

        A single conditional update, so concurrent callers cannot overwrite
        each other's assignment.

        Returns:
            True if this call wrote the assignment, False if the profile
            was already assigned (or does not exist)

        Raises:
            InvalidReferenceError: If tenant_id does not reference a garage
            TransientStoreError: If the write failed
        """
        ...

    async def set_assigned_tenant(self, user_id: UserId, tenant_id: TenantId) -> bool:
        """Overwrite the profile's garage unconditionally.

        Returns:
            True if the profile was updated, False if it does not exist

        Raises:
            InvalidReferenceError: If tenant_id does not reference a garage
            TransientStoreError: If the write failed
        """
        ...


@runtime_checkable
class IRoleAssignmentRepository(Protocol):
    """Read access to user roles."""

    async def get_role(self, user_id: UserId) -> Role | None:
        """Retrieve the role assigned to a user.

        Returns:
            The Role, or None if the user has no (recognised) role

        Raises:
            TransientStoreError: If the store could not be queried
        """
        ...
