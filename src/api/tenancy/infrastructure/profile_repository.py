"""PostgreSQL implementation of IProfileRepository.

Both writes are single UPDATE statements inside their own transaction, so
a write either lands completely or not at all.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.aggregates import UserProfile
from tenancy.domain.value_objects import TenantId, UserId
from tenancy.infrastructure.errors import translate_store_errors
from tenancy.infrastructure.models import ProfileModel
from tenancy.infrastructure.observability import (
    DefaultProfileRepositoryProbe,
    ProfileRepositoryProbe,
)
from tenancy.ports.repositories import IProfileRepository


class ProfileRepository(IProfileRepository):
    """Repository for user profiles stored in PostgreSQL."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: ProfileRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a session maker.

        Args:
            session_factory: Session maker from the database dependencies
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultProfileRepositoryProbe()

    async def get_by_user_id(self, user_id: UserId) -> UserProfile | None:
        """Fetch the profile of a user."""
        stmt = select(ProfileModel).where(ProfileModel.id == user_id.value)
        with translate_store_errors("profile_get", self._probe):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()

        if model is None:
            self._probe.profile_not_found(user_id.value)
            return None

        return UserProfile(
            user_id=UserId(value=model.id),
            assigned_tenant_id=(
                TenantId(value=model.assigned_tenant_id)
                if model.assigned_tenant_id
                else None
            ),
            first_name=model.first_name,
            last_name=model.last_name,
        )

    async def assign_if_unassigned(self, user_id: UserId, tenant_id: TenantId) -> bool:
        """Assign a garage only while the profile has none (compare-and-swap)."""
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == user_id.value)
            .where(ProfileModel.assigned_tenant_id.is_(None))
            .values(assigned_tenant_id=tenant_id.value)
        )
        with translate_store_errors("profile_assign_if_unassigned", self._probe):
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)

        if result.rowcount != 1:
            self._probe.assignment_skipped(user_id.value, tenant_id.value)
            return False

        self._probe.assignment_written(user_id.value, tenant_id.value, conditional=True)
        return True

    async def set_assigned_tenant(self, user_id: UserId, tenant_id: TenantId) -> bool:
        """Overwrite the profile's garage."""
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == user_id.value)
            .values(assigned_tenant_id=tenant_id.value)
        )
        with translate_store_errors("profile_set_assigned_tenant", self._probe):
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)

        if result.rowcount != 1:
            self._probe.profile_not_found(user_id.value)
            return False

        self._probe.assignment_written(user_id.value, tenant_id.value, conditional=False)
        return True
