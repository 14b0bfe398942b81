"""PostgreSQL implementation of IRoleAssignmentRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.value_objects import Role, UserId
from tenancy.infrastructure.errors import translate_store_errors
from tenancy.infrastructure.models import RoleAssignmentModel
from tenancy.infrastructure.observability import (
    DefaultRoleAssignmentRepositoryProbe,
    RoleAssignmentRepositoryProbe,
)
from tenancy.ports.repositories import IRoleAssignmentRepository


class RoleAssignmentRepository(IRoleAssignmentRepository):
    """Repository reading user roles from PostgreSQL."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: RoleAssignmentRepositoryProbe | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._probe = probe or DefaultRoleAssignmentRepositoryProbe()

    async def get_role(self, user_id: UserId) -> Role | None:
        """Fetch the role of a user.

        Returns:
            The Role, or None if there is no row or the stored value is not
            a known role
        """
        stmt = select(RoleAssignmentModel.role).where(
            RoleAssignmentModel.user_id == user_id.value
        )
        with translate_store_errors("role_get", self._probe):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                raw_role = result.scalar_one_or_none()

        if raw_role is None:
            return None

        try:
            return Role(raw_role)
        except ValueError:
            self._probe.unknown_role(user_id=user_id.value, raw_role=raw_role)
            return None
