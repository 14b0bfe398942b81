"""PostgreSQL implementation of ITenantRepository.

Read-only access to garages. Each call opens its own short-lived session
from the injected session maker.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import TenantId, UserId
from tenancy.infrastructure.errors import translate_store_errors
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from tenancy.ports.repositories import ITenantRepository


class TenantRepository(ITenantRepository):
    """Repository reading garages from PostgreSQL."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a session maker.

        Args:
            session_factory: Session maker from the database dependencies
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Fetch a garage by slug."""
        stmt = select(TenantModel).where(TenantModel.slug == slug)
        with translate_store_errors("tenant_get_by_slug", self._probe):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()

        if model is None:
            self._probe.tenant_not_found(lookup="slug", key=slug)
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a garage by id."""
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        with translate_store_errors("tenant_get_by_id", self._probe):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()

        if model is None:
            self._probe.tenant_not_found(lookup="id", key=tenant_id.value)
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    async def list_owned_by(self, owner_id: UserId) -> list[Tenant]:
        """Fetch the garages owned by a user in creation order."""
        stmt = (
            select(TenantModel)
            .where(TenantModel.owner_id == owner_id.value)
            .order_by(TenantModel.created_at, TenantModel.id)
        )
        with translate_store_errors("tenant_list_owned", self._probe):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                models = result.scalars().all()

        tenants = [self._to_aggregate(model) for model in models]
        self._probe.tenants_listed(owner_id=owner_id.value, count=len(tenants))
        return tenants

    async def get_first(self) -> Tenant | None:
        """Fetch the oldest garage."""
        stmt = select(TenantModel).order_by(TenantModel.created_at, TenantModel.id).limit(1)
        with translate_store_errors("tenant_get_first", self._probe):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                model = result.scalars().first()

        if model is None:
            self._probe.tenant_not_found(lookup="first", key="*")
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    @staticmethod
    def _to_aggregate(model: TenantModel) -> Tenant:
        """Reconstitute a Tenant aggregate from its row."""
        return Tenant(
            id=TenantId(value=model.id),
            slug=model.slug,
            name=model.name,
            owner_id=UserId(value=model.owner_id) if model.owner_id else None,
            settings=dict(model.settings or {}),
            created_at=model.created_at,
        )
