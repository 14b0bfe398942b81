"""Garage directory lookups.

Pure reads against the garage collection. A missing garage is reported as
None; a failing store is reported as TransientStoreError. The two are never
conflated, because "no such garage" is a legitimate display state while a
store failure is retryable.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TypeVar

from tenancy.application.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.application.timeouts import call_with_timeout
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import TenantId, UserId
from tenancy.ports.exceptions import TransientStoreError
from tenancy.ports.repositories import ITenantRepository

T = TypeVar("T")


class TenantDirectoryService:
    """Application service resolving slugs and ids to garages."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        call_timeout: float,
        probe: TenantDirectoryProbe | None = None,
    ):
        """Initialize the directory.

        Args:
            tenant_repository: Repository for garage reads
            call_timeout: Seconds allowed for each store call
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._call_timeout = call_timeout
        self._probe = probe or DefaultTenantDirectoryProbe()

    async def lookup_by_slug(self, slug: str | None) -> Tenant | None:
        """Resolve a slug to its garage.

        A missing or blank slug short-circuits to None without touching the
        store, so an empty filter is never issued.

        Raises:
            TransientStoreError: If the store failed or timed out
        """
        if slug is None or not slug.strip():
            self._probe.lookup_skipped()
            return None

        slug = slug.strip()
        tenant = await self._read(
            self._tenant_repository.get_by_slug(slug), "tenant_lookup_by_slug"
        )
        if tenant is None:
            self._probe.tenant_not_found(slug=slug)
            return None

        self._probe.tenant_found(slug=slug, tenant_id=tenant.id.value)
        return tenant

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a garage by id, or None if it does not exist."""
        return await self._read(
            self._tenant_repository.get_by_id(tenant_id), "tenant_get_by_id"
        )

    async def list_owned_by(self, user_id: UserId) -> list[Tenant]:
        """List the garages a user owns, oldest first."""
        return await self._read(
            self._tenant_repository.list_owned_by(user_id), "tenant_list_owned"
        )

    async def first_tenant(self) -> Tenant | None:
        """Fetch the oldest garage in the store, used as a fallback assignment."""
        return await self._read(self._tenant_repository.get_first(), "tenant_get_first")

    async def _read(self, call: Awaitable[T], operation: str) -> T:
        """Await a repository call with the per-call timeout."""
        try:
            return await call_with_timeout(call, self._call_timeout, operation)
        except TransientStoreError as e:
            self._probe.lookup_failed(operation=operation, error=e)
            raise
