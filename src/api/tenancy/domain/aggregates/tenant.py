"""Tenant (garage) aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from tenancy.domain.value_objects import TenantId, UserId

DEFAULT_CURRENCY = "USD"


@dataclass
class Tenant:
    """Tenant aggregate representing a garage.

    Garages are the isolation boundary of the system: all business data is
    scoped to exactly one garage. They are created by the onboarding flow;
    tenant resolution only reads them.

    Business rules:
    - Slugs are globally unique and URL-safe
    - ``created_at`` defines the stable "first garage" ordering
    """

    id: TenantId
    slug: str
    name: str
    owner_id: UserId | None = None
    settings: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        slug: str,
        name: str,
        owner_id: UserId | None = None,
        settings: dict[str, Any] | None = None,
    ) -> "Tenant":
        """Factory method for creating a new garage with a fresh id."""
        return cls(
            id=TenantId.generate(),
            slug=slug,
            name=name,
            owner_id=owner_id,
            settings=dict(settings or {}),
        )

    @property
    def currency(self) -> str:
        """Currency code garage prices are shown in."""
        return str(self.settings.get("currency") or DEFAULT_CURRENCY)

    def is_owned_by(self, user_id: UserId) -> bool:
        """Check whether ``user_id`` owns this garage."""
        return self.owner_id == user_id
