"""Effective tenant context value object.

This module contains the pure value object that represents the garage a
session is operating against. It is framework-agnostic and contains no
business logic, making it safe for the shared kernel.

The resolution logic (hostname parsing, slug lookup, assignment
reconciliation) lives in the tenancy bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EffectiveTenantContext:
    """Resolved garage for the current session.

    Derived and in-memory only; never persisted.

    Attributes:
        tenant_id: The resolved garage id, or None.
        tenant_name: Display name of the resolved garage, or None.
        source: How the garage was resolved - 'explicit', 'subdomain',
            'profile' or 'none'.
        slug: The slug that was looked up, if any. Set together with a None
            tenant_id it means "no garage has this slug".
    """

    tenant_id: str | None
    tenant_name: str | None
    source: str
    slug: str | None = None

    @classmethod
    def unresolved(cls, slug: str | None = None) -> EffectiveTenantContext:
        """Context for a session without a garage."""
        return cls(tenant_id=None, tenant_name=None, source="none", slug=slug)

    @property
    def is_resolved(self) -> bool:
        """Check if a garage was resolved."""
        return self.tenant_id is not None
