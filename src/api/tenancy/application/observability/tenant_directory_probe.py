"""Domain probe for the garage directory.

Captures slug lookups so "no such garage" and store failures can be told
apart in logs as well as in code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class TenantDirectoryProbe(Protocol):
    """Domain probe for garage directory lookups."""

    def lookup_skipped(self) -> None:
        """Record that a lookup was skipped because no slug was supplied."""
        ...

    def tenant_found(self, slug: str, tenant_id: str) -> None:
        """Record that a slug resolved to a garage."""
        ...

    def tenant_not_found(self, slug: str) -> None:
        """Record that no garage has the slug."""
        ...

    def lookup_failed(self, operation: str, error: Exception) -> None:
        """Record that a directory lookup failed."""
        ...

    def with_context(self, context: ObservationContext) -> TenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantDirectoryProbe:
    """Default implementation of TenantDirectoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantDirectoryProbe(logger=self._logger, context=context)

    def lookup_skipped(self) -> None:
        """Record that a lookup was skipped because no slug was supplied."""
        self._logger.debug(
            "tenant_lookup_skipped_empty_slug",
            **self._get_context_kwargs(),
        )

    def tenant_found(self, slug: str, tenant_id: str) -> None:
        """Record that a slug resolved to a garage."""
        self._logger.debug(
            "tenant_slug_resolved",
            slug=slug,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, slug: str) -> None:
        """Record that no garage has the slug."""
        self._logger.info(
            "tenant_slug_not_found",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def lookup_failed(self, operation: str, error: Exception) -> None:
        """Record that a directory lookup failed."""
        self._logger.error(
            "tenant_lookup_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
