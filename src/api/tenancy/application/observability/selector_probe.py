"""Domain probe for explicit garage selection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class TenantSelectorProbe(Protocol):
    """Domain probe for user-initiated garage selection."""

    def tenant_selected(
        self, user_id: str, tenant_id: str, previous_tenant_id: str | None
    ) -> None:
        """Record that a user selected a garage."""
        ...

    def selection_rejected(self, user_id: str | None, tenant_id: str, reason: str) -> None:
        """Record that a selection could not be applied."""
        ...

    def with_context(self, context: ObservationContext) -> TenantSelectorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantSelectorProbe:
    """Default implementation of TenantSelectorProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantSelectorProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantSelectorProbe(logger=self._logger, context=context)

    def tenant_selected(
        self, user_id: str, tenant_id: str, previous_tenant_id: str | None
    ) -> None:
        """Record that a user selected a garage."""
        self._logger.info(
            "tenant_selected",
            user_id=user_id,
            tenant_id=tenant_id,
            previous_tenant_id=previous_tenant_id,
            **self._get_context_kwargs(),
        )

    def selection_rejected(self, user_id: str | None, tenant_id: str, reason: str) -> None:
        """Record that a selection could not be applied."""
        self._logger.warning(
            "tenant_selection_rejected",
            user_id=user_id,
            tenant_id=tenant_id,
            reason=reason,
            **self._get_context_kwargs(),
        )
