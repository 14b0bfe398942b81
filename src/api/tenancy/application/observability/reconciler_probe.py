"""Domain probe for garage assignment reconciliation.

Following Domain-Oriented Observability patterns, this probe captures every
terminal state of the reconciler, including the security-relevant forced
sign-outs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ReconcilerProbe(Protocol):
    """Domain probe for the tenant assignment reconciler."""

    def no_identity(self, entry_point: str) -> None:
        """Record that reconciliation ran without an authenticated user."""
        ...

    def assignment_present(self, user_id: str, tenant_id: str) -> None:
        """Record that the profile was already assigned (no write)."""
        ...

    def tenant_assigned(self, user_id: str, tenant_id: str, reason: str) -> None:
        """Record that the reconciler wrote an assignment."""
        ...

    def concurrent_assignment(self, user_id: str, tenant_id: str | None) -> None:
        """Record that another writer assigned the profile first."""
        ...

    def no_tenant_available(self, user_id: str) -> None:
        """Record that no garage exists to assign."""
        ...

    def selection_required(self, user_id: str) -> None:
        """Record that an unassigned administrator must pick a garage."""
        ...

    def access_denied(self, user_id: str, entry_point: str, role: str | None) -> None:
        """Record that a user was signed out for using the wrong entry point."""
        ...

    def with_context(self, context: ObservationContext) -> ReconcilerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultReconcilerProbe:
    """Default implementation of ReconcilerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultReconcilerProbe:
        """Create a new probe with observation context bound."""
        return DefaultReconcilerProbe(logger=self._logger, context=context)

    def no_identity(self, entry_point: str) -> None:
        """Record that reconciliation ran without an authenticated user."""
        self._logger.debug(
            "reconciliation_no_identity",
            entry_point=entry_point,
            **self._get_context_kwargs(),
        )

    def assignment_present(self, user_id: str, tenant_id: str) -> None:
        """Record that the profile was already assigned (no write)."""
        self._logger.debug(
            "reconciliation_assignment_present",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_assigned(self, user_id: str, tenant_id: str, reason: str) -> None:
        """Record that the reconciler wrote an assignment."""
        self._logger.info(
            "reconciliation_tenant_assigned",
            user_id=user_id,
            tenant_id=tenant_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def concurrent_assignment(self, user_id: str, tenant_id: str | None) -> None:
        """Record that another writer assigned the profile first."""
        self._logger.warning(
            "reconciliation_concurrent_assignment",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def no_tenant_available(self, user_id: str) -> None:
        """Record that no garage exists to assign."""
        self._logger.warning(
            "reconciliation_no_tenant_available",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def selection_required(self, user_id: str) -> None:
        """Record that an unassigned administrator must pick a garage."""
        self._logger.info(
            "reconciliation_selection_required",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def access_denied(self, user_id: str, entry_point: str, role: str | None) -> None:
        """Record that a user was signed out for using the wrong entry point."""
        self._logger.warning(
            "reconciliation_access_denied",
            user_id=user_id,
            entry_point=entry_point,
            role=role,
            **self._get_context_kwargs(),
        )
