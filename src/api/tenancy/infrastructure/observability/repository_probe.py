"""Domain probes for tenancy repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events of the data-access boundary: garage lookups,
profile assignment writes and role reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for garage repository operations."""

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a garage was retrieved."""
        ...

    def tenant_not_found(self, lookup: str, key: str) -> None:
        """Record that no garage matched a lookup."""
        ...

    def tenants_listed(self, owner_id: str, count: int) -> None:
        """Record that the garages of an owner were listed."""
        ...

    def store_call_failed(self, operation: str, error: Exception) -> None:
        """Record that a store call failed."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class ProfileRepositoryProbe(Protocol):
    """Domain probe for profile repository operations."""

    def profile_not_found(self, user_id: str) -> None:
        """Record that a user has no profile row."""
        ...

    def assignment_written(self, user_id: str, tenant_id: str, conditional: bool) -> None:
        """Record that a garage assignment was written."""
        ...

    def assignment_skipped(self, user_id: str, tenant_id: str) -> None:
        """Record that a conditional assignment found the profile already assigned."""
        ...

    def store_call_failed(self, operation: str, error: Exception) -> None:
        """Record that a store call failed."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class RoleAssignmentRepositoryProbe(Protocol):
    """Domain probe for role assignment repository operations."""

    def unknown_role(self, user_id: str, raw_role: str) -> None:
        """Record that a stored role value is not recognised."""
        ...

    def store_call_failed(self, operation: str, error: Exception) -> None:
        """Record that a store call failed."""
        ...

    def with_context(self, context: ObservationContext) -> RoleAssignmentRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a garage was retrieved."""
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, lookup: str, key: str) -> None:
        """Record that no garage matched a lookup."""
        self._logger.debug(
            "tenant_not_found",
            lookup=lookup,
            key=key,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, owner_id: str, count: int) -> None:
        """Record that the garages of an owner were listed."""
        self._logger.debug(
            "owned_tenants_listed",
            owner_id=owner_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def store_call_failed(self, operation: str, error: Exception) -> None:
        """Record that a store call failed."""
        self._logger.error(
            "tenant_store_call_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )


class DefaultProfileRepositoryProbe:
    """Default implementation of ProfileRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileRepositoryProbe(logger=self._logger, context=context)

    def profile_not_found(self, user_id: str) -> None:
        """Record that a user has no profile row."""
        self._logger.warning(
            "profile_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def assignment_written(self, user_id: str, tenant_id: str, conditional: bool) -> None:
        """Record that a garage assignment was written."""
        self._logger.info(
            "profile_tenant_assigned",
            user_id=user_id,
            tenant_id=tenant_id,
            conditional=conditional,
            **self._get_context_kwargs(),
        )

    def assignment_skipped(self, user_id: str, tenant_id: str) -> None:
        """Record that a conditional assignment found the profile already assigned."""
        self._logger.debug(
            "profile_tenant_assignment_skipped",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def store_call_failed(self, operation: str, error: Exception) -> None:
        """Record that a store call failed."""
        self._logger.error(
            "profile_store_call_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )


class DefaultRoleAssignmentRepositoryProbe:
    """Default implementation of RoleAssignmentRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRoleAssignmentRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRoleAssignmentRepositoryProbe(logger=self._logger, context=context)

    def unknown_role(self, user_id: str, raw_role: str) -> None:
        """Record that a stored role value is not recognised."""
        self._logger.warning(
            "role_assignment_unknown_role",
            user_id=user_id,
            raw_role=raw_role,
            **self._get_context_kwargs(),
        )

    def store_call_failed(self, operation: str, error: Exception) -> None:
        """Record that a store call failed."""
        self._logger.error(
            "role_store_call_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
