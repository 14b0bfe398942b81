"""Domain probe for role verification."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class RoleVerifierProbe(Protocol):
    """Domain probe for role lookups."""

    def role_verified(self, user_id: str, role: str) -> None:
        """Record the role found for a user."""
        ...

    def role_missing(self, user_id: str) -> None:
        """Record that a user has no role and is treated as least privileged."""
        ...

    def role_lookup_failed(self, user_id: str, error: Exception) -> None:
        """Record that the role could not be looked up."""
        ...

    def with_context(self, context: ObservationContext) -> RoleVerifierProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRoleVerifierProbe:
    """Default implementation of RoleVerifierProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRoleVerifierProbe:
        """Create a new probe with observation context bound."""
        return DefaultRoleVerifierProbe(logger=self._logger, context=context)

    def role_verified(self, user_id: str, role: str) -> None:
        """Record the role found for a user."""
        self._logger.debug(
            "role_verified",
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def role_missing(self, user_id: str) -> None:
        """Record that a user has no role and is treated as least privileged."""
        self._logger.info(
            "role_missing",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def role_lookup_failed(self, user_id: str, error: Exception) -> None:
        """Record that the role could not be looked up."""
        self._logger.error(
            "role_lookup_failed",
            user_id=user_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
