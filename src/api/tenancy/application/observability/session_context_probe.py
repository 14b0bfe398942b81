"""Domain probe for the per-session tenant context."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class SessionContextProbe(Protocol):
    """Domain probe for session context lifecycle and refreshes."""

    def session_started(self) -> None:
        """Record that a session context was initialised."""
        ...

    def session_torn_down(self, discarded_refreshes: int) -> None:
        """Record that a session context was torn down."""
        ...

    def context_applied(self, generation: int, tenant_id: str | None, source: str) -> None:
        """Record that a refresh replaced the cached context."""
        ...

    def refresh_superseded(self, generation: int, latest_generation: int) -> None:
        """Record that a refresh result was discarded as out of date."""
        ...

    def refresh_failed(self, generation: int, error: Exception) -> None:
        """Record that a refresh ended in an error kept next to the stale context."""
        ...

    def with_context(self, context: ObservationContext) -> SessionContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionContextProbe:
    """Default implementation of SessionContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSessionContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionContextProbe(logger=self._logger, context=context)

    def session_started(self) -> None:
        """Record that a session context was initialised."""
        self._logger.debug(
            "tenant_session_started",
            **self._get_context_kwargs(),
        )

    def session_torn_down(self, discarded_refreshes: int) -> None:
        """Record that a session context was torn down."""
        self._logger.debug(
            "tenant_session_torn_down",
            discarded_refreshes=discarded_refreshes,
            **self._get_context_kwargs(),
        )

    def context_applied(self, generation: int, tenant_id: str | None, source: str) -> None:
        """Record that a refresh replaced the cached context."""
        self._logger.info(
            "tenant_context_applied",
            generation=generation,
            tenant_id=tenant_id,
            source=source,
            **self._get_context_kwargs(),
        )

    def refresh_superseded(self, generation: int, latest_generation: int) -> None:
        """Record that a refresh result was discarded as out of date."""
        self._logger.debug(
            "tenant_context_refresh_superseded",
            generation=generation,
            latest_generation=latest_generation,
            **self._get_context_kwargs(),
        )

    def refresh_failed(self, generation: int, error: Exception) -> None:
        """Record that a refresh ended in an error kept next to the stale context."""
        self._logger.warning(
            "tenant_context_refresh_failed",
            generation=generation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
