"""Per-session tenant context.

Holds the EffectiveTenantContext of one authenticated session and
recomputes it on demand. Consumers receive the object explicitly; there is
no module-level instance.

Lifecycle: ``init()`` when the authenticated session starts, ``refresh()``
on navigation into a garage-scoped area, ``teardown()`` on logout.

Refresh semantics:
- the previous context stays visible while a refresh is in flight
- only the most recently started refresh is applied; an older refresh
  that settles later is discarded, never aborted
- a failure is recorded as ``last_error`` next to the last good context
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from shared_kernel.tenant_context import EffectiveTenantContext
from tenancy.application.observability import (
    DefaultSessionContextProbe,
    SessionContextProbe,
)
from tenancy.application.services import (
    TenantAssignmentReconciler,
    TenantDirectoryService,
)
from tenancy.application.timeouts import call_with_timeout
from tenancy.application.value_objects import ReconciliationResult
from tenancy.domain.hostname import DEFAULT_LOCAL_HOSTNAMES, parse_hostname
from tenancy.domain.slug import resolve_slug
from tenancy.domain.value_objects import ContextSource, EntryPoint, TenantId, UserId
from tenancy.ports.collaborators import AuthenticationProvider, HostnameProvider
from tenancy.ports.exceptions import AccessDeniedError, TenancyError
from tenancy.ports.repositories import IProfileRepository


@dataclass(frozen=True)
class TenantSessionState:
    """Snapshot of a session context.

    Attributes:
        context: Last applied context, None until the first refresh lands.
        last_error: Error of the latest refresh, if it failed.
        is_refreshing: True while any refresh is in flight.
        reconciliation: Result of the latest applied reconciliation, if the
            refresh ran one.
    """

    context: EffectiveTenantContext | None
    last_error: TenancyError | None
    is_refreshing: bool
    reconciliation: ReconciliationResult | None = None

    @property
    def is_loading(self) -> bool:
        """Check if no context has been computed yet."""
        return self.context is None


class TenantSessionContext:
    """Session-scoped holder of the effective garage."""

    def __init__(
        self,
        hostname_provider: HostnameProvider,
        authentication: AuthenticationProvider,
        directory: TenantDirectoryService,
        reconciler: TenantAssignmentReconciler,
        profile_repository: IProfileRepository,
        call_timeout: float,
        local_hostnames: Iterable[str] = DEFAULT_LOCAL_HOSTNAMES,
        probe: SessionContextProbe | None = None,
    ):
        """Initialize the session context (inactive until ``init()``).

        Args:
            hostname_provider: Source of the current hostname
            authentication: Source of the current identity
            directory: Garage lookups
            reconciler: Assignment reconciliation for entry-point flows
            profile_repository: Reads the assignment outside those flows
            call_timeout: Seconds allowed for each store call
            local_hostnames: Host names treated as local development
            probe: Optional domain probe for observability
        """
        self._hostname_provider = hostname_provider
        self._authentication = authentication
        self._directory = directory
        self._reconciler = reconciler
        self._profile_repository = profile_repository
        self._call_timeout = call_timeout
        self._local_hostnames = frozenset(local_hostnames)
        self._probe = probe or DefaultSessionContextProbe()

        self._active = False
        self._generation = 0
        self._in_flight = 0
        self._context: EffectiveTenantContext | None = None
        self._last_error: TenancyError | None = None
        self._reconciliation: ReconciliationResult | None = None

    @property
    def is_active(self) -> bool:
        """Check if the session context is between init() and teardown()."""
        return self._active

    @property
    def context(self) -> EffectiveTenantContext | None:
        """The current context, None while the first refresh is loading."""
        return self._context

    @property
    def tenant_id(self) -> str | None:
        """Shortcut for the resolved garage id."""
        return self._context.tenant_id if self._context else None

    @property
    def last_error(self) -> TenancyError | None:
        """Error of the latest applied refresh, if it failed."""
        return self._last_error

    @property
    def state(self) -> TenantSessionState:
        """Snapshot of context, error and refresh status."""
        return TenantSessionState(
            context=self._context,
            last_error=self._last_error,
            is_refreshing=self._in_flight > 0,
            reconciliation=self._reconciliation,
        )

    async def init(
        self,
        explicit_slug: str | None = None,
        entry_point: EntryPoint | None = None,
    ) -> TenantSessionState:
        """Activate the context for a new session and compute it once.

        On a context that is already active this is a plain refresh: the
        current context stays visible until the new one lands.
        """
        if not self._active:
            self._active = True
            self._context = None
            self._last_error = None
            self._reconciliation = None
            self._probe.session_started()
        return await self.refresh(explicit_slug=explicit_slug, entry_point=entry_point)

    def teardown(self) -> None:
        """Deactivate the context; results of in-flight refreshes are dropped."""
        self._active = False
        self._generation += 1
        self._context = None
        self._last_error = None
        self._reconciliation = None
        self._probe.session_torn_down(discarded_refreshes=self._in_flight)

    async def refresh(
        self,
        explicit_slug: str | None = None,
        entry_point: EntryPoint | None = None,
    ) -> TenantSessionState:
        """Recompute the effective garage and replace the cached context.

        Args:
            explicit_slug: Slug supplied by the caller; beats the subdomain
            entry_point: Set when the caller is in an assignment flow; runs
                the reconciler for that entry point

        Returns:
            The state after this refresh. If a newer refresh was started in
            the meantime, this refresh's result is discarded and the state
            reflects whatever is current.

        Raises:
            RuntimeError: If called before init() or after teardown()
        """
        if not self._active:
            raise RuntimeError("Tenant session context is not active")

        self._generation += 1
        generation = self._generation
        self._in_flight += 1
        try:
            try:
                context, reconciliation = await self._resolve(explicit_slug, entry_point)
            except TenancyError as e:
                if self._is_latest(generation):
                    self._last_error = e
                    if isinstance(e, AccessDeniedError):
                        # The session was signed out; nothing stale may remain.
                        self._context = EffectiveTenantContext.unresolved()
                        self._reconciliation = None
                    self._probe.refresh_failed(generation=generation, error=e)
                return self.state

            if self._is_latest(generation):
                self._context = context
                self._last_error = None
                self._reconciliation = reconciliation
                self._probe.context_applied(
                    generation=generation,
                    tenant_id=context.tenant_id,
                    source=context.source,
                )
            return self.state
        finally:
            self._in_flight -= 1

    def _is_latest(self, generation: int) -> bool:
        if generation == self._generation and self._active:
            return True
        self._probe.refresh_superseded(
            generation=generation, latest_generation=self._generation
        )
        return False

    async def _resolve(
        self,
        explicit_slug: str | None,
        entry_point: EntryPoint | None,
    ) -> tuple[EffectiveTenantContext, ReconciliationResult | None]:
        host = parse_hostname(self._hostname_provider.get_hostname(), self._local_hostnames)
        resolution = resolve_slug(explicit_slug, host)

        tenant = None
        if resolution.slug is not None:
            tenant = await self._directory.lookup_by_slug(resolution.slug)

        user_id = await call_with_timeout(
            self._authentication.current_user(), self._call_timeout, "current_user"
        )
        reconciliation = None
        if entry_point is not None:
            reconciliation = await self._reconciler.reconcile(user_id, entry_point)

        if resolution.slug is not None:
            if tenant is None:
                return EffectiveTenantContext.unresolved(slug=resolution.slug), reconciliation
            return (
                EffectiveTenantContext(
                    tenant_id=tenant.id.value,
                    tenant_name=tenant.name,
                    source=resolution.source.value,
                    slug=resolution.slug,
                ),
                reconciliation,
            )

        # No slug anywhere: the profile assignment decides.
        if reconciliation is not None:
            tenant_id = reconciliation.tenant_id
        else:
            tenant_id = await self._assigned_tenant(user_id)
        if tenant_id is None:
            return EffectiveTenantContext.unresolved(), reconciliation

        assigned = await self._directory.get_by_id(tenant_id)
        if assigned is None:
            # Profile points at a garage that no longer exists.
            return EffectiveTenantContext.unresolved(), reconciliation
        return (
            EffectiveTenantContext(
                tenant_id=assigned.id.value,
                tenant_name=assigned.name,
                source=ContextSource.PROFILE.value,
                slug=assigned.slug,
            ),
            reconciliation,
        )

    async def _assigned_tenant(self, user_id: UserId | None) -> TenantId | None:
        if user_id is None:
            return None
        profile = await call_with_timeout(
            self._profile_repository.get_by_user_id(user_id),
            self._call_timeout,
            "profile_get",
        )
        return profile.assigned_tenant_id if profile else None
