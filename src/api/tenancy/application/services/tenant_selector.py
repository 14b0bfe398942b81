"""Explicit garage selection.

A user picking a garage always wins over any automatic assignment. The
write is a single unconditional update; it either lands or changes
nothing.
"""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantSelectorProbe,
    TenantSelectorProbe,
)
from tenancy.application.timeouts import call_with_timeout
from tenancy.application.value_objects import TenantSelection
from tenancy.domain.value_objects import TenantId, UserId
from tenancy.ports.exceptions import (
    InvalidReferenceError,
    ProfileNotFoundError,
    TransientStoreError,
    UnauthorizedError,
)
from tenancy.ports.repositories import IProfileRepository


class TenantSelector:
    """Application service binding a chosen garage to the acting user."""

    def __init__(
        self,
        profile_repository: IProfileRepository,
        call_timeout: float,
        probe: TenantSelectorProbe | None = None,
    ):
        self._profile_repository = profile_repository
        self._call_timeout = call_timeout
        self._probe = probe or DefaultTenantSelectorProbe()

    async def select(self, user_id: UserId | None, tenant_id: TenantId) -> TenantSelection:
        """Overwrite the user's garage assignment with ``tenant_id``.

        The garage id is not validated up front; the store rejects dangling
        references and that rejection is surfaced as-is.

        Args:
            user_id: The acting user, or None if nobody is signed in
            tenant_id: The garage the user picked

        Returns:
            TenantSelection with the previous assignment

        Raises:
            UnauthorizedError: If there is no authenticated user
            InvalidReferenceError: If tenant_id does not reference a garage
            ProfileNotFoundError: If the user has no profile row
            TransientStoreError: If the store failed or timed out
        """
        if user_id is None:
            self._probe.selection_rejected(
                user_id=None, tenant_id=tenant_id.value, reason="unauthenticated"
            )
            raise UnauthorizedError("Sign in to select a garage")

        try:
            profile = await call_with_timeout(
                self._profile_repository.get_by_user_id(user_id),
                self._call_timeout,
                "profile_get",
            )
            if profile is None:
                raise ProfileNotFoundError(f"No profile for user {user_id.value}")

            updated = await call_with_timeout(
                self._profile_repository.set_assigned_tenant(user_id, tenant_id),
                self._call_timeout,
                "profile_set_assigned_tenant",
            )
            if not updated:
                raise ProfileNotFoundError(f"No profile for user {user_id.value}")
        except (InvalidReferenceError, ProfileNotFoundError, TransientStoreError) as e:
            self._probe.selection_rejected(
                user_id=user_id.value,
                tenant_id=tenant_id.value,
                reason=type(e).__name__,
            )
            raise

        previous = profile.assigned_tenant_id
        self._probe.tenant_selected(
            user_id=user_id.value,
            tenant_id=tenant_id.value,
            previous_tenant_id=previous.value if previous else None,
        )
        return TenantSelection(
            user_id=user_id,
            tenant_id=tenant_id,
            previous_tenant_id=previous,
        )
