"""Garage assignment reconciliation.

Decides, for an authenticated user arriving through an entry point, which
garage their profile should point at, and repairs inconsistent assignment
state on the way:

Owner entry point
    - not an administrator: sign out, AccessDeniedError (never assign)
    - profile already assigned: resolved, no write
    - owns garages: assign the first owned garage (creation order)
    - owns none: assign the oldest garage in the store as a fallback,
      or report that no garage is available

Staff entry point
    - no role: sign out, AccessDeniedError
    - profile already assigned: resolved, no write
    - administrator: no write; the user is sent to garage selection
    - any other role: assign the configured default garage or the oldest
      garage; with no garage at all, sign out and AccessDeniedError

Every write is a conditional "assign if unassigned", so running the
reconciler again on unchanged state is a no-op and two concurrent runs
for the same user cannot overwrite each other.
"""

from __future__ import annotations

from typing import NoReturn

from tenancy.application.observability import DefaultReconcilerProbe, ReconcilerProbe
from tenancy.application.services.role_verifier import RoleVerifier
from tenancy.application.services.tenant_directory_service import (
    TenantDirectoryService,
)
from tenancy.application.timeouts import call_with_timeout
from tenancy.application.value_objects import (
    ReconciliationOutcome,
    ReconciliationResult,
)
from tenancy.domain.aggregates import UserProfile
from tenancy.domain.landing import STAFF_GARAGE_SELECTION_PATH, landing_path
from tenancy.domain.value_objects import EntryPoint, TenantId, UserId, VerifiedRole
from tenancy.ports.collaborators import AuthenticationProvider
from tenancy.ports.exceptions import (
    AccessDeniedError,
    ProfileNotFoundError,
    TransientStoreError,
)
from tenancy.ports.repositories import IProfileRepository


class TenantAssignmentReconciler:
    """Application service reconciling a user's garage assignment."""

    def __init__(
        self,
        role_verifier: RoleVerifier,
        directory: TenantDirectoryService,
        profile_repository: IProfileRepository,
        authentication: AuthenticationProvider,
        call_timeout: float,
        default_tenant_slug: str | None = None,
        probe: ReconcilerProbe | None = None,
    ):
        """Initialize the reconciler.

        Args:
            role_verifier: Resolves the user's role
            directory: Garage lookups (owned garages, fallbacks)
            profile_repository: Reads and conditionally writes the assignment
            authentication: Used to sign the user out on access denial
            call_timeout: Seconds allowed for each store call
            default_tenant_slug: Garage staff users fall back to, if any
            probe: Optional domain probe for observability
        """
        self._role_verifier = role_verifier
        self._directory = directory
        self._profile_repository = profile_repository
        self._authentication = authentication
        self._call_timeout = call_timeout
        self._default_tenant_slug = default_tenant_slug
        self._probe = probe or DefaultReconcilerProbe()

    async def reconcile(
        self,
        user_id: UserId | None,
        entry_point: EntryPoint = EntryPoint.OWNER,
    ) -> ReconciliationResult:
        """Reconcile the garage assignment of ``user_id``.

        Args:
            user_id: The authenticated user, or None for an anonymous session
            entry_point: Sign-in area the user arrived through

        Returns:
            ReconciliationResult; NO_IDENTITY means the caller must send the
            user to authentication

        Raises:
            AccessDeniedError: The user may not use this entry point; the
                session has been signed out
            TransientStoreError: A lookup or write failed or timed out;
                nothing was changed by the failing step
            ProfileNotFoundError: The user has no profile row
        """
        if user_id is None:
            self._probe.no_identity(entry_point=entry_point.value)
            return ReconciliationResult(
                outcome=ReconciliationOutcome.NO_IDENTITY,
                entry_point=entry_point,
            )

        verified = await self._role_verifier.verify(user_id)

        if entry_point == EntryPoint.OWNER:
            return await self._reconcile_owner(verified)
        return await self._reconcile_staff(verified)

    async def _reconcile_owner(self, verified: VerifiedRole) -> ReconciliationResult:
        if not verified.is_administrator:
            await self._deny(
                verified,
                EntryPoint.OWNER,
                "Only administrators can access the garage owner area",
            )

        profile = await self._load_profile(verified.user_id)
        if profile.assigned_tenant_id is not None:
            return self._already_assigned(verified, EntryPoint.OWNER, profile)

        owned = await self._directory.list_owned_by(verified.user_id)
        if owned:
            return await self._assign(verified, EntryPoint.OWNER, owned[0].id, "owned")

        fallback = await self._directory.first_tenant()
        if fallback is None:
            return self._no_tenant_available(verified, EntryPoint.OWNER)
        return await self._assign(verified, EntryPoint.OWNER, fallback.id, "fallback")

    async def _reconcile_staff(self, verified: VerifiedRole) -> ReconciliationResult:
        if verified.role is None:
            await self._deny(
                verified,
                EntryPoint.STAFF,
                "Your account does not have an assigned role",
            )

        profile = await self._load_profile(verified.user_id)
        if profile.assigned_tenant_id is not None:
            return self._already_assigned(verified, EntryPoint.STAFF, profile)

        if verified.is_administrator:
            # Administrators choose their garage themselves; nothing is written.
            self._probe.selection_required(user_id=verified.user_id.value)
            return ReconciliationResult(
                outcome=ReconciliationOutcome.SELECTION_REQUIRED,
                entry_point=EntryPoint.STAFF,
                user_id=verified.user_id,
                role=verified.role,
                landing_path=STAFF_GARAGE_SELECTION_PATH,
            )

        fallback = None
        if self._default_tenant_slug:
            fallback = await self._directory.lookup_by_slug(self._default_tenant_slug)
        if fallback is None:
            fallback = await self._directory.first_tenant()
        if fallback is None:
            self._probe.no_tenant_available(user_id=verified.user_id.value)
            await self._deny(
                verified,
                EntryPoint.STAFF,
                "You don't have access to any garages. Please contact an administrator.",
            )
        return await self._assign(verified, EntryPoint.STAFF, fallback.id, "fallback")

    async def _load_profile(self, user_id: UserId) -> UserProfile:
        profile = await call_with_timeout(
            self._profile_repository.get_by_user_id(user_id),
            self._call_timeout,
            "profile_get",
        )
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id.value}")
        return profile

    async def _assign(
        self,
        verified: VerifiedRole,
        entry_point: EntryPoint,
        tenant_id: TenantId,
        reason: str,
    ) -> ReconciliationResult:
        written = await call_with_timeout(
            self._profile_repository.assign_if_unassigned(verified.user_id, tenant_id),
            self._call_timeout,
            "profile_assign_if_unassigned",
        )
        if written:
            self._probe.tenant_assigned(
                user_id=verified.user_id.value,
                tenant_id=tenant_id.value,
                reason=reason,
            )
            return self._resolved(verified, entry_point, tenant_id, assigned=True)

        # Another writer got there first; report what it stored.
        current = await self._load_profile(verified.user_id)
        winner = current.assigned_tenant_id
        self._probe.concurrent_assignment(
            user_id=verified.user_id.value,
            tenant_id=winner.value if winner else None,
        )
        if winner is None:
            raise TransientStoreError(
                "Garage assignment did not take effect",
                operation="profile_assign_if_unassigned",
            )
        return self._resolved(verified, entry_point, winner, assigned=False)

    async def _deny(
        self, verified: VerifiedRole, entry_point: EntryPoint, reason: str
    ) -> NoReturn:
        await call_with_timeout(
            self._authentication.sign_out(), self._call_timeout, "sign_out"
        )
        self._probe.access_denied(
            user_id=verified.user_id.value,
            entry_point=entry_point.value,
            role=verified.role.value if verified.role else None,
        )
        raise AccessDeniedError(reason)

    def _already_assigned(
        self,
        verified: VerifiedRole,
        entry_point: EntryPoint,
        profile: UserProfile,
    ) -> ReconciliationResult:
        assert profile.assigned_tenant_id is not None
        self._probe.assignment_present(
            user_id=verified.user_id.value,
            tenant_id=profile.assigned_tenant_id.value,
        )
        return self._resolved(
            verified, entry_point, profile.assigned_tenant_id, assigned=False
        )

    def _no_tenant_available(
        self, verified: VerifiedRole, entry_point: EntryPoint
    ) -> ReconciliationResult:
        self._probe.no_tenant_available(user_id=verified.user_id.value)
        return ReconciliationResult(
            outcome=ReconciliationOutcome.NO_TENANT_AVAILABLE,
            entry_point=entry_point,
            user_id=verified.user_id,
            role=verified.role,
        )

    @staticmethod
    def _resolved(
        verified: VerifiedRole,
        entry_point: EntryPoint,
        tenant_id: TenantId,
        assigned: bool,
    ) -> ReconciliationResult:
        return ReconciliationResult(
            outcome=ReconciliationOutcome.RESOLVED,
            entry_point=entry_point,
            user_id=verified.user_id,
            role=verified.role,
            tenant_id=tenant_id,
            assigned=assigned,
            landing_path=landing_path(entry_point, verified.role),
        )
