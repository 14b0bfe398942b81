"""Role verification.

Resolves a user to a coarse role. A user without a role row is the
least-privileged user, not a fault.
"""

from __future__ import annotations

from tenancy.application.observability import DefaultRoleVerifierProbe, RoleVerifierProbe
from tenancy.application.timeouts import call_with_timeout
from tenancy.domain.value_objects import UserId, VerifiedRole
from tenancy.ports.exceptions import TransientStoreError
from tenancy.ports.repositories import IRoleAssignmentRepository


class RoleVerifier:
    """Application service looking up a user's role."""

    def __init__(
        self,
        role_repository: IRoleAssignmentRepository,
        call_timeout: float,
        probe: RoleVerifierProbe | None = None,
    ):
        self._role_repository = role_repository
        self._call_timeout = call_timeout
        self._probe = probe or DefaultRoleVerifierProbe()

    async def verify(self, user_id: UserId) -> VerifiedRole:
        """Look up the role of ``user_id``.

        Returns:
            VerifiedRole; its role is None when no role is assigned

        Raises:
            TransientStoreError: If the lookup failed or timed out
        """
        try:
            role = await call_with_timeout(
                self._role_repository.get_role(user_id),
                self._call_timeout,
                "role_lookup",
            )
        except TransientStoreError as e:
            self._probe.role_lookup_failed(user_id=user_id.value, error=e)
            raise

        if role is None:
            self._probe.role_missing(user_id=user_id.value)
        else:
            self._probe.role_verified(user_id=user_id.value, role=role.value)

        return VerifiedRole(user_id=user_id, role=role)
