"""Application-layer value objects for the tenancy context.

These describe the results of use cases (reconciliation, selection) rather
than core business entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tenancy.domain.value_objects import EntryPoint, Role, TenantId, UserId


class ReconciliationOutcome(StrEnum):
    """Terminal, non-error outcomes of a reconciliation run.

    Access denial and transient failures are raised as exceptions instead.
    """

    NO_IDENTITY = "no_identity"
    RESOLVED = "resolved"
    NO_TENANT_AVAILABLE = "no_tenant_available"
    SELECTION_REQUIRED = "selection_required"


@dataclass(frozen=True)
class ReconciliationResult:
    """Result of reconciling a user's garage assignment.

    Attributes:
        outcome: Which terminal state the run ended in.
        entry_point: Entry point the run was evaluated for.
        user_id: The user reconciled, None without an identity.
        role: The user's role, when known.
        tenant_id: Assigned garage when resolved.
        assigned: True when this run wrote the assignment.
        landing_path: Where the shell should send the user, when resolved
            or when a garage must be selected.
    """

    outcome: ReconciliationOutcome
    entry_point: EntryPoint
    user_id: UserId | None = None
    role: Role | None = None
    tenant_id: TenantId | None = None
    assigned: bool = False
    landing_path: str | None = None

    @property
    def is_resolved(self) -> bool:
        """Check if the run ended with a garage assigned."""
        return self.outcome == ReconciliationOutcome.RESOLVED


@dataclass(frozen=True)
class TenantSelection:
    """Result of an explicit garage selection."""

    user_id: UserId
    tenant_id: TenantId
    previous_tenant_id: TenantId | None
