"""Domain aggregates for the tenancy context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from tenancy.domain.aggregates.tenant import Tenant
from tenancy.domain.aggregates.user_profile import UserProfile

__all__ = [
    "Tenant",
    "UserProfile",
]
