"""SQLAlchemy ORM models for the tenancy bounded context."""

from tenancy.infrastructure.models.profile import ProfileModel
from tenancy.infrastructure.models.role_assignment import RoleAssignmentModel
from tenancy.infrastructure.models.tenant import TenantModel

__all__ = [
    "ProfileModel",
    "RoleAssignmentModel",
    "TenantModel",
]
