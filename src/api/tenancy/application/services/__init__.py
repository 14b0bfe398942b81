"""Application services for the tenancy bounded context.

Application services orchestrate domain aggregates, repositories, and
collaborators to fulfil the tenant resolution use cases.
"""

from tenancy.application.services.assignment_reconciler import (
    TenantAssignmentReconciler,
)
from tenancy.application.services.role_verifier import RoleVerifier
from tenancy.application.services.tenant_directory_service import (
    TenantDirectoryService,
)
from tenancy.application.services.tenant_selector import TenantSelector

__all__ = [
    "RoleVerifier",
    "TenantAssignmentReconciler",
    "TenantDirectoryService",
    "TenantSelector",
]
