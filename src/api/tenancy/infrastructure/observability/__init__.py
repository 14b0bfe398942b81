"""Domain-Oriented Observability for the tenancy infrastructure layer."""

from tenancy.infrastructure.observability.repository_probe import (
    DefaultProfileRepositoryProbe,
    DefaultRoleAssignmentRepositoryProbe,
    DefaultTenantRepositoryProbe,
    ProfileRepositoryProbe,
    RoleAssignmentRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "DefaultProfileRepositoryProbe",
    "DefaultRoleAssignmentRepositoryProbe",
    "DefaultTenantRepositoryProbe",
    "ProfileRepositoryProbe",
    "RoleAssignmentRepositoryProbe",
    "TenantRepositoryProbe",
]
