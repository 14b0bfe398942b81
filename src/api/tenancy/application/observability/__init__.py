"""Domain-Oriented Observability for the tenancy application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from tenancy.application.observability.reconciler_probe import (
    DefaultReconcilerProbe,
    ReconcilerProbe,
)
from tenancy.application.observability.role_verifier_probe import (
    DefaultRoleVerifierProbe,
    RoleVerifierProbe,
)
from tenancy.application.observability.selector_probe import (
    DefaultTenantSelectorProbe,
    TenantSelectorProbe,
)
from tenancy.application.observability.session_context_probe import (
    DefaultSessionContextProbe,
    SessionContextProbe,
)
from tenancy.application.observability.tenant_directory_probe import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)

__all__ = [
    "DefaultReconcilerProbe",
    "DefaultRoleVerifierProbe",
    "DefaultSessionContextProbe",
    "DefaultTenantDirectoryProbe",
    "DefaultTenantSelectorProbe",
    "ReconcilerProbe",
    "RoleVerifierProbe",
    "SessionContextProbe",
    "TenantDirectoryProbe",
    "TenantSelectorProbe",
]
