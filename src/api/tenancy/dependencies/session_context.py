"""Session context FastAPI dependency.

Builds a TenantSessionContext for the current request. The caller runs
``init()`` with the slug and entry point taken from the request; HTTP
requests are independent, so each request gets its own context.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        session_context: Annotated[
            TenantSessionContext, Depends(get_tenant_session_context)
        ],
    ):
        state = await session_context.init(explicit_slug=slug)
        ...
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.application.services import (
    TenantAssignmentReconciler,
    TenantDirectoryService,
)
from tenancy.application.session_context import TenantSessionContext
from tenancy.dependencies.collaborators import (
    get_authentication_provider,
    get_hostname_provider,
)
from tenancy.dependencies.services import (
    get_assignment_reconciler,
    get_profile_repository,
    get_tenant_directory_service,
)
from tenancy.infrastructure.profile_repository import ProfileRepository
from tenancy.infrastructure.request_adapters import (
    RequestAuthenticationProvider,
    RequestHostnameProvider,
)


def get_tenant_session_context(
    hostname_provider: Annotated[
        RequestHostnameProvider, Depends(get_hostname_provider)
    ],
    authentication: Annotated[
        RequestAuthenticationProvider, Depends(get_authentication_provider)
    ],
    directory: Annotated[
        TenantDirectoryService, Depends(get_tenant_directory_service)
    ],
    reconciler: Annotated[
        TenantAssignmentReconciler, Depends(get_assignment_reconciler)
    ],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repository)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenantSessionContext:
    """Get an inactive TenantSessionContext for the current request."""
    return TenantSessionContext(
        hostname_provider=hostname_provider,
        authentication=authentication,
        directory=directory,
        reconciler=reconciler,
        profile_repository=profile_repo,
        call_timeout=settings.call_timeout_seconds,
        local_hostnames=settings.local_hostnames,
    )
