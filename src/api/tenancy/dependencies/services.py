"""FastAPI dependency wiring for the tenancy services.

Repositories receive the shared session maker; services receive the
per-call timeout from TenancySettings.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.dependencies import get_sessionmaker
from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.application.services import (
    RoleVerifier,
    TenantAssignmentReconciler,
    TenantDirectoryService,
    TenantSelector,
)
from tenancy.dependencies.collaborators import get_authentication_provider
from tenancy.infrastructure.profile_repository import ProfileRepository
from tenancy.infrastructure.request_adapters import RequestAuthenticationProvider
from tenancy.infrastructure.role_assignment_repository import RoleAssignmentRepository
from tenancy.infrastructure.tenant_repository import TenantRepository


def get_tenant_repository(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_sessionmaker)
    ],
) -> TenantRepository:
    """Get TenantRepository instance."""
    return TenantRepository(session_factory=session_factory)


def get_profile_repository(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_sessionmaker)
    ],
) -> ProfileRepository:
    """Get ProfileRepository instance."""
    return ProfileRepository(session_factory=session_factory)


def get_role_assignment_repository(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_sessionmaker)
    ],
) -> RoleAssignmentRepository:
    """Get RoleAssignmentRepository instance."""
    return RoleAssignmentRepository(session_factory=session_factory)


def get_tenant_directory_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenantDirectoryService:
    """Get TenantDirectoryService instance."""
    return TenantDirectoryService(
        tenant_repository=tenant_repo,
        call_timeout=settings.call_timeout_seconds,
    )


def get_role_verifier(
    role_repo: Annotated[
        RoleAssignmentRepository, Depends(get_role_assignment_repository)
    ],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> RoleVerifier:
    """Get RoleVerifier instance."""
    return RoleVerifier(
        role_repository=role_repo,
        call_timeout=settings.call_timeout_seconds,
    )


def get_assignment_reconciler(
    role_verifier: Annotated[RoleVerifier, Depends(get_role_verifier)],
    directory: Annotated[
        TenantDirectoryService, Depends(get_tenant_directory_service)
    ],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repository)],
    authentication: Annotated[
        RequestAuthenticationProvider, Depends(get_authentication_provider)
    ],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenantAssignmentReconciler:
    """Get TenantAssignmentReconciler instance.

    Args:
        role_verifier: Role lookups
        directory: Garage lookups
        profile_repo: Profile reads and conditional writes
        authentication: Request-scoped provider used for sign-out
        settings: Tenancy settings (timeout, default garage slug)

    Returns:
        TenantAssignmentReconciler instance
    """
    return TenantAssignmentReconciler(
        role_verifier=role_verifier,
        directory=directory,
        profile_repository=profile_repo,
        authentication=authentication,
        call_timeout=settings.call_timeout_seconds,
        default_tenant_slug=settings.default_tenant_slug,
    )


def get_tenant_selector(
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repository)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenantSelector:
    """Get TenantSelector instance."""
    return TenantSelector(
        profile_repository=profile_repo,
        call_timeout=settings.call_timeout_seconds,
    )
