"""Shared fixtures for tenancy unit tests."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from tenancy.domain.aggregates import Tenant, UserProfile
from tenancy.domain.value_objects import TenantId, UserId
from tenancy.ports.collaborators import AuthenticationProvider, HostnameProvider
from tenancy.ports.repositories import (
    IProfileRepository,
    IRoleAssignmentRepository,
    ITenantRepository,
)

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


def _make_tenant(
    tenant_id: str,
    slug: str | None = None,
    owner: str | None = None,
    age_days: int = 0,
) -> Tenant:
    """Build a garage created ``age_days`` after a fixed epoch."""
    return Tenant(
        id=TenantId(value=tenant_id),
        slug=slug or tenant_id,
        name=f"Garage {tenant_id}",
        owner_id=UserId(value=owner) if owner else None,
        created_at=_EPOCH + timedelta(days=age_days),
    )


def _make_profile(user_id: str, tenant_id: str | None = None) -> UserProfile:
    return UserProfile(
        user_id=UserId(value=user_id),
        assigned_tenant_id=TenantId(value=tenant_id) if tenant_id else None,
    )


@pytest.fixture
def user_id():
    return UserId(value="user-1")


@pytest.fixture
def mock_tenant_repo():
    """Mock ITenantRepository with empty results."""
    repo = Mock(spec=ITenantRepository)
    repo.get_by_slug = AsyncMock(return_value=None)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_owned_by = AsyncMock(return_value=[])
    repo.get_first = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_profile_repo():
    """Mock IProfileRepository; writes succeed by default."""
    repo = Mock(spec=IProfileRepository)
    repo.get_by_user_id = AsyncMock(return_value=None)
    repo.assign_if_unassigned = AsyncMock(return_value=True)
    repo.set_assigned_tenant = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_role_repo():
    """Mock IRoleAssignmentRepository; no role by default."""
    repo = Mock(spec=IRoleAssignmentRepository)
    repo.get_role = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_authentication(user_id):
    """Mock AuthenticationProvider signed in as user-1."""
    auth = Mock(spec=AuthenticationProvider)
    auth.current_user = AsyncMock(return_value=user_id)
    auth.sign_out = AsyncMock(return_value=None)
    return auth


@pytest.fixture
def mock_hostname_provider():
    """Mock HostnameProvider on a host without subdomain."""
    provider = Mock(spec=HostnameProvider)
    provider.get_hostname = MagicMock(return_value="garagedesk.app")
    return provider


@pytest.fixture
def make_tenant():
    """Factory for Tenant aggregates."""
    return _make_tenant


@pytest.fixture
def make_profile():
    """Factory for UserProfile aggregates."""
    return _make_profile
