"""Unit tests for TenantSelector."""

from unittest.mock import MagicMock

import pytest

from tenancy.application.services import TenantSelector
from tenancy.domain.value_objects import TenantId
from tenancy.ports.exceptions import (
    InvalidReferenceError,
    ProfileNotFoundError,
    TransientStoreError,
    UnauthorizedError,
)


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def selector(mock_profile_repo, mock_probe):
    return TenantSelector(
        profile_repository=mock_profile_repo, call_timeout=5.0, probe=mock_probe
    )


class TestSelect:
    """Tests for select."""

    @pytest.mark.asyncio
    async def test_overwrites_existing_assignment(
        self, selector, mock_profile_repo, mock_probe, make_profile, user_id
    ):
        """Selecting T2 while assigned to T1 leaves the profile on T2."""
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1", "t-1")

        selection = await selector.select(user_id, TenantId(value="t-2"))

        assert selection.tenant_id == TenantId(value="t-2")
        assert selection.previous_tenant_id == TenantId(value="t-1")
        mock_profile_repo.set_assigned_tenant.assert_awaited_once_with(
            user_id, TenantId(value="t-2")
        )
        mock_probe.tenant_selected.assert_called_once_with(
            user_id="user-1", tenant_id="t-2", previous_tenant_id="t-1"
        )

    @pytest.mark.asyncio
    async def test_first_selection_has_no_previous(
        self, selector, mock_profile_repo, make_profile, user_id
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1")

        selection = await selector.select(user_id, TenantId(value="t-2"))

        assert selection.previous_tenant_id is None

    @pytest.mark.asyncio
    async def test_no_user_is_unauthorized(self, selector, mock_profile_repo, mock_probe):
        with pytest.raises(UnauthorizedError):
            await selector.select(None, TenantId(value="t-2"))

        mock_profile_repo.set_assigned_tenant.assert_not_called()
        mock_probe.selection_rejected.assert_called_once_with(
            user_id=None, tenant_id="t-2", reason="unauthenticated"
        )

    @pytest.mark.asyncio
    async def test_dangling_tenant_id_is_surfaced(
        self, selector, mock_profile_repo, mock_probe, make_profile, user_id
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1", "t-1")
        mock_profile_repo.set_assigned_tenant.side_effect = InvalidReferenceError("fk")

        with pytest.raises(InvalidReferenceError):
            await selector.select(user_id, TenantId(value="ghost"))

        mock_probe.selection_rejected.assert_called_once_with(
            user_id="user-1", tenant_id="ghost", reason="InvalidReferenceError"
        )

    @pytest.mark.asyncio
    async def test_missing_profile(self, selector, mock_profile_repo, user_id):
        with pytest.raises(ProfileNotFoundError):
            await selector.select(user_id, TenantId(value="t-2"))

        mock_profile_repo.set_assigned_tenant.assert_not_called()

    @pytest.mark.asyncio
    async def test_profile_deleted_before_write(
        self, selector, mock_profile_repo, make_profile, user_id
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1")
        mock_profile_repo.set_assigned_tenant.return_value = False

        with pytest.raises(ProfileNotFoundError):
            await selector.select(user_id, TenantId(value="t-2"))

    @pytest.mark.asyncio
    async def test_store_failure(self, selector, mock_profile_repo, user_id):
        mock_profile_repo.get_by_user_id.side_effect = TransientStoreError("down")

        with pytest.raises(TransientStoreError):
            await selector.select(user_id, TenantId(value="t-2"))
