"""Unit tests for TenantSessionContext."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from tenancy.application.services import (
    TenantAssignmentReconciler,
    TenantDirectoryService,
)
from tenancy.application.session_context import TenantSessionContext
from tenancy.application.value_objects import (
    ReconciliationOutcome,
    ReconciliationResult,
)
from tenancy.domain.value_objects import EntryPoint, TenantId
from tenancy.ports.exceptions import AccessDeniedError, TransientStoreError


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def mock_reconciler():
    reconciler = Mock(spec=TenantAssignmentReconciler)
    reconciler.reconcile = AsyncMock()
    return reconciler


@pytest.fixture
def session_context(
    mock_hostname_provider,
    mock_authentication,
    mock_tenant_repo,
    mock_reconciler,
    mock_profile_repo,
    mock_probe,
):
    return TenantSessionContext(
        hostname_provider=mock_hostname_provider,
        authentication=mock_authentication,
        directory=TenantDirectoryService(tenant_repository=mock_tenant_repo, call_timeout=5.0),
        reconciler=mock_reconciler,
        profile_repository=mock_profile_repo,
        call_timeout=5.0,
        probe=mock_probe,
    )


class TestSlugResolution:
    """Context derived from an explicit slug or the subdomain."""

    @pytest.mark.asyncio
    async def test_subdomain_resolves_garage(
        self, session_context, mock_hostname_provider, mock_tenant_repo, make_tenant
    ):
        mock_hostname_provider.get_hostname.return_value = "acme.garagedesk.app"
        mock_tenant_repo.get_by_slug.return_value = make_tenant("t-acme", slug="acme")

        state = await session_context.init()

        assert state.context.tenant_id == "t-acme"
        assert state.context.tenant_name == "Garage t-acme"
        assert state.context.source == "subdomain"
        assert state.last_error is None
        assert session_context.tenant_id == "t-acme"

    @pytest.mark.asyncio
    async def test_explicit_slug_beats_subdomain(
        self, session_context, mock_hostname_provider, mock_tenant_repo, make_tenant
    ):
        mock_hostname_provider.get_hostname.return_value = "acme.garagedesk.app"
        mock_tenant_repo.get_by_slug.return_value = make_tenant("t-beta", slug="beta")

        state = await session_context.init(explicit_slug="beta")

        mock_tenant_repo.get_by_slug.assert_awaited_once_with("beta")
        assert state.context.source == "explicit"

    @pytest.mark.asyncio
    async def test_unknown_slug_does_not_fall_back_to_profile(
        self, session_context, mock_profile_repo, make_profile
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1", "t-1")

        state = await session_context.init(explicit_slug="ghost")

        assert state.context.is_resolved is False
        assert state.context.slug == "ghost"
        assert state.context.source == "none"
        assert state.last_error is None

    @pytest.mark.asyncio
    async def test_bare_localhost_uses_profile(
        self, session_context, mock_hostname_provider, mock_tenant_repo
    ):
        mock_hostname_provider.get_hostname.return_value = "localhost"

        await session_context.init()

        mock_tenant_repo.get_by_slug.assert_not_called()

    @pytest.mark.asyncio
    async def test_loopback_ip_is_looked_up_by_first_octet(
        self, session_context, mock_hostname_provider, mock_tenant_repo
    ):
        mock_hostname_provider.get_hostname.return_value = "127.0.0.1"

        state = await session_context.init()

        mock_tenant_repo.get_by_slug.assert_awaited_once_with("127")
        assert state.context.slug == "127"
        assert state.context.is_resolved is False


class TestProfileResolution:
    """Context derived from the profile assignment."""

    @pytest.mark.asyncio
    async def test_assigned_garage_is_used(
        self, session_context, mock_profile_repo, mock_tenant_repo, make_profile, make_tenant
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1", "t-1")
        mock_tenant_repo.get_by_id.return_value = make_tenant("t-1", slug="first")

        state = await session_context.init()

        assert state.context.tenant_id == "t-1"
        assert state.context.source == "profile"
        assert state.context.slug == "first"

    @pytest.mark.asyncio
    async def test_anonymous_session_is_unresolved(
        self, session_context, mock_authentication, mock_profile_repo
    ):
        mock_authentication.current_user.return_value = None

        state = await session_context.init()

        assert state.context.is_resolved is False
        mock_profile_repo.get_by_user_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_assignment_to_deleted_garage_is_unresolved(
        self, session_context, mock_profile_repo, make_profile
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1", "t-gone")

        state = await session_context.init()

        assert state.context.is_resolved is False

    @pytest.mark.asyncio
    async def test_entry_point_runs_reconciler(
        self, session_context, mock_reconciler, mock_tenant_repo, mock_profile_repo,
        make_tenant, user_id,
    ):
        mock_reconciler.reconcile.return_value = ReconciliationResult(
            outcome=ReconciliationOutcome.RESOLVED,
            entry_point=EntryPoint.OWNER,
            user_id=user_id,
            tenant_id=TenantId(value="t-own"),
            assigned=True,
            landing_path="/garage-management",
        )
        mock_tenant_repo.get_by_id.return_value = make_tenant("t-own")

        state = await session_context.init(entry_point=EntryPoint.OWNER)

        mock_reconciler.reconcile.assert_awaited_once_with(user_id, EntryPoint.OWNER)
        mock_profile_repo.get_by_user_id.assert_not_called()
        assert state.context.tenant_id == "t-own"
        assert state.reconciliation.landing_path == "/garage-management"


class TestFailures:
    """Failure handling during refresh."""

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_context(
        self, session_context, mock_hostname_provider, mock_tenant_repo, make_tenant
    ):
        mock_hostname_provider.get_hostname.return_value = "acme.garagedesk.app"
        mock_tenant_repo.get_by_slug.return_value = make_tenant("t-acme", slug="acme")
        await session_context.init()

        mock_tenant_repo.get_by_slug.side_effect = TransientStoreError("down")
        state = await session_context.refresh()

        assert state.context.tenant_id == "t-acme"
        assert isinstance(state.last_error, TransientStoreError)

    @pytest.mark.asyncio
    async def test_success_clears_error(
        self, session_context, mock_hostname_provider, mock_tenant_repo, make_tenant
    ):
        mock_hostname_provider.get_hostname.return_value = "acme.garagedesk.app"
        mock_tenant_repo.get_by_slug.side_effect = [
            TransientStoreError("down"),
            make_tenant("t-acme", slug="acme"),
        ]

        failed = await session_context.init()
        recovered = await session_context.refresh()

        assert failed.context is None
        assert failed.is_loading is True
        assert recovered.last_error is None
        assert recovered.context.tenant_id == "t-acme"

    @pytest.mark.asyncio
    async def test_access_denied_clears_context(
        self, session_context, mock_reconciler, mock_profile_repo, mock_tenant_repo,
        make_profile, make_tenant,
    ):
        mock_profile_repo.get_by_user_id.return_value = make_profile("user-1", "t-1")
        mock_tenant_repo.get_by_id.return_value = make_tenant("t-1")
        await session_context.init()

        mock_reconciler.reconcile.side_effect = AccessDeniedError("owners only")
        state = await session_context.refresh(entry_point=EntryPoint.OWNER)

        assert state.context.is_resolved is False
        assert isinstance(state.last_error, AccessDeniedError)


class TestLifecycle:
    """Ordering of concurrent refreshes and teardown."""

    @pytest.mark.asyncio
    async def test_refresh_before_init_raises(self, session_context):
        with pytest.raises(RuntimeError):
            await session_context.refresh()

    @pytest.mark.asyncio
    async def test_latest_refresh_wins(
        self, session_context, mock_tenant_repo, mock_probe, make_tenant
    ):
        """An older refresh that settles last must not overwrite a newer one."""
        gate = asyncio.Event()
        tenants = {
            "slow": make_tenant("t-slow", slug="slow"),
            "fast": make_tenant("t-fast", slug="fast"),
        }

        async def get_by_slug(slug):
            if slug == "slow":
                await gate.wait()
            return tenants[slug]

        mock_tenant_repo.get_by_slug.side_effect = get_by_slug
        await session_context.init()

        slow = asyncio.create_task(session_context.refresh(explicit_slug="slow"))
        await asyncio.sleep(0)
        assert session_context.state.is_refreshing is True
        # The previous context stays visible while loading
        assert session_context.context is not None

        await session_context.refresh(explicit_slug="fast")
        gate.set()
        await slow

        assert session_context.context.tenant_id == "t-fast"
        assert session_context.state.is_refreshing is False
        mock_probe.refresh_superseded.assert_called_once_with(
            generation=2, latest_generation=3
        )

    @pytest.mark.asyncio
    async def test_teardown_discards_in_flight_refresh(
        self, session_context, mock_tenant_repo, mock_probe, make_tenant
    ):
        gate = asyncio.Event()

        async def get_by_slug(slug):
            await gate.wait()
            return make_tenant("t-late", slug=slug)

        mock_tenant_repo.get_by_slug.side_effect = get_by_slug
        await session_context.init()

        pending = asyncio.create_task(session_context.refresh(explicit_slug="late"))
        await asyncio.sleep(0)
        session_context.teardown()
        gate.set()
        await pending

        assert session_context.context is None
        assert session_context.is_active is False
        mock_probe.session_torn_down.assert_called_once_with(discarded_refreshes=1)
        with pytest.raises(RuntimeError):
            await session_context.refresh()

    @pytest.mark.asyncio
    async def test_init_after_teardown_starts_fresh(
        self, session_context, mock_probe
    ):
        await session_context.init()
        session_context.teardown()

        state = await session_context.init()

        assert session_context.is_active is True
        assert state.context is not None
        assert mock_probe.session_started.call_count == 2

    @pytest.mark.asyncio
    async def test_init_on_active_context_keeps_previous_context_visible(
        self, session_context, mock_tenant_repo, mock_probe, make_tenant
    ):
        gate = asyncio.Event()

        async def get_by_slug(slug):
            if slug == "next":
                await gate.wait()
            return make_tenant(f"t-{slug}", slug=slug)

        mock_tenant_repo.get_by_slug.side_effect = get_by_slug
        await session_context.init(explicit_slug="first")

        pending = asyncio.create_task(session_context.init(explicit_slug="next"))
        await asyncio.sleep(0)
        assert session_context.context.tenant_id == "t-first"

        gate.set()
        state = await pending

        assert state.context.tenant_id == "t-next"
        mock_probe.session_started.assert_called_once()
