"""Unit tests for the tenancy domain probes."""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import ObservationContext
from tenancy.application.observability import (
    DefaultReconcilerProbe,
    DefaultSessionContextProbe,
    DefaultTenantDirectoryProbe,
)
from tenancy.infrastructure.observability import (
    DefaultProfileRepositoryProbe,
    DefaultRoleAssignmentRepositoryProbe,
    DefaultTenantRepositoryProbe,
)


class TestRepositoryProbes:
    """Tests for the repository probes."""

    def test_default_probe_creates_with_default_logger(self):
        probe = DefaultTenantRepositoryProbe()
        assert probe._logger is not None

    def test_store_call_failed_logs_error(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantRepositoryProbe(logger=mock_logger)

        probe.store_call_failed(operation="tenant_get_first", error=OSError("reset"))

        mock_logger.error.assert_called_once_with(
            "tenant_store_call_failed",
            operation="tenant_get_first",
            error="reset",
            error_type="OSError",
        )

    def test_assignment_written_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultProfileRepositoryProbe(logger=mock_logger)

        probe.assignment_written("user-1", "t-1", conditional=True)

        mock_logger.info.assert_called_once_with(
            "profile_tenant_assigned",
            user_id="user-1",
            tenant_id="t-1",
            conditional=True,
        )

    def test_unknown_role_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultRoleAssignmentRepositoryProbe(logger=mock_logger)

        probe.unknown_role(user_id="u", raw_role="root")

        mock_logger.warning.assert_called_once_with(
            "role_assignment_unknown_role", user_id="u", raw_role="root"
        )


class TestApplicationProbes:
    """Tests for the application service probes."""

    def test_access_denied_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultReconcilerProbe(logger=mock_logger)

        probe.access_denied(user_id="user-1", entry_point="owner", role=None)

        mock_logger.warning.assert_called_once_with(
            "reconciliation_access_denied",
            user_id="user-1",
            entry_point="owner",
            role=None,
        )

    def test_selection_required_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultReconcilerProbe(logger=mock_logger)

        probe.selection_required(user_id="user-1")

        mock_logger.info.assert_called_once_with(
            "reconciliation_selection_required", user_id="user-1"
        )

    def test_refresh_failed_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultSessionContextProbe(logger=mock_logger)

        probe.refresh_failed(generation=3, error=TimeoutError("slow"))

        mock_logger.warning.assert_called_once_with(
            "tenant_context_refresh_failed",
            generation=3,
            error="slow",
            error_type="TimeoutError",
        )


class TestObservationContext:
    """Context binding on probes."""

    def test_with_context_includes_metadata(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(request_id="req-1", hostname="acme.garagedesk.app")
        probe = DefaultTenantDirectoryProbe(logger=mock_logger).with_context(context)

        probe.lookup_failed(operation="tenant_get_first", error=OSError("x"))

        kwargs = mock_logger.error.call_args.kwargs
        assert kwargs["request_id"] == "req-1"
        assert kwargs["hostname"] == "acme.garagedesk.app"

    def test_context_helpers(self):
        context = ObservationContext(user_id="u").with_tenant("t-1").with_extra(flow="owner")

        assert context.as_dict() == {"user_id": "u", "tenant_id": "t-1", "flow": "owner"}
