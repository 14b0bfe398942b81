"""Where a user lands after their garage has been resolved."""

from __future__ import annotations

from tenancy.domain.value_objects import EntryPoint, Role

GARAGE_MANAGEMENT_PATH = "/garage-management"
DASHBOARD_PATH = "/dashboard"
STAFF_GARAGE_SELECTION_PATH = "/garage-management?source=staff"

_STAFF_LANDING: dict[Role, str] = {
    Role.ADMINISTRATOR: DASHBOARD_PATH,
    Role.TECHNICIAN: "/dashboard/job-tickets",
    Role.FRONT_DESK: "/dashboard/appointments",
}


def landing_path(entry_point: EntryPoint, role: Role | None) -> str:
    """Return the area a resolved user is sent to.

    Owners always land on garage management; staff land on the page their
    role works in, or the dashboard.
    """
    if entry_point == EntryPoint.OWNER:
        return GARAGE_MANAGEMENT_PATH
    if role is None:
        return DASHBOARD_PATH
    return _STAFF_LANDING.get(role, DASHBOARD_PATH)
