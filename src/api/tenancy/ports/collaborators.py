"""Protocols for collaborators outside the tenancy context.

Authentication and the host environment are owned elsewhere; tenant
resolution only consumes them through these interfaces so it can be
exercised without a real session or request.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.value_objects import UserId


@runtime_checkable
class AuthenticationProvider(Protocol):
    """Supplies the current identity and can end the session."""

    async def current_user(self) -> UserId | None:
        """Return the authenticated user, or None for an anonymous session."""
        ...

    async def sign_out(self) -> None:
        """Terminate the current session."""
        ...


@runtime_checkable
class HostnameProvider(Protocol):
    """Supplies the hostname the current request/session was opened on."""

    def get_hostname(self) -> str | None:
        """Return the current hostname (read on every call)."""
        ...
