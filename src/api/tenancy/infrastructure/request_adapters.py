"""Request-backed implementations of the tenancy collaborator ports.

The upstream authentication middleware stores the authenticated user id on
``request.state.user_id`` and reads the credential from the session cookie.
A sign-out ends the identity for the rest of the request and is carried to
the client by ``apply_sign_out``, which expires that cookie.
"""

from __future__ import annotations

from fastapi import Request, Response

from tenancy.domain.value_objects import UserId

DEFAULT_SESSION_COOKIE_NAME = "garagedesk_session"

# Asks the browser to drop cookies and storage for this origin
CLEAR_SITE_DATA = '"cookies", "storage"'


class RequestAuthenticationProvider:
    """AuthenticationProvider reading the identity from request state."""

    def __init__(
        self,
        request: Request,
        session_cookie_name: str = DEFAULT_SESSION_COOKIE_NAME,
    ) -> None:
        self._request = request
        self._session_cookie_name = session_cookie_name

    async def current_user(self) -> UserId | None:
        if getattr(self._request.state, "signed_out", False):
            return None
        raw = getattr(self._request.state, "user_id", None)
        if raw is None or not str(raw).strip():
            return None
        return UserId.from_string(str(raw))

    async def sign_out(self) -> None:
        self._request.state.signed_out = True

    @property
    def signed_out(self) -> bool:
        """Check if sign_out() was called during this request."""
        return bool(getattr(self._request.state, "signed_out", False))

    def apply_sign_out(self, response: Response) -> None:
        """Expire the session credential on ``response`` after a sign-out.

        Does nothing when the request was not signed out.
        """
        if not self.signed_out:
            return
        response.delete_cookie(self._session_cookie_name, httponly=True, samesite="lax")
        response.headers["Clear-Site-Data"] = CLEAR_SITE_DATA


class RequestHostnameProvider:
    """HostnameProvider reading the host the request was addressed to."""

    def __init__(self, request: Request) -> None:
        self._request = request

    def get_hostname(self) -> str | None:
        return self._request.url.hostname
