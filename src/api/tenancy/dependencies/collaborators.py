"""FastAPI dependencies for the request-scoped collaborators.

FastAPI caches dependency results per request, so the reconciler and the
route see the same authentication provider instance.
"""

from typing import Annotated

from fastapi import Depends, Request

from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.infrastructure.request_adapters import (
    RequestAuthenticationProvider,
    RequestHostnameProvider,
)


def get_authentication_provider(
    request: Request,
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> RequestAuthenticationProvider:
    """Get the authentication provider for the current request."""
    return RequestAuthenticationProvider(
        request, session_cookie_name=settings.session_cookie_name
    )


def get_hostname_provider(request: Request) -> RequestHostnameProvider:
    """Get the hostname provider for the current request."""
    return RequestHostnameProvider(request)
