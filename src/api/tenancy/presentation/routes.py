"""HTTP routes for tenant resolution and selection."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from tenancy.application.services import TenantDirectoryService, TenantSelector
from tenancy.application.session_context import TenantSessionContext
from tenancy.dependencies.collaborators import get_authentication_provider
from tenancy.dependencies.services import (
    get_tenant_directory_service,
    get_tenant_selector,
)
from tenancy.dependencies.session_context import get_tenant_session_context
from tenancy.domain.value_objects import TenantId
from tenancy.infrastructure.request_adapters import RequestAuthenticationProvider
from tenancy.ports.exceptions import (
    AccessDeniedError,
    InvalidReferenceError,
    ProfileNotFoundError,
    TransientStoreError,
    UnauthorizedError,
)
from tenancy.presentation.models import (
    EntryPointEnum,
    SelectTenantRequest,
    TenantContextResponse,
    TenantResponse,
    TenantSelectionResponse,
)

router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)


@router.get("/context")
async def get_context(
    session_context: Annotated[
        TenantSessionContext, Depends(get_tenant_session_context)
    ],
    authentication: Annotated[
        RequestAuthenticationProvider, Depends(get_authentication_provider)
    ],
    slug: str | None = None,
    entry_point: EntryPointEnum | None = None,
) -> TenantContextResponse:
    """Resolve the effective garage for the current request.

    Args:
        session_context: Fresh session context for this request
        authentication: Same provider the session context signs out through
        slug: Explicit garage slug; beats the subdomain
        entry_point: Sign-in area; when set, the user's garage assignment is
            reconciled for it

    Returns:
        TenantContextResponse. Failures other than access denial are
        reported in the ``error`` field next to whatever context exists.
        A user who may not use the entry point gets a 403 that also expires
        the session cookie, since the reconciler has signed them out.
    """
    state = await session_context.init(
        explicit_slug=slug,
        entry_point=entry_point.to_domain() if entry_point else None,
    )
    if isinstance(state.last_error, AccessDeniedError):
        response = JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": str(state.last_error)},
        )
        authentication.apply_sign_out(response)
        return response
    return TenantContextResponse.from_state(state)


@router.put("/selection")
async def select_tenant(
    request: SelectTenantRequest,
    authentication: Annotated[
        RequestAuthenticationProvider, Depends(get_authentication_provider)
    ],
    selector: Annotated[TenantSelector, Depends(get_tenant_selector)],
) -> TenantSelectionResponse:
    """Make a garage the current user's working garage.

    Raises:
        HTTPException: 401 if nobody is signed in
        HTTPException: 404 if the garage or the user's profile does not exist
        HTTPException: 503 if the store failed or timed out
    """
    try:
        tenant_id = TenantId.from_string(request.tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid garage ID: {e}",
        ) from e

    try:
        selection = await selector.select(
            await authentication.current_user(), tenant_id
        )
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e
    except InvalidReferenceError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Garage {tenant_id.value} not found",
        ) from e
    except ProfileNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except TransientStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Garage selection is temporarily unavailable",
        ) from e

    return TenantSelectionResponse.from_domain(selection)


@router.get("/owned")
async def list_owned_tenants(
    authentication: Annotated[
        RequestAuthenticationProvider, Depends(get_authentication_provider)
    ],
    directory: Annotated[
        TenantDirectoryService, Depends(get_tenant_directory_service)
    ],
) -> list[TenantResponse]:
    """List the garages owned by the current user, oldest first.

    Raises:
        HTTPException: 401 if nobody is signed in
        HTTPException: 503 if the store failed or timed out
    """
    user_id = await authentication.current_user()
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    try:
        tenants = await directory.list_owned_by(user_id)
    except TransientStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Garage directory is temporarily unavailable",
        ) from e
    return [TenantResponse.from_domain(t) for t in tenants]
