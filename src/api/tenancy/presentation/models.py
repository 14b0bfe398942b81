"""Pydantic models for tenancy API requests and responses."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from tenancy.application.session_context import TenantSessionState
from tenancy.application.value_objects import TenantSelection
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import EntryPoint


class EntryPointEnum(StrEnum):
    """API-level enum for sign-in entry points.

    Maps to domain EntryPoint values for validation.
    """

    OWNER = "owner"
    STAFF = "staff"

    def to_domain(self) -> EntryPoint:
        """Convert to the domain EntryPoint."""
        return EntryPoint(self.value)


class TenantContextResponse(BaseModel):
    """Response model for the effective garage of the current session."""

    tenant_id: str | None = Field(None, description="Resolved garage ID")
    tenant_name: str | None = Field(None, description="Resolved garage name")
    source: str = Field("none", description="explicit, subdomain, profile or none")
    slug: str | None = Field(None, description="Slug that was looked up, if any")
    outcome: str | None = Field(
        None, description="Reconciliation outcome, when an entry point was given"
    )
    landing_path: str | None = Field(
        None, description="Where to send the user after reconciliation"
    )
    error: str | None = Field(None, description="Failure of the latest refresh")

    @classmethod
    def from_state(cls, state: TenantSessionState) -> TenantContextResponse:
        """Convert a session context snapshot to an API response.

        Args:
            state: Snapshot taken after the refresh settled

        Returns:
            TenantContextResponse
        """
        response = cls(error=str(state.last_error) if state.last_error else None)
        if state.context is not None:
            response.tenant_id = state.context.tenant_id
            response.tenant_name = state.context.tenant_name
            response.source = state.context.source
            response.slug = state.context.slug
        if state.reconciliation is not None:
            response.outcome = state.reconciliation.outcome.value
            response.landing_path = state.reconciliation.landing_path
        return response


class SelectTenantRequest(BaseModel):
    """Request model for selecting a garage."""

    tenant_id: str = Field(..., description="Garage ID to work in", min_length=1)


class TenantSelectionResponse(BaseModel):
    """Response model for a garage selection."""

    user_id: str = Field(..., description="User whose assignment changed")
    tenant_id: str = Field(..., description="Newly assigned garage ID")
    previous_tenant_id: str | None = Field(
        None, description="Garage assigned before the selection"
    )

    @classmethod
    def from_domain(cls, selection: TenantSelection) -> TenantSelectionResponse:
        return cls(
            user_id=selection.user_id.value,
            tenant_id=selection.tenant_id.value,
            previous_tenant_id=(
                selection.previous_tenant_id.value
                if selection.previous_tenant_id
                else None
            ),
        )


class TenantResponse(BaseModel):
    """Response model for a garage."""

    id: str = Field(..., description="Garage ID")
    slug: str = Field(..., description="Garage slug")
    name: str = Field(..., description="Garage name")
    currency: str = Field(..., description="Currency code from garage settings")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response."""
        return cls(
            id=tenant.id.value,
            slug=tenant.slug,
            name=tenant.name,
            currency=tenant.currency,
        )
