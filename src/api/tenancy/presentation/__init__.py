"""Tenancy presentation layer.

Exposes the effective-garage, selection and owned-garage endpoints under
``/tenancy``.
"""

from __future__ import annotations

from tenancy.presentation.routes import router

__all__ = ["router"]
