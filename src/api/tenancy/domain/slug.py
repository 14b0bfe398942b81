"""Effective slug resolution.

An explicitly supplied slug always beats the one inferred from the
subdomain, so callers can override subdomain routing.
"""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.hostname import HostnameInfo
from tenancy.domain.value_objects import ContextSource


@dataclass(frozen=True)
class SlugResolution:
    """The effective slug and where it came from."""

    slug: str | None
    source: ContextSource


def resolve_slug(explicit_slug: str | None, host: HostnameInfo) -> SlugResolution:
    """Merge an explicit slug with the hostname's subdomain token.

    Args:
        explicit_slug: Slug handed in by the caller (route state, query).
            Blank values count as absent.
        host: Parsed request hostname.

    Returns:
        SlugResolution; ``slug`` is None when neither source supplies one.
    """
    if explicit_slug is not None and explicit_slug.strip():
        return SlugResolution(slug=explicit_slug.strip(), source=ContextSource.EXPLICIT)
    if host.subdomain_token:
        return SlugResolution(slug=host.subdomain_token, source=ContextSource.SUBDOMAIN)
    return SlugResolution(slug=None, source=ContextSource.NONE)


def resolve_effective_slug(explicit_slug: str | None, host: HostnameInfo) -> str | None:
    """Return only the effective slug (see resolve_slug)."""
    return resolve_slug(explicit_slug, host).slug
