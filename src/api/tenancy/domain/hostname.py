"""Hostname parsing for subdomain-based garage routing.

Every garage can be reached on ``<slug>.<registrable domain>``. This module
turns a request hostname into the subdomain token that may name a garage.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_LOCAL_HOSTNAMES: frozenset[str] = frozenset({"localhost", "127.0.0.1"})


@dataclass(frozen=True)
class HostnameInfo:
    """Parsed view of a request hostname.

    Attributes:
        hostname: The normalized hostname that was parsed.
        is_local_development: True when the host is a loopback name.
        has_subdomain: True when a subdomain label is present.
        subdomain_token: The first label when a subdomain is present.
    """

    hostname: str
    is_local_development: bool
    has_subdomain: bool
    subdomain_token: str | None


def parse_hostname(
    hostname: str | None,
    local_hostnames: Iterable[str] = DEFAULT_LOCAL_HOSTNAMES,
) -> HostnameInfo:
    """Split a hostname into its subdomain token.

    Rules:
    - Local hosts (``localhost``, ``127.0.0.1``) only carry a subdomain when
      the string itself contains a dot, which is how subdomains are
      simulated locally.
    - Any other host carries a subdomain only with more than two labels, so
      ``example.com`` has none and ``shop1.example.com`` yields ``shop1``.

    The function is total: it never raises, whatever the input.

    Args:
        hostname: Host name as supplied by the host environment.
        local_hostnames: Names treated as local development hosts.

    Returns:
        HostnameInfo describing the host.
    """
    normalized = (hostname or "").strip().lower().rstrip(".")
    is_local = normalized in frozenset(local_hostnames)
    labels = normalized.split(".")

    if is_local:
        # "127.0.0.1" contains dots too, so it yields the token "127"
        has_subdomain = "." in normalized
    else:
        has_subdomain = len(labels) > 2 and bool(labels[0])

    return HostnameInfo(
        hostname=normalized,
        is_local_development=is_local,
        has_subdomain=has_subdomain,
        subdomain_token=labels[0] if has_subdomain else None,
    )
