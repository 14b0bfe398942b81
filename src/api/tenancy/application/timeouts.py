"""Per-call timeouts for store calls made during tenant resolution."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from tenancy.ports.exceptions import TransientStoreError

T = TypeVar("T")


async def call_with_timeout(call: Awaitable[T], timeout: float, operation: str) -> T:
    """Await a store call, bounded by ``timeout`` seconds.

    Raises:
        TransientStoreError: If the call did not complete in time
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except TimeoutError as e:
        raise TransientStoreError(
            f"{operation} timed out after {timeout:g}s", operation=operation
        ) from e
