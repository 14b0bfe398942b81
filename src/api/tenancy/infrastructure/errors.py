"""Translation of SQLAlchemy failures into tenancy exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from tenancy.ports.exceptions import InvalidReferenceError, TransientStoreError


class _FailureProbe(Protocol):
    def store_call_failed(self, operation: str, error: Exception) -> None: ...


@contextmanager
def translate_store_errors(operation: str, probe: _FailureProbe) -> Iterator[None]:
    """Map driver and ORM failures onto the tenancy error taxonomy.

    Foreign-key violations become InvalidReferenceError; every other
    database or socket failure becomes TransientStoreError. Absent rows are
    not errors and never pass through here.
    """
    try:
        yield
    except IntegrityError as e:
        probe.store_call_failed(operation=operation, error=e)
        raise InvalidReferenceError(
            f"{operation} rejected: referenced garage does not exist"
        ) from e
    except (SQLAlchemyError, OSError) as e:
        probe.store_call_failed(operation=operation, error=e)
        raise TransientStoreError(f"{operation} failed: {e}", operation=operation) from e
