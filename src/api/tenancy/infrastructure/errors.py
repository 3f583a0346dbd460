"""Translation of storage-layer exceptions into StorageError."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from tenancy.infrastructure.observability import RepositoryProbe
from tenancy.ports.exceptions import StorageError


@contextmanager
def storage_errors(
    operation: str,
    probe: RepositoryProbe,
    tenant_id: str | None = None,
) -> Iterator[None]:
    """Re-raise SQLAlchemy and connection errors as StorageError.

    Usage:
        with storage_errors("get_limits", self._probe, tenant_id.value):
            async with self._sessionmaker() as session:
                ...

    Args:
        operation: Repository operation name, kept on the StorageError
        probe: Probe notified of the failure
        tenant_id: Tenant the operation addressed, if any

    Raises:
        StorageError: Wrapping the original exception as ``__cause__``
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        probe.storage_failed(operation=operation, tenant_id=tenant_id, error=e)
        raise StorageError(
            f"Storage failure during {operation}",
            operation=operation,
            tenant_id=tenant_id,
        ) from e
