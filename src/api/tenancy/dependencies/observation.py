"""Request-scoped observation context for Tenancy probes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Header
from ulid import ULID

from shared_kernel.observability_context import ObservationContext


def get_observation_context(
    x_request_id: Annotated[str | None, Header()] = None,
) -> ObservationContext:
    """Build the observation context for the current request.

    Uses the caller's X-Request-ID when present so log lines can be
    correlated with upstream services, otherwise generates one.
    """
    return ObservationContext(request_id=x_request_id or str(ULID()))
