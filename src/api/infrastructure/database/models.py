"""SQLAlchemy declarative base and shared model utilities.

Every ORM model in the application inherits from ``Base``. Tables owned
by this application also mix in ``TimestampMixin``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current timezone-aware UTC timestamp.

    Used as the Python-side column default and by repositories issuing
    Core INSERT/UPDATE statements, which bypass ORM defaults.
    """
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    type_annotation_map: dict[type, Any] = {}


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamp columns.

    Python-side defaults cover ORM flushes; the server defaults match the
    migration so rows inserted by other writers are stamped too.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
    )
