"""Database infrastructure - shared async SQLAlchemy primitives."""

from infrastructure.database.models import Base, TimestampMixin, utc_now

__all__ = [
    "Base",
    "TimestampMixin",
    "utc_now",
]
