"""SQLAlchemy ORM model for the organization_limits table.

One row per tenant holding its resource ceilings. The unique constraint on
organization_id is what makes limits bootstrapping idempotent under
concurrent first access.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantLimitsModel(Base, TimestampMixin):
    """ORM model for organization_limits table.

    Note: the foreign key to organization(id) with ON DELETE CASCADE is
    declared in the migration only; the organization table belongs to the
    auth provider and is not mapped here.
    """

    __tablename__ = "organization_limits"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
    )
    max_vehicles: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    max_fleets: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    max_customers: Mapped[int] = mapped_column(Integer, nullable=False, default=200)
    max_monthly_invoices: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TenantLimitsModel(organization_id={self.organization_id}, "
            f"max_vehicles={self.max_vehicles}, max_fleets={self.max_fleets}, "
            f"max_customers={self.max_customers})>"
        )
