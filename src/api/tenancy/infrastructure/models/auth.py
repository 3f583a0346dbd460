"""SQLAlchemy ORM models for the auth provider's tables.

The auth provider owns these tables and their migrations. Only the columns
this context reads or writes are mapped.
"""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class OrganizationModel(Base):
    """ORM model for the organization table (the tenants)."""

    __tablename__ = "organization"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<OrganizationModel(id={self.id}, name={self.name})>"

class MemberModel(Base):
    """ORM model for the member table (user-to-organization membership)."""

    __tablename__ = "member"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    organization_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    role: Mapped[str] = mapped_column(Text, nullable=False, default="member")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<MemberModel(user_id={self.user_id}, "
            f"organization_id={self.organization_id})>"
        )


class SessionModel(Base):
    """ORM model for the session table.

    This context only ever writes active_organization_id.
    """

    __tablename__ = "session"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    token: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    active_organization_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<SessionModel(id={self.id}, user_id={self.user_id}, "
            f"active_organization_id={self.active_organization_id})>"
        )
