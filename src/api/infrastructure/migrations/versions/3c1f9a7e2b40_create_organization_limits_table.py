"""create organization_limits table

One row of resource ceilings per organization. The organization table is
owned by the auth provider; limits rows cascade when it is deleted.

Revision ID: 3c1f9a7e2b40
Revises:
Create Date: 2026-10-17 09:41:12.508213

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "organization_limits",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("organization_id", sa.Text(), nullable=False),
        sa.Column(
            "max_vehicles", sa.Integer(), server_default="100", nullable=False
        ),
        sa.Column("max_fleets", sa.Integer(), server_default="50", nullable=False),
        sa.Column(
            "max_customers", sa.Integer(), server_default="200", nullable=False
        ),
        sa.Column("max_monthly_invoices", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "organization_id", name="organization_limits_organization_id_unique"
        ),
        sa.ForeignKeyConstraint(
            ["organization_id"],
            ["organization.id"],
            name="organization_limits_organization_id_organization_id_fk",
            ondelete="CASCADE",
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("organization_limits")
