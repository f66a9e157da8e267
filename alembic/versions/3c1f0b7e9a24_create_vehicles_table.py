"""Create vehicles table

Revision ID: 3c1f0b7e9a24
Revises:
Create Date: 2025-10-16 18:42:10.512337

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7e9a24"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "vehicles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("make", sa.String(length=50), nullable=False),
        sa.Column("model", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vin", sa.String(length=17), nullable=True, unique=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("mileage >= 0", name="ck_vehicles_mileage_non_negative"),
        sa.CheckConstraint("vin IS NULL OR length(vin) = 17", name="ck_vehicles_vin_length"),
    )
    # Listing is always newest first
    op.create_index("ix_vehicles_created_at", "vehicles", [sa.text("created_at DESC")])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_vehicles_created_at", table_name="vehicles")
    op.drop_table("vehicles")
