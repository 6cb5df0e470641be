"""Create vehicles table.

Revision ID: 001_create_vehicles
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_vehicles"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("manufacturer", sa.String(30), nullable=True),
        sa.Column("model", sa.String(30), nullable=True),
        sa.Column("fuel", sa.String(20), nullable=True),
        sa.Column("type", sa.String(30), nullable=True),
        sa.Column("color", sa.String(25), nullable=True),
        sa.Column("vin", sa.String(17), nullable=True),
        sa.Column("vrm", sa.String(7), nullable=True),
        sa.Column("used", sa.Boolean, nullable=True),
        sa.Column("model_year", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("vehicles")
