"""Intake records: one row per logged water intake, unique per owner and instant.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "intake_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("timestamp_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("volume", sa.Numeric(20, 10), nullable=False),
        sa.Column("volume_unit", sa.String(16), nullable=False, server_default="ML"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "timestamp_utc", name="uq_intake_records_owner_timestamp"),
    )
    op.create_index("ix_intake_records_owner_id", "intake_records", ["owner_id"], unique=False)
    op.create_index("ix_intake_records_timestamp_utc", "intake_records", ["timestamp_utc"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_intake_records_timestamp_utc", table_name="intake_records")
    op.drop_index("ix_intake_records_owner_id", table_name="intake_records")
    op.drop_table("intake_records")
