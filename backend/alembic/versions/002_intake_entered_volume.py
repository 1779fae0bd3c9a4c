"""Intake records: widen canonical volume scale, keep the amount as entered.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("intake_records") as batch:
        batch.alter_column("volume", type_=sa.Numeric(24, 13), existing_type=sa.Numeric(20, 10), existing_nullable=False)
        batch.add_column(sa.Column("entered_volume", sa.Numeric(20, 10), nullable=True))
    # Backfill from the canonical milliliters and the entry unit
    conn = op.get_bind()
    conn.execute(
        sa.text("""
        UPDATE intake_records
        SET entered_volume = CASE volume_unit
            WHEN 'L' THEN volume / 1000
            WHEN 'FL_OZ' THEN volume / 29.5735295625
            ELSE volume
        END
        """)
    )
    with op.batch_alter_table("intake_records") as batch:
        batch.alter_column("entered_volume", existing_type=sa.Numeric(20, 10), nullable=False)


def downgrade() -> None:
    with op.batch_alter_table("intake_records") as batch:
        batch.drop_column("entered_volume")
        batch.alter_column("volume", type_=sa.Numeric(20, 10), existing_type=sa.Numeric(24, 13), existing_nullable=False)
