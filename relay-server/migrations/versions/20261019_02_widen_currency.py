"""widen transaction_records.currency to text

Revision ID: 8f3a6b2d4e10
Revises: 5c1e0d7a9b21
Create Date: 2026-10-19 15:10:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8f3a6b2d4e10"
down_revision = "5c1e0d7a9b21"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("transaction_records") as batch_op:
        batch_op.alter_column(
            "currency",
            existing_type=sa.String(length=32),
            type_=sa.Text(),
            existing_nullable=True,
        )


def downgrade() -> None:
    with op.batch_alter_table("transaction_records") as batch_op:
        batch_op.alter_column(
            "currency",
            existing_type=sa.Text(),
            type_=sa.String(length=32),
            existing_nullable=True,
        )
