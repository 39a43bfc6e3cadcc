"""create transaction_records

Revision ID: 5c1e0d7a9b21
Revises: 
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e0d7a9b21"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "transaction_records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=False),
        sa.Column("amount", sa.String(length=80)),
        sa.Column("currency", sa.String(length=32)),
        sa.Column("from_address", sa.String(length=42)),
        sa.Column("to_address", sa.String(length=42)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_transaction_records_kind", "transaction_records", ["kind"])
    op.create_index("ix_transaction_records_tx_hash", "transaction_records", ["tx_hash"])


def downgrade() -> None:
    op.drop_index("ix_transaction_records_tx_hash", table_name="transaction_records")
    op.drop_index("ix_transaction_records_kind", table_name="transaction_records")
    op.drop_table("transaction_records")
