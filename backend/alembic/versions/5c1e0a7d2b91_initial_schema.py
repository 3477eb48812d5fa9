"""initial schema (accounts, obligations, payment_records, fixed_costs)

Revision ID: 5c1e0a7d2b91
Revises:
Create Date: 2026-10-17 10:12:41.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5c1e0a7d2b91"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(200), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "obligations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("original_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("kind", sa.String(10), nullable=False),
        sa.Column("status", sa.String(10), nullable=False),
        sa.Column("category", sa.String(80), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("payment_method", sa.String(40), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("related_fixed_cost_id", sa.String(36), nullable=True),
        sa.Column("related_obligation_id", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
    )
    op.create_index("ix_obligations_owner_id", "obligations", ["owner_id"])
    op.create_index("ix_obligations_kind", "obligations", ["kind"])
    op.create_index("ix_obligations_status", "obligations", ["status"])
    op.create_index("ix_obligations_due_date", "obligations", ["due_date"])
    op.create_index("ix_obligations_related_fixed_cost_id", "obligations", ["related_fixed_cost_id"])

    op.create_table(
        "payment_records",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(220), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("kind", sa.String(10), nullable=False),
        sa.Column("status", sa.String(10), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("category", sa.String(80), nullable=False),
        sa.Column("notes", sa.String(500), nullable=False),
        sa.Column("payment_method", sa.String(40), nullable=True),
        sa.Column("source_obligation_id", sa.String(36), sa.ForeignKey("obligations.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_payment_records_owner_id", "payment_records", ["owner_id"])
    op.create_index("ix_payment_records_payment_date", "payment_records", ["payment_date"])
    op.create_index("ix_payment_records_source_obligation_id", "payment_records", ["source_obligation_id"])

    op.create_table(
        "fixed_costs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner_id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("monthly_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("category", sa.String(80), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_fixed_costs_owner_id", "fixed_costs", ["owner_id"])


def downgrade() -> None:
    op.drop_table("fixed_costs")
    op.drop_table("payment_records")
    op.drop_table("obligations")
    op.drop_table("accounts")
