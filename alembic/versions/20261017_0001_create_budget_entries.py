"""create budget_entries

Revision ID: 20261017_0001
Revises: 
Create Date: 2026-10-17

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "budget_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("budget_date", sa.Date(), nullable=False),
        sa.Column("total_money", sa.Float(), nullable=False, server_default="0"),
        sa.Column("income", sa.Float(), nullable=False),
        sa.Column("needs_data", sa.JSON(), nullable=False),
        sa.Column("wants_data", sa.JSON(), nullable=False),
        sa.Column("savings_data", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )

    op.create_index("ix_budget_entries_budget_date", "budget_entries", ["budget_date"])


def downgrade() -> None:
    op.drop_index("ix_budget_entries_budget_date", table_name="budget_entries")
    op.drop_table("budget_entries")
