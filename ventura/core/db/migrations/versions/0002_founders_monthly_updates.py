"""founders and monthly updates

Revision ID: 0002_founders_monthly_updates
Revises: 0001_initial
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0002_founders_monthly_updates"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _scoped_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "organization_id",
            sa.Integer(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "company_id",
            sa.Integer(),
            sa.ForeignKey("portfolio_companies.id", ondelete="CASCADE"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "founders",
        *_scoped_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=120), nullable=False),
        sa.Column("linkedin_url", sa.String(length=500), nullable=False),
        *_timestamp_columns(),
        sa.UniqueConstraint("organization_id", "email", name="uq_founders_org_email"),
    )
    op.create_index("ix_founders_id", "founders", ["id"])
    op.create_index("ix_founders_organization_id", "founders", ["organization_id"])
    op.create_index("ix_founders_company_id", "founders", ["company_id"])

    op.create_table(
        "monthly_updates",
        *_scoped_columns(),
        sa.Column("report_month", sa.Date(), nullable=False),
        sa.Column("mrr", sa.Numeric(20, 2), nullable=False),
        sa.Column("arr", sa.Numeric(20, 2), nullable=False),
        sa.Column("cash_in_bank", sa.Numeric(20, 2), nullable=False),
        sa.Column("burn_rate", sa.Numeric(20, 2), nullable=False),
        sa.Column("new_customers", sa.Integer(), nullable=False),
        sa.Column("churn_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        *_timestamp_columns(),
    )
    op.create_index("ix_monthly_updates_id", "monthly_updates", ["id"])
    op.create_index("ix_monthly_updates_organization_id", "monthly_updates", ["organization_id"])
    op.create_index("ix_monthly_updates_company_id", "monthly_updates", ["company_id"])
    op.create_index("ix_monthly_updates_company_month", "monthly_updates", ["company_id", "report_month"])


def downgrade() -> None:
    op.drop_table("monthly_updates")
    op.drop_table("founders")
