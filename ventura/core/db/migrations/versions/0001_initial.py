"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _organization_column() -> sa.Column:
    return sa.Column(
        "organization_id",
        sa.Integer(),
        sa.ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        *_timestamp_columns(),
    )
    op.create_index("ix_organizations_id", "organizations", ["id"])
    op.create_index("ix_organizations_name", "organizations", ["name"], unique=True)

    op.create_table(
        "portfolio_companies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        _organization_column(),
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("sector", sa.String(length=120), nullable=False),
        sa.Column("amount_invested", sa.Numeric(20, 2), nullable=False),
        sa.Column("current_valuation", sa.Numeric(20, 2), nullable=False),
        sa.Column("round_stage", sa.String(length=64), nullable=False),
        sa.Column("invested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("cash_remaining", sa.Numeric(20, 2), nullable=False),
        sa.Column("monthly_burn_rate", sa.Numeric(20, 2), nullable=False),
        sa.Column("monthly_revenue", sa.Numeric(20, 2), nullable=False),
        *_timestamp_columns(),
    )
    op.create_index("ix_portfolio_companies_id", "portfolio_companies", ["id"])
    op.create_index("ix_portfolio_companies_organization_id", "portfolio_companies", ["organization_id"])
    op.create_index("ix_portfolio_companies_name", "portfolio_companies", ["name"])
    op.create_index("ix_portfolio_companies_sector", "portfolio_companies", ["sector"])

    op.create_table(
        "deals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        _organization_column(),
        sa.Column("company_name", sa.String(length=300), nullable=False),
        sa.Column("sector", sa.String(length=120), nullable=False),
        sa.Column("stage", sa.String(length=32), nullable=False, server_default="incoming"),
        sa.Column("requested_amount", sa.Numeric(20, 2), nullable=False),
        sa.Column("valuation", sa.Numeric(20, 2), nullable=False),
        sa.Column("round_stage", sa.String(length=64), nullable=False),
        sa.Column("team_score", sa.Integer(), nullable=False),
        sa.Column("product_score", sa.Integer(), nullable=False),
        sa.Column("market_score", sa.Integer(), nullable=False),
        sa.Column("traction_score", sa.Integer(), nullable=False),
        sa.Column("founder_name", sa.String(length=200), nullable=False),
        sa.Column("founder_email", sa.String(length=320), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("loss_reason", sa.String(length=64), nullable=True),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "converted_company_id",
            sa.Integer(),
            sa.ForeignKey("portfolio_companies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamp_columns(),
    )
    op.create_index("ix_deals_id", "deals", ["id"])
    op.create_index("ix_deals_organization_id", "deals", ["organization_id"])
    op.create_index("ix_deals_company_name", "deals", ["company_name"])
    op.create_index("ix_deals_sector", "deals", ["sector"])
    op.create_index("ix_deals_stage", "deals", ["stage"])
    op.create_index("ix_deals_archived_at", "deals", ["archived_at"])
    op.create_index("ix_deals_org_stage", "deals", ["organization_id", "stage"])


def downgrade() -> None:
    op.drop_table("deals")
    op.drop_table("portfolio_companies")
    op.drop_table("organizations")
