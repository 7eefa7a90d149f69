from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ventura.core.db.base import Base, IdMixin, OrganizationScopedMixin, TimestampMixin
from ventura.shared.enums import DealStage


class Deal(Base, IdMixin, OrganizationScopedMixin, TimestampMixin):
    __tablename__ = "deals"

    company_name: Mapped[str] = mapped_column(String(300), index=True)
    sector: Mapped[str] = mapped_column(String(120), index=True)
    stage: Mapped[str] = mapped_column(String(32), default=DealStage.incoming.value, nullable=False, index=True)

    requested_amount: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))
    valuation: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))
    round_stage: Mapped[str] = mapped_column(String(64), default="")

    # 1-10 each
    team_score: Mapped[int] = mapped_column(Integer, default=0)
    product_score: Mapped[int] = mapped_column(Integer, default=0)
    market_score: Mapped[int] = mapped_column(Integer, default=0)
    traction_score: Mapped[int] = mapped_column(Integer, default=0)

    founder_name: Mapped[str] = mapped_column(String(200), default="")
    founder_email: Mapped[str] = mapped_column(String(320), default="")
    notes: Mapped[str] = mapped_column(Text, default="")

    # archived_at IS NULL <=> active
    loss_reason: Mapped[str | None] = mapped_column(String(64), nullable=True)
    archived_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    converted_company_id: Mapped[int | None] = mapped_column(
        ForeignKey("portfolio_companies.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (Index("ix_deals_org_stage", "organization_id", "stage"),)

    @property
    def total_score(self) -> int:
        return (self.team_score or 0) + (self.product_score or 0) + (self.market_score or 0) + (self.traction_score or 0)

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None
