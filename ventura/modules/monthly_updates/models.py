from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from ventura.core.db.base import Base, IdMixin, OrganizationScopedMixin, TimestampMixin


class MonthlyUpdate(Base, IdMixin, OrganizationScopedMixin, TimestampMixin):
    __tablename__ = "monthly_updates"

    company_id: Mapped[int] = mapped_column(
        ForeignKey("portfolio_companies.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    # Always the first day of the reported month.
    report_month: Mapped[dt.date] = mapped_column(Date, nullable=False)

    mrr: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))
    arr: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))
    cash_in_bank: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    burn_rate: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    new_customers: Mapped[int] = mapped_column(Integer, default=0)
    # percent, 0-100
    churn_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"))
    notes: Mapped[str] = mapped_column(Text, default="")

    __table_args__ = (Index("ix_monthly_updates_company_month", "company_id", "report_month"),)
