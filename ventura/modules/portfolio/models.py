from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ventura.core.db.base import Base, IdMixin, OrganizationScopedMixin, TimestampMixin
from ventura.shared.enums import HealthStatus

# Reported when there is no burn to divide by.
UNBOUNDED_RUNWAY_MONTHS = 999


class PortfolioCompany(Base, IdMixin, OrganizationScopedMixin, TimestampMixin):
    __tablename__ = "portfolio_companies"

    name: Mapped[str] = mapped_column(String(300), index=True)
    sector: Mapped[str] = mapped_column(String(120), index=True)
    amount_invested: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    current_valuation: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    round_stage: Mapped[str] = mapped_column(String(64), default="")
    invested_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True))

    cash_remaining: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))
    monthly_burn_rate: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))
    monthly_revenue: Mapped[Decimal] = mapped_column(Numeric(20, 2), default=Decimal("0"))

    @property
    def runway_months(self) -> int:
        burn = self.monthly_burn_rate or Decimal("0")
        if burn <= 0:
            return UNBOUNDED_RUNWAY_MONTHS
        return int((self.cash_remaining or Decimal("0")) / burn)

    @property
    def health_status(self) -> HealthStatus:
        runway = self.runway_months
        if runway >= 6:
            return HealthStatus.green
        if runway >= 3:
            return HealthStatus.yellow
        return HealthStatus.red
