from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import Field

from ventura.shared.enums import HealthStatus
from ventura.shared.schemas import ApiModel


class PortfolioCompanyCreate(ApiModel):
    name: str = Field(min_length=1, max_length=300)
    sector: str = Field(min_length=1, max_length=120)
    amount_invested: Decimal = Field(ge=0, max_digits=20, decimal_places=2)
    current_valuation: Decimal = Field(ge=0, max_digits=20, decimal_places=2)
    round_stage: str = Field(min_length=1, max_length=64)
    invested_at: dt.datetime | None = None
    cash_remaining: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_burn_rate: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_revenue: Decimal = Field(default=Decimal("0"), ge=0)


class PortfolioCompanyUpdate(ApiModel):
    """Partial update: only the fields present in the payload are written."""

    name: str | None = Field(default=None, min_length=1, max_length=300)
    sector: str | None = Field(default=None, min_length=1, max_length=120)
    amount_invested: Decimal | None = Field(default=None, ge=0)
    current_valuation: Decimal | None = Field(default=None, ge=0)
    round_stage: str | None = Field(default=None, min_length=1, max_length=64)
    invested_at: dt.datetime | None = None
    cash_remaining: Decimal | None = Field(default=None, ge=0)
    monthly_burn_rate: Decimal | None = Field(default=None, ge=0)
    monthly_revenue: Decimal | None = Field(default=None, ge=0)


class PortfolioCompanyOut(ApiModel):
    id: int
    name: str
    sector: str
    amount_invested: Decimal
    current_valuation: Decimal
    round_stage: str
    invested_at: dt.datetime
    cash_remaining: Decimal
    monthly_burn_rate: Decimal
    monthly_revenue: Decimal
    runway_months: int
    health_status: HealthStatus
    created_at: dt.datetime
    updated_at: dt.datetime
