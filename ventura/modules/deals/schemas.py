from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import EmailStr, Field

from ventura.shared.enums import DealStage, LossReason
from ventura.shared.schemas import ApiModel


class DealCreate(ApiModel):
    company_name: str = Field(min_length=1, max_length=300)
    sector: str = Field(min_length=1, max_length=120)
    requested_amount: Decimal = Field(gt=0, max_digits=20, decimal_places=2)
    valuation: Decimal = Field(gt=0, max_digits=20, decimal_places=2)
    round_stage: str = Field(default="Seed", max_length=64)
    team_score: int = Field(default=5, ge=1, le=10)
    product_score: int = Field(default=5, ge=1, le=10)
    market_score: int = Field(default=5, ge=1, le=10)
    traction_score: int = Field(default=5, ge=1, le=10)
    founder_name: str = Field(default="", max_length=200)
    founder_email: EmailStr
    notes: str = ""


class DealOut(ApiModel):
    id: int
    company_name: str
    sector: str
    stage: DealStage
    requested_amount: Decimal
    valuation: Decimal
    round_stage: str
    team_score: int
    product_score: int
    market_score: int
    traction_score: int
    total_score: int
    founder_name: str
    founder_email: str
    notes: str
    loss_reason: LossReason | None = None
    archived_at: dt.datetime | None = None
    converted_company_id: int | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class DealStagePatch(ApiModel):
    stage: DealStage


class DealCloseRequest(ApiModel):
    convert_to_portfolio: bool = False
    # Company data for conversion
    amount_invested: Decimal | None = Field(default=None, ge=0)
    cash_remaining: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_burn_rate: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_revenue: Decimal = Field(default=Decimal("0"), ge=0)


class DealCloseOut(ApiModel):
    message: str
    company_id: int | None = None


class DealLoseRequest(ApiModel):
    reason: LossReason
