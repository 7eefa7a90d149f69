from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import ConfigDict, Field

from ventura.shared.enums import DealStage, LossReason
from ventura.shared.schemas import ApiModel


class Deal(ApiModel):
    """A pipeline deal as the server reports it.

    `stage` stays a plain string: a value outside the known stages is kept
    (and simply shows up in no column) rather than failing the whole load.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    company_name: str
    sector: str = ""
    stage: str
    requested_amount: Decimal = Decimal("0")
    valuation: Decimal = Decimal("0")
    round_stage: str = ""
    team_score: int = 0
    product_score: int = 0
    market_score: int = 0
    traction_score: int = 0
    total_score: int = 0
    founder_name: str = ""
    founder_email: str = ""
    notes: str = ""
    loss_reason: str | None = None
    archived_at: dt.datetime | None = None
    converted_company_id: int | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class NewDeal(ApiModel):
    company_name: str
    sector: str
    requested_amount: Decimal
    valuation: Decimal
    round_stage: str = "Seed"
    team_score: int = Field(default=5, ge=1, le=10)
    product_score: int = Field(default=5, ge=1, le=10)
    market_score: int = Field(default=5, ge=1, le=10)
    traction_score: int = Field(default=5, ge=1, le=10)
    founder_name: str = ""
    founder_email: str
    notes: str = ""


class CloseDealData(ApiModel):
    convert_to_portfolio: bool
    cash_remaining: Decimal | None = None
    monthly_burn_rate: Decimal | None = None
    monthly_revenue: Decimal | None = None


class CloseResult(ApiModel):
    message: str = ""
    company_id: int | None = None


class StageUpdate(ApiModel):
    stage: DealStage


class LoseDealData(ApiModel):
    reason: LossReason


class SearchResult(ApiModel):
    id: int = 0
    type: str
    name: str
    description: str = ""
    url: str


class SearchResponse(ApiModel):
    companies: list[SearchResult] = []
    deals: list[SearchResult] = []
    pages: list[SearchResult] = []
