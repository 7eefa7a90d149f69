from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import Field

from ventura.shared.schemas import ApiModel


class MonthlyUpdateIn(ApiModel):
    """Payload for both create and full replace."""

    report_month: dt.date
    mrr: Decimal = Field(default=Decimal("0"), ge=0, max_digits=20, decimal_places=2)
    arr: Decimal = Field(default=Decimal("0"), ge=0, max_digits=20, decimal_places=2)
    cash_in_bank: Decimal = Field(ge=0, max_digits=20, decimal_places=2)
    burn_rate: Decimal = Field(ge=0, max_digits=20, decimal_places=2)
    new_customers: int = Field(default=0, ge=0)
    churn_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, max_digits=5, decimal_places=2)
    notes: str = ""


class MonthlyUpdateOut(ApiModel):
    id: int
    company_id: int
    report_month: dt.date
    mrr: Decimal
    arr: Decimal
    cash_in_bank: Decimal
    burn_rate: Decimal
    new_customers: int
    churn_rate: Decimal
    notes: str
    created_at: dt.datetime
    updated_at: dt.datetime
