from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

import structlog

from ventura.client.api import VenturaApi
from ventura.client.errors import ClientError, Unauthorized, user_message
from ventura.client.models import CloseDealData, Deal, NewDeal
from ventura.client.pipeline.stages import LOSS_REASON_LABELS
from ventura.shared.enums import LossReason
from ventura.shared.utils import to_decimal

log = structlog.get_logger()

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_CENTS = Decimal("0.01")


def _positive_amount(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.strip())
        if not value.is_finite() or value <= 0:
            return None
        return value.quantize(_CENTS)
    except (InvalidOperation, AttributeError):
        return None


class AddDealForm:
    """New-deal form state. Field values are kept as typed by the user."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.company_name = ""
        self.sector = ""
        self.requested_amount = ""
        self.valuation = ""
        self.round_stage = "Seed"
        self.team_score = 5
        self.product_score = 5
        self.market_score = 5
        self.traction_score = 5
        self.founder_name = ""
        self.founder_email = ""
        self.notes = ""
        self.errors: dict[str, str] = {}
        self.error: str | None = None
        self.submitting = False

    def set_field(self, name: str, value: object) -> None:
        if not hasattr(self, name) or name in {"errors", "error", "submitting"}:
            raise AttributeError(name)
        setattr(self, name, value)
        self.errors.pop(name, None)

    def validate(self) -> bool:
        errors: dict[str, str] = {}
        if not self.company_name.strip():
            errors["company_name"] = "Company name is required"
        if not self.sector.strip():
            errors["sector"] = "Sector is required"
        if _positive_amount(self.requested_amount) is None:
            errors["requested_amount"] = "Valid requested amount is required"
        if _positive_amount(self.valuation) is None:
            errors["valuation"] = "Valid valuation is required"
        if not self.founder_email.strip():
            errors["founder_email"] = "Founder email is required"
        elif not _EMAIL_RE.match(self.founder_email.strip()):
            errors["founder_email"] = "Valid email is required"
        for name in ("team_score", "product_score", "market_score", "traction_score"):
            score = getattr(self, name)
            if not isinstance(score, int) or not 1 <= score <= 10:
                errors[name] = "Score must be between 1 and 10"
        self.errors = errors
        return not errors

    def to_new_deal(self) -> NewDeal:
        return NewDeal(
            company_name=self.company_name.strip(),
            sector=self.sector.strip(),
            requested_amount=_positive_amount(self.requested_amount),
            valuation=_positive_amount(self.valuation),
            round_stage=self.round_stage,
            team_score=self.team_score,
            product_score=self.product_score,
            market_score=self.market_score,
            traction_score=self.traction_score,
            founder_name=self.founder_name.strip(),
            founder_email=self.founder_email.strip(),
            notes=self.notes,
        )

    async def submit(self, api: VenturaApi) -> Deal | None:
        """Validate and create. Returns the created deal, or None (errors are set)."""
        self.error = None
        if not self.validate():
            return None

        self.submitting = True
        try:
            deal = await api.create_deal(self.to_new_deal())
        except Unauthorized:
            raise
        except ClientError as e:
            self.error = user_message(e)
            return None
        finally:
            self.submitting = False

        log.info("deal.created", deal_id=deal.id, company_name=deal.company_name)
        self.reset()
        return deal


class ConvertToPortfolioModal:
    """Close flow: optionally turn the deal into a portfolio company."""

    def __init__(self, api: VenturaApi, on_complete: Callable[[Deal, int | None], None]) -> None:
        self._api = api
        self._on_complete = on_complete
        self.deal: Deal | None = None
        self._clear()

    def _clear(self) -> None:
        self.cash_remaining = ""
        self.monthly_burn_rate = ""
        self.monthly_revenue = ""
        self.error: str | None = None
        self.submitting = False

    @property
    def is_open(self) -> bool:
        return self.deal is not None

    def open(self, deal: Deal) -> None:
        self._clear()
        self.deal = deal

    def close(self) -> None:
        self.deal = None
        self._clear()

    async def skip(self) -> bool:
        return await self._finish(CloseDealData(convert_to_portfolio=False))

    async def convert(self) -> bool:
        # blank or non-numeric inputs count as 0
        data = CloseDealData(
            convert_to_portfolio=True,
            cash_remaining=to_decimal(self.cash_remaining),
            monthly_burn_rate=to_decimal(self.monthly_burn_rate),
            monthly_revenue=to_decimal(self.monthly_revenue),
        )
        return await self._finish(data)

    async def _finish(self, data: CloseDealData) -> bool:
        deal = self.deal
        if deal is None or self.submitting:
            return False

        self.submitting = True
        self.error = None
        try:
            result = await self._api.close_deal(deal.id, data)
        except Unauthorized:
            raise
        except ClientError as e:
            self.error = user_message(e)
            return False
        finally:
            self.submitting = False

        self.close()
        self._on_complete(deal, result.company_id)
        return True


class LossReasonModal:
    """Lose flow: one reason from the fixed list is required."""

    options = tuple(LOSS_REASON_LABELS.items())

    def __init__(self, api: VenturaApi, on_complete: Callable[[Deal, LossReason], None]) -> None:
        self._api = api
        self._on_complete = on_complete
        self.deal: Deal | None = None
        self.reason: LossReason | None = None
        self.error: str | None = None
        self.submitting = False

    @property
    def is_open(self) -> bool:
        return self.deal is not None

    @property
    def can_submit(self) -> bool:
        return self.deal is not None and self.reason is not None and not self.submitting

    def open(self, deal: Deal) -> None:
        self.deal = deal
        self.reason = None
        self.error = None

    def close(self) -> None:
        self.deal = None
        self.reason = None
        self.error = None

    def select(self, reason: LossReason | str) -> None:
        self.reason = LossReason(reason)
        self.error = None

    async def submit(self) -> bool:
        deal = self.deal
        if deal is None:
            return False
        if self.reason is None:
            self.error = "Please select a reason"
            return False
        if self.submitting:
            return False

        reason = self.reason
        self.submitting = True
        self.error = None
        try:
            await self._api.lose_deal(deal.id, reason)
        except Unauthorized:
            raise
        except ClientError as e:
            self.error = user_message(e)
            return False
        finally:
            self.submitting = False

        self.close()
        self._on_complete(deal, reason)
        return True
