from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ventura.client.currency import format_compact
from ventura.client.models import Deal
from ventura.client.pipeline.stages import LOSS_REASON_LABELS, STAGES, parse_stage, partition
from ventura.shared.enums import DealStage

AmountFormatter = Callable[[Any], str]

MAX_SUB_SCORE = 10
MAX_TOTAL_SCORE = 40
EMPTY_COLUMN_TEXT = "No deals in this stage"


def score_tone(score: int) -> str:
    if score >= 8:
        return "excellent"
    if score >= 6:
        return "good"
    if score >= 4:
        return "fair"
    return "poor"


@dataclass(frozen=True)
class ScoreBar:
    label: str
    score: int

    @property
    def percent(self) -> int:
        return max(0, min(self.score, MAX_SUB_SCORE)) * 100 // MAX_SUB_SCORE

    @property
    def tone(self) -> str:
        return score_tone(self.score)


@dataclass(frozen=True)
class DealCardView:
    deal_id: int
    company_name: str
    sector: str
    round_stage: str
    requested: str
    valuation: str
    scores: tuple[ScoreBar, ...]
    total: str
    founder_name: str

    @classmethod
    def from_deal(cls, deal: Deal, format_amount: AmountFormatter = format_compact) -> DealCardView:
        # totalScore is the server's value, never recomputed here
        return cls(
            deal_id=deal.id,
            company_name=deal.company_name,
            sector=deal.sector,
            round_stage=deal.round_stage,
            requested=format_amount(deal.requested_amount),
            valuation=format_amount(deal.valuation),
            scores=(
                ScoreBar("Team", deal.team_score),
                ScoreBar("Product", deal.product_score),
                ScoreBar("Market", deal.market_score),
                ScoreBar("Traction", deal.traction_score),
            ),
            total=f"{deal.total_score}/{MAX_TOTAL_SCORE}",
            founder_name=deal.founder_name,
        )


@dataclass(frozen=True)
class KanbanColumnView:
    stage: DealStage
    title: str
    cards: tuple[DealCardView, ...]

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def empty_text(self) -> str | None:
        return EMPTY_COLUMN_TEXT if not self.cards else None


def build_columns(deals: Iterable[Deal], format_amount: AmountFormatter = format_compact) -> list[KanbanColumnView]:
    buckets = partition(deals)
    return [
        KanbanColumnView(
            stage=column.id,
            title=column.title,
            cards=tuple(DealCardView.from_deal(d, format_amount) for d in buckets[column.id]),
        )
        for column in STAGES
    ]


@dataclass(frozen=True)
class HistoryRowView:
    deal_id: int
    company_name: str
    sector: str
    outcome: str
    detail: str
    archived_at: dt.datetime | None
    requested: str

    @classmethod
    def from_deal(cls, deal: Deal, format_amount: AmountFormatter = format_compact) -> HistoryRowView:
        stage = parse_stage(deal.stage)
        if stage is DealStage.closed:
            outcome = "Closed"
            detail = (
                f"Converted to portfolio (company #{deal.converted_company_id})"
                if deal.converted_company_id is not None
                else "Not converted"
            )
        elif stage is DealStage.lost:
            outcome = "Lost"
            detail = _loss_label(deal.loss_reason)
        else:
            outcome = deal.stage
            detail = ""
        return cls(
            deal_id=deal.id,
            company_name=deal.company_name,
            sector=deal.sector,
            outcome=outcome,
            detail=detail,
            archived_at=deal.archived_at,
            requested=format_amount(deal.requested_amount or Decimal("0")),
        )


def _loss_label(reason: str | None) -> str:
    if reason is None:
        return ""
    for key, label in LOSS_REASON_LABELS.items():
        if key.value == reason:
            return label
    return reason


def build_history(deals: Iterable[Deal], format_amount: AmountFormatter = format_compact) -> list[HistoryRowView]:
    """Rows in the order the server returned them (newest archive first)."""
    return [HistoryRowView.from_deal(d, format_amount) for d in deals]
