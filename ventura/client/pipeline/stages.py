from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ventura.client.models import Deal
from ventura.shared.enums import ARCHIVED_STAGES, DealStage, LossReason


@dataclass(frozen=True)
class StageColumn:
    id: DealStage
    title: str


# Left-to-right column order. Presentational only: any stage may follow any other.
STAGES: tuple[StageColumn, ...] = (
    StageColumn(DealStage.incoming, "Incoming"),
    StageColumn(DealStage.screening, "Screening"),
    StageColumn(DealStage.due_diligence, "Due Diligence"),
    StageColumn(DealStage.term_sheet, "Term Sheet"),
    StageColumn(DealStage.closed, "Closed"),
    StageColumn(DealStage.lost, "Lost"),
)

LOSS_REASON_LABELS: dict[LossReason, str] = {
    LossReason.passed: "Passed on Opportunity",
    LossReason.valuation_too_high: "Valuation Too High",
    LossReason.competitor_won: "Competitor Won",
    LossReason.founder_declined: "Founder Declined",
    LossReason.deal_fell_through: "Deal Fell Through",
    LossReason.other: "Other",
}


def parse_stage(value: str) -> DealStage | None:
    try:
        return DealStage(value)
    except ValueError:
        return None


def is_terminal(stage: str) -> bool:
    return parse_stage(stage) in ARCHIVED_STAGES


def partition(deals: Iterable[Deal]) -> dict[DealStage, list[Deal]]:
    """Bucket deals by exact stage match, in column order.

    Deals with an unknown stage land in no bucket.
    """
    buckets: dict[DealStage, list[Deal]] = {column.id: [] for column in STAGES}
    for deal in deals:
        bucket = buckets.get(parse_stage(deal.stage))
        if bucket is not None:
            bucket.append(deal)
    return buckets
