from __future__ import annotations

from enum import Enum


class Env(str, Enum):
    dev = "dev"
    prod = "prod"
    test = "test"


class DealStage(str, Enum):
    incoming = "incoming"
    screening = "screening"
    due_diligence = "due_diligence"
    term_sheet = "term_sheet"
    closed = "closed"
    lost = "lost"


ACTIVE_STAGES = frozenset({DealStage.incoming, DealStage.screening, DealStage.due_diligence, DealStage.term_sheet})
ARCHIVED_STAGES = frozenset({DealStage.closed, DealStage.lost})


class LossReason(str, Enum):
    passed = "passed"
    valuation_too_high = "valuation_too_high"
    competitor_won = "competitor_won"
    founder_declined = "founder_declined"
    deal_fell_through = "deal_fell_through"
    other = "other"


class HealthStatus(str, Enum):
    green = "green"
    yellow = "yellow"
    red = "red"
