from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ventura.shared.enums import DealStage


class ModalKind(str, Enum):
    close = "close"
    lose = "lose"


@dataclass(frozen=True)
class Direct:
    """Apply the stage change with a plain update call."""


@dataclass(frozen=True)
class NeedsModal:
    """Collect extra input (and call the matching archive endpoint) first."""

    kind: ModalKind


Decision = Direct | NeedsModal

_MODAL_STAGES = {
    DealStage.closed: ModalKind.close,
    DealStage.lost: ModalKind.lose,
}


def decide(to_stage: DealStage) -> Decision:
    kind = _MODAL_STAGES.get(to_stage)
    if kind is None:
        return Direct()
    return NeedsModal(kind)


@dataclass(frozen=True)
class StageCommand:
    deal_id: int
    from_stage: str
    to_stage: DealStage
