from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from enum import Enum
from typing import Any

import structlog

from ventura.client.currency import format_compact
from ventura.client.errors import TransitionCancelled, Unauthorized
from ventura.client.models import Deal
from ventura.client.pipeline.cards import AmountFormatter, DealCardView, KanbanColumnView, build_columns
from ventura.client.pipeline.stages import parse_stage
from ventura.client.pipeline.transitions import Decision, StageCommand, decide
from ventura.shared.enums import DealStage

log = structlog.get_logger()

StageDispatch = Callable[[StageCommand, Decision], Awaitable[Any]]


class BoardState(str, Enum):
    idle = "idle"
    dragging = "dragging"


class KanbanBoard:
    """Drag coordinator over a local shadow of the page's active deals.

    Every stage change goes through `move`: the decision is taken first, the
    card is moved optimistically, and then the single dispatcher is awaited.
    If the dispatcher raises (or the confirmation flow is cancelled) the
    shadow is replaced with the last list handed in through `sync`.

    The board is back to idle before the dispatcher is awaited, so another
    drag can start while a change is still in flight. Overlapping changes
    write the shadow last-write-wins.
    """

    def __init__(
        self,
        deals: Iterable[Deal] = (),
        *,
        dispatch: StageDispatch,
        format_amount: AmountFormatter = format_compact,
    ) -> None:
        self._source: list[Deal] = list(deals)
        self._shadow: list[Deal] = list(self._source)
        self._dispatch = dispatch
        self._format_amount = format_amount
        self.active_id: int | None = None
        self.last_error: str | None = None

    def sync(self, deals: Iterable[Deal]) -> None:
        """Adopt a new externally supplied list; pending optimistic edits are discarded."""
        self._source = list(deals)
        self._shadow = list(self._source)

    @property
    def deals(self) -> tuple[Deal, ...]:
        return tuple(self._shadow)

    @property
    def state(self) -> BoardState:
        return BoardState.dragging if self.active_id is not None else BoardState.idle

    def _find(self, deal_id: int) -> Deal | None:
        return next((d for d in self._shadow if d.id == deal_id), None)

    def columns(self) -> list[KanbanColumnView]:
        return build_columns(self._shadow, self._format_amount)

    def overlay(self) -> DealCardView | None:
        """Card lifted under the pointer while dragging."""
        if self.active_id is None:
            return None
        deal = self._find(self.active_id)
        return DealCardView.from_deal(deal, self._format_amount) if deal else None

    def drag_start(self, deal_id: int) -> None:
        if self._find(deal_id) is None:
            raise KeyError(deal_id)
        self.active_id = deal_id

    def drag_cancel(self) -> None:
        self.active_id = None

    async def drag_end(self, over: str | None) -> bool:
        deal_id, self.active_id = self.active_id, None
        if deal_id is None or over is None:
            return False
        to_stage = parse_stage(over)
        if to_stage is None:
            return False
        return await self.move(deal_id, to_stage)

    async def move(self, deal_id: int, to_stage: DealStage) -> bool:
        """Returns True when the change was confirmed."""
        deal = self._find(deal_id)
        if deal is None or deal.stage == to_stage.value:
            return False

        command = StageCommand(deal_id=deal.id, from_stage=deal.stage, to_stage=to_stage)
        decision = decide(to_stage)

        self._shadow = [d.model_copy(update={"stage": to_stage.value}) if d.id == deal_id else d for d in self._shadow]

        try:
            await self._dispatch(command, decision)
        except TransitionCancelled:
            self._rollback()
            log.info("deal.stage_change.cancelled", deal_id=deal_id, from_stage=command.from_stage, to_stage=to_stage.value)
            return False
        except Unauthorized:
            self._rollback()
            raise
        except Exception as e:
            self._rollback()
            self.last_error = str(e)
            log.error(
                "deal.stage_change.failed",
                deal_id=deal_id,
                from_stage=command.from_stage,
                to_stage=to_stage.value,
                error=str(e),
            )
            return False

        self.last_error = None
        return True

    def _rollback(self) -> None:
        self._shadow = list(self._source)
