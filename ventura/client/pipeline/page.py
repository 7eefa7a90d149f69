from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum

import structlog

from ventura.client.api import VenturaApi
from ventura.client.currency import CurrencyService, format_compact
from ventura.client.errors import ClientError, ModalBusy, TransitionCancelled, Unauthorized, user_message
from ventura.client.models import Deal
from ventura.client.pipeline.board import KanbanBoard
from ventura.client.pipeline.cards import HistoryRowView, KanbanColumnView, build_history
from ventura.client.pipeline.modals import AddDealForm, ConvertToPortfolioModal, LossReasonModal
from ventura.client.pipeline.transitions import Decision, ModalKind, NeedsModal, StageCommand
from ventura.shared.enums import DealStage, LossReason
from ventura.shared.utils import utcnow

log = structlog.get_logger()

LOAD_ERROR = "Failed to load deals"


class ViewMode(str, Enum):
    active = "active"
    history = "history"


@dataclass
class PendingTransition:
    deal: Deal
    kind: ModalKind
    done: asyncio.Future[None]


class DealsPage:
    """Owns the active and archived lists and wires the board to the API.

    Non-terminal stage changes are sent straight to the API. Terminal ones
    open the matching modal and wait for it to complete or be dismissed;
    only one deal can be waiting on a modal at a time.
    """

    def __init__(self, api: VenturaApi, *, currency: CurrencyService | None = None) -> None:
        self.api = api
        self.currency = currency
        format_amount = currency.format_compact if currency is not None else format_compact

        self._active: list[Deal] = []
        self.archived: list[Deal] = []
        self.view_mode = ViewMode.active
        self.loading = False
        self.error: str | None = None
        self.pending: PendingTransition | None = None

        self.board = KanbanBoard(dispatch=self.dispatch_stage_change, format_amount=format_amount)
        self.close_modal = ConvertToPortfolioModal(api, self._on_deal_closed)
        self.lose_modal = LossReasonModal(api, self._on_deal_lost)
        self.add_form = AddDealForm()
        self._format_amount = format_amount

    @property
    def active(self) -> list[Deal]:
        return self._active

    @active.setter
    def active(self, deals: list[Deal]) -> None:
        self._active = list(deals)
        self.board.sync(self._active)

    async def load(self) -> bool:
        """Fetch active and archived deals together; either failing fails the load."""
        self.loading = True
        self.error = None
        try:
            active, archived = await asyncio.gather(
                self.api.list_deals(archived=False),
                self.api.list_deals(archived=True),
                return_exceptions=True,
            )
        finally:
            self.loading = False

        for result in (active, archived):
            if isinstance(result, Unauthorized):
                raise result
        for result in (active, archived):
            if isinstance(result, BaseException):
                self.error = user_message(result) if isinstance(result, ClientError) else LOAD_ERROR
                log.warning("deals.load_failed", error=str(result))
                return False

        self.active = active
        self.archived = list(archived)
        log.info("deals.loaded", active=len(self.active), archived=len(self.archived))
        return True

    # stage changes

    async def dispatch_stage_change(self, command: StageCommand, decision: Decision) -> None:
        if isinstance(decision, NeedsModal):
            await self._await_modal(command, decision.kind)
            return

        updated = await self.api.update_deal_stage(command.deal_id, command.to_stage)
        self.active = [updated if d.id == updated.id else d for d in self._active]
        log.info(
            "deal.stage_changed",
            deal_id=command.deal_id,
            from_stage=command.from_stage,
            to_stage=command.to_stage.value,
        )

    async def _await_modal(self, command: StageCommand, kind: ModalKind) -> None:
        if self.pending is not None:
            raise ModalBusy(f"Finish the open {self.pending.kind.value} flow for {self.pending.deal.company_name} first")

        deal = next((d for d in self._active if d.id == command.deal_id), None)
        if deal is None:
            raise ClientError(f"Deal {command.deal_id} is not in the active pipeline")

        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self.pending = PendingTransition(deal=deal, kind=kind, done=done)
        if kind is ModalKind.close:
            self.close_modal.open(deal)
        else:
            self.lose_modal.open(deal)

        try:
            await done
        finally:
            if self.pending is not None and self.pending.done is done:
                self.pending = None

    def _resolve_pending(self, deal_id: int) -> None:
        pending = self.pending
        if pending is not None and pending.deal.id == deal_id and not pending.done.done():
            pending.done.set_result(None)

    def dismiss_modal(self) -> None:
        """Close whichever modal is open; the board rolls the card back."""
        self.close_modal.close()
        self.lose_modal.close()
        pending = self.pending
        if pending is not None and not pending.done.done():
            pending.done.set_exception(TransitionCancelled(f"{pending.kind.value} cancelled"))

    def _archive(self, deal: Deal, **changes: object) -> None:
        archived = deal.model_copy(update={"archived_at": utcnow(), **changes})
        self.active = [d for d in self._active if d.id != deal.id]
        # newest first, matching the server's archived ordering
        self.archived = [archived, *self.archived]

    def _on_deal_closed(self, deal: Deal, company_id: int | None) -> None:
        self._archive(deal, stage=DealStage.closed.value, converted_company_id=company_id)
        log.info("deal.closed", deal_id=deal.id, converted_company_id=company_id)
        self._resolve_pending(deal.id)

    def _on_deal_lost(self, deal: Deal, reason: LossReason) -> None:
        self._archive(deal, stage=DealStage.lost.value, loss_reason=reason.value)
        log.info("deal.lost", deal_id=deal.id, loss_reason=reason.value)
        self._resolve_pending(deal.id)

    # creation

    def deal_created(self, deal: Deal) -> None:
        self.active = [deal, *self._active]

    async def submit_new_deal(self) -> Deal | None:
        deal = await self.add_form.submit(self.api)
        if deal is not None:
            self.deal_created(deal)
        return deal

    # views

    def set_view_mode(self, mode: ViewMode | str) -> None:
        self.view_mode = ViewMode(mode)

    def columns(self) -> list[KanbanColumnView]:
        return self.board.columns()

    def history_rows(self) -> list[HistoryRowView]:
        return build_history(self.archived, self._format_amount)
