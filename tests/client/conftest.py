from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable

import pytest

from ventura.client.models import CloseDealData, CloseResult, Deal, NewDeal
from ventura.shared.enums import DealStage, LossReason


class FakeApi:
    """In-memory stand-in for VenturaApi that records every call."""

    def __init__(self, active: list[Deal] | None = None, archived: list[Deal] | None = None) -> None:
        self.active = list(active or [])
        self.archived = list(archived or [])
        self.calls: list[tuple] = []
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.company_id: int | None = 42
        self._ids = itertools.count(100)

    def called(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    async def _enter(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if name in self.failures:
            raise self.failures[name]

    async def list_deals(self, *, archived: bool) -> list[Deal]:
        await self._enter("list_deals", archived)
        return list(self.archived if archived else self.active)

    async def update_deal_stage(self, deal_id: int, stage: DealStage) -> Deal:
        await self._enter("update_deal_stage", deal_id, stage)
        deal = next(d for d in self.active if d.id == deal_id)
        return deal.model_copy(update={"stage": stage.value})

    async def create_deal(self, data: NewDeal) -> Deal:
        await self._enter("create_deal", data)
        return Deal(
            id=next(self._ids),
            stage="incoming",
            total_score=data.team_score + data.product_score + data.market_score + data.traction_score,
            **data.model_dump(),
        )

    async def close_deal(self, deal_id: int, data: CloseDealData) -> CloseResult:
        await self._enter("close_deal", deal_id, data)
        return CloseResult(company_id=self.company_id if data.convert_to_portfolio else None)

    async def lose_deal(self, deal_id: int, reason: LossReason) -> None:
        await self._enter("lose_deal", deal_id, reason)


@pytest.fixture()
def make_deal() -> Callable[..., Deal]:
    ids = itertools.count(1)

    def _make(stage: str = "incoming", **overrides) -> Deal:
        deal_id = overrides.pop("id", None) or next(ids)
        fields = {
            "id": deal_id,
            "company_name": f"Company {deal_id}",
            "sector": "Fintech",
            "stage": stage,
            "requested_amount": "2000000",
            "valuation": "10000000",
            "round_stage": "Seed",
            "team_score": 7,
            "product_score": 6,
            "market_score": 8,
            "traction_score": 5,
            "total_score": 26,
            "founder_email": f"founder{deal_id}@example.com",
        }
        fields.update(overrides)
        return Deal(**fields)

    return _make


@pytest.fixture()
def fake_api() -> FakeApi:
    return FakeApi()

