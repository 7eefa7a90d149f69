from __future__ import annotations

import json

import httpx
import pytest

from ventura.client.api import VenturaApi
from ventura.client.errors import ApiError, Unauthorized
from ventura.client.models import CloseDealData
from ventura.client.pipeline.modals import ConvertToPortfolioModal
from ventura.client.settings import ClientSettings
from ventura.shared.enums import DealStage, LossReason

DEAL_JSON = {
    "id": 5,
    "companyName": "FinanceBot",
    "sector": "Fintech",
    "stage": "screening",
    "requestedAmount": "3000000.00",
    "valuation": "15000000.00",
    "roundStage": "Series A",
    "teamScore": 9,
    "productScore": 8,
    "marketScore": 7,
    "tractionScore": 8,
    "totalScore": 32,
    "founderName": "David Kim",
    "founderEmail": "david@financebot.com",
    "notes": "",
    "createdAt": "2026-03-01T10:00:00",
    "updatedAt": "2026-03-01T10:00:00",
}


def _api(handler, **settings) -> VenturaApi:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test")
    return VenturaApi(ClientSettings(**settings), client=client)


@pytest.mark.asyncio
async def test_update_stage_sends_patch_and_parses_deal():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["actor"] = request.headers.get("X-DEV-ACTOR")
        return httpx.Response(200, json=DEAL_JSON)

    api = _api(handler, dev_actor='{"actor_id": "u1", "organization_id": 1}')
    deal = await api.update_deal_stage(5, DealStage.screening)

    assert seen == {
        "method": "PATCH",
        "path": "/api/deals/5/stage",
        "body": {"stage": "screening"},
        "actor": '{"actor_id": "u1", "organization_id": 1}',
    }
    assert deal.total_score == 32
    assert deal.company_name == "FinanceBot"


@pytest.mark.asyncio
async def test_list_deals_passes_archived_flag():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["archived"] == "true"
        return httpx.Response(200, json=[{**DEAL_JSON, "stage": "lost", "lossReason": "other"}])

    deals = await _api(handler).list_deals(archived=True)
    assert [d.loss_reason for d in deals] == ["other"]


@pytest.mark.asyncio
async def test_close_deal_omits_unset_fields():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"message": "Deal closed", "companyId": None})

    result = await _api(handler).close_deal(5, CloseDealData(convert_to_portfolio=False))

    assert bodies == [{"convertToPortfolio": False}]
    assert result.company_id is None


@pytest.mark.asyncio
async def test_unauthorized_points_at_login():
    api = _api(lambda request: httpx.Response(401, json={"detail": "No authentication token provided"}))

    with pytest.raises(Unauthorized) as exc_info:
        await api.lose_deal(5, LossReason.passed)

    assert exc_info.value.redirect_to == "/login"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_server_detail_becomes_error_message():
    api = _api(lambda request: httpx.Response(409, json={"detail": "Deal 5 is archived"}))

    with pytest.raises(ApiError) as exc_info:
        await api.update_deal_stage(5, DealStage.screening)

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Deal 5 is archived"


@pytest.mark.asyncio
async def test_error_without_detail_uses_generic_message():
    api = _api(lambda request: httpx.Response(500, text="oops"))

    with pytest.raises(ApiError) as exc_info:
        await api.list_deals(archived=False)

    assert exc_info.value.message == "Failed to fetch deals: Internal Server Error"


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as exc_info:
        await _api(handler).search("tech")

    assert exc_info.value.status_code == 0
    assert "connection refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_malformed_success_body_is_an_api_error():
    api = _api(lambda request: httpx.Response(200, text="<html>gateway</html>"))

    with pytest.raises(ApiError) as exc_info:
        await api.update_deal_stage(5, DealStage.screening)

    assert exc_info.value.status_code == 200
    assert exc_info.value.message == "Failed to update deal stage: invalid response"


@pytest.mark.asyncio
async def test_success_body_with_wrong_shape_is_an_api_error():
    api = _api(lambda request: httpx.Response(200, json={"unexpected": True}))

    with pytest.raises(ApiError) as exc_info:
        await api.list_deals(archived=False)
    assert exc_info.value.message == "Failed to fetch deals: invalid response"

    api = _api(lambda request: httpx.Response(200, json=["tech"]))
    with pytest.raises(ApiError):
        await api.search("tech")


@pytest.mark.asyncio
async def test_convert_modal_shows_invalid_response_inline(make_deal):
    api = _api(lambda request: httpx.Response(200, json={"companyId": "not-a-number"}))
    completed = []
    modal = ConvertToPortfolioModal(api, lambda deal, company_id: completed.append(deal.id))
    modal.open(make_deal("term_sheet"))

    assert await modal.skip() is False

    assert modal.is_open
    assert modal.error == "Failed to close deal: invalid response"
    assert completed == []
