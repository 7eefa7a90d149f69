from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from ventura.client.errors import ApiError, Unauthorized
from ventura.client.models import (
    CloseDealData,
    CloseResult,
    Deal,
    LoseDealData,
    NewDeal,
    SearchResponse,
    StageUpdate,
)
from ventura.client.settings import ClientSettings
from ventura.shared.enums import DealStage, LossReason

log = structlog.get_logger()

T = TypeVar("T")


def _error_message(response: httpx.Response, action: str) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if isinstance(detail, str) and detail:
            return detail
        if isinstance(detail, list) and detail and isinstance(detail[0], dict) and detail[0].get("msg"):
            # FastAPI validation error list
            return str(detail[0]["msg"])
    return f"Failed to {action}: {response.reason_phrase or response.status_code}"


class VenturaApi:
    """Thin async wrapper over the Ventura REST API.

    Every call carries the session cookies (and the dev actor header when
    configured). A 401 raises `Unauthorized` pointing at the login page; any
    other failure, transport errors included, raises `ApiError`.
    """

    def __init__(self, settings: ClientSettings | None = None, *, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings or ClientSettings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.request_timeout,
        )
        if self.settings.dev_actor:
            self._client.headers[self.settings.dev_actor_header] = self.settings.dev_actor

    async def __aenter__(self) -> VenturaApi:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, *, action: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log.warning("api.transport_error", method=method, path=path, error=str(e))
            raise ApiError(0, f"Failed to {action}: {e}") from e

        if response.status_code == 401:
            log.info("api.unauthorized", method=method, path=path, redirect_to=self.settings.login_path)
            raise Unauthorized(redirect_to=self.settings.login_path)
        if response.is_error:
            message = _error_message(response, action)
            log.warning("api.request_failed", method=method, path=path, status_code=response.status_code, error=message)
            raise ApiError(response.status_code, message)
        return response

    def _parse(self, response: httpx.Response, *, action: str, parse: Callable[[Any], T]) -> T:
        """Decode a successful response; a body that does not fit is an `ApiError` too."""
        try:
            return parse(response.json())
        except (ValueError, TypeError, PydanticValidationError) as e:
            log.warning(
                "api.invalid_response",
                path=response.request.url.path,
                status_code=response.status_code,
                error=str(e),
            )
            raise ApiError(response.status_code, f"Failed to {action}: invalid response") from e

    async def list_deals(self, *, archived: bool) -> list[Deal]:
        response = await self._request(
            "GET",
            "/api/deals",
            action="fetch deals",
            params={"archived": "true" if archived else "false"},
        )
        return self._parse(
            response,
            action="fetch deals",
            parse=lambda body: [Deal.model_validate(item) for item in body],
        )

    async def update_deal_stage(self, deal_id: int, stage: DealStage) -> Deal:
        response = await self._request(
            "PATCH",
            f"/api/deals/{deal_id}/stage",
            action="update deal stage",
            json=StageUpdate(stage=stage).model_dump(mode="json", by_alias=True),
        )
        return self._parse(response, action="update deal stage", parse=Deal.model_validate)

    async def create_deal(self, data: NewDeal) -> Deal:
        response = await self._request(
            "POST",
            "/api/deals",
            action="create deal",
            json=data.model_dump(mode="json", by_alias=True),
        )
        return self._parse(response, action="create deal", parse=Deal.model_validate)

    async def close_deal(self, deal_id: int, data: CloseDealData) -> CloseResult:
        response = await self._request(
            "POST",
            f"/api/deals/{deal_id}/close",
            action="close deal",
            json=data.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._parse(response, action="close deal", parse=CloseResult.model_validate)

    async def lose_deal(self, deal_id: int, reason: LossReason) -> None:
        await self._request(
            "POST",
            f"/api/deals/{deal_id}/lose",
            action="mark deal as lost",
            json=LoseDealData(reason=reason).model_dump(mode="json", by_alias=True),
        )

    async def search(self, query: str) -> SearchResponse:
        response = await self._request("GET", "/api/search", action="search", params={"q": query})
        return self._parse(response, action="search", parse=SearchResponse.model_validate)
