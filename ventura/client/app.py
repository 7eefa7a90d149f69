from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from ventura.client.api import VenturaApi
from ventura.client.currency import CurrencyService, Preferences
from ventura.client.pipeline.page import DealsPage
from ventura.client.search import LatestOnlySearch
from ventura.client.settings import ClientSettings
from ventura.core.logging import configure_logging

log = structlog.get_logger()


@dataclass
class ClientApp:
    settings: ClientSettings
    api: VenturaApi
    currency: CurrencyService
    search: LatestOnlySearch
    deals: DealsPage

    async def start(self) -> bool:
        """Fetch exchange rates, then the pipeline; rates fall back to the built-in table."""
        await self.currency.load_rates()
        return await self.deals.load()

    async def aclose(self) -> None:
        self.search.cancel()
        await self.api.aclose()


def build_client(
    settings: ClientSettings | None = None,
    *,
    http: httpx.AsyncClient | None = None,
    rates_client: httpx.AsyncClient | None = None,
) -> ClientApp:
    """Wire the pipeline client from `VENTURA_*` settings.

    The rate provider gets its own client so the dev actor header and
    session cookies never leave for a third-party host.
    """
    settings = settings or ClientSettings()
    configure_logging(settings.log_level, component="client")

    api = VenturaApi(settings, client=http)
    currency = CurrencyService(
        Preferences.load(settings.preferences_path),
        preferences_path=settings.preferences_path,
        rates_url=settings.exchange_rate_url,
        client=rates_client,
    )
    search = LatestOnlySearch(api.search, debounce=settings.search_debounce_ms / 1000)
    deals = DealsPage(api, currency=currency)

    log.info(
        "client.built",
        api_base_url=settings.api_base_url,
        currency=currency.currency,
        search_debounce_ms=settings.search_debounce_ms,
    )
    return ClientApp(settings=settings, api=api, currency=currency, search=search, deals=deals)
