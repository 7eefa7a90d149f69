from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest
from pydantic import ValidationError

from ventura.client.currency import FALLBACK_RATES, CurrencyService, Preferences, format_compact

RATES_URL = "https://rates.test/latest/USD"


def _service(tmp_path, handler, currency="USD") -> CurrencyService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CurrencyService(
        Preferences(currency=currency),
        preferences_path=tmp_path / "prefs.json",
        rates_url=RATES_URL,
        client=client,
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        (2_000_000, "$2M"),
        (1_500_000, "$1.5M"),
        (750_000, "$750K"),
        (3_200_000_000, "$3.2B"),
        (500, "$500"),
        ("abc", "abc"),
    ],
)
def test_format_compact(value, expected):
    assert format_compact(value) == expected


def test_preferences_default_when_missing(tmp_path):
    assert Preferences.load(tmp_path / "missing.json").currency == "USD"


def test_preferences_save_then_load(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    Preferences(currency="inr").save(path)

    assert json.loads(path.read_text()) == {"currency": "INR"}
    assert Preferences.load(path).currency == "INR"


def test_preferences_ignore_corrupt_file(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    assert Preferences.load(path).currency == "USD"

    path.write_text(json.dumps({"currency": "XYZ"}))
    assert Preferences.load(path).currency == "USD"


def test_unsupported_currency_rejected():
    with pytest.raises(ValidationError):
        Preferences(currency="XYZ")


@pytest.mark.asyncio
async def test_load_rates_and_convert(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == RATES_URL
        return httpx.Response(200, json={"base": "USD", "rates": {"USD": 1, "INR": 83.5, "EUR": 0.9}})

    service = _service(tmp_path, handler, currency="INR")
    rates = await service.load_rates()

    assert rates["INR"] == Decimal("83.5")
    assert service.convert("2000000") == Decimal("167000000.0")
    assert service.format_compact(2_000_000) == "₹167M"
    assert service.format(1000) == "₹83,500"


@pytest.mark.asyncio
async def test_load_rates_falls_back_on_failure(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    service = _service(tmp_path, handler, currency="EUR")
    rates = await service.load_rates()

    assert rates == FALLBACK_RATES
    assert service.format_compact(1_000_000) == "€920K"


def test_set_currency_persists(tmp_path):
    service = _service(tmp_path, lambda request: httpx.Response(200, json={"rates": {}}))

    service.set_currency("gbp")

    assert service.currency == "GBP"
    assert service.symbol == "£"
    assert Preferences.load(tmp_path / "prefs.json").currency == "GBP"


def test_convert_without_rates_returns_input(tmp_path):
    service = _service(tmp_path, lambda request: httpx.Response(500), currency="JPY")
    assert service.convert("12.5") == Decimal("12.5")
