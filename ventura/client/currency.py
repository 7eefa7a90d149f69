from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError, field_validator

from ventura.shared.utils import to_decimal

log = structlog.get_logger()

BASE_CURRENCY = "USD"

# code -> (symbol, name)
SUPPORTED_CURRENCIES: dict[str, tuple[str, str]] = {
    "USD": ("$", "US Dollar"),
    "INR": ("₹", "Indian Rupee"),
    "EUR": ("€", "Euro"),
    "GBP": ("£", "British Pound"),
    "AED": ("د.إ", "UAE Dirham"),
    "JPY": ("¥", "Japanese Yen"),
    "CAD": ("C$", "Canadian Dollar"),
    "AUD": ("A$", "Australian Dollar"),
    "CHF": ("Fr", "Swiss Franc"),
    "SGD": ("S$", "Singapore Dollar"),
    "CNY": ("¥", "Chinese Yuan"),
}

# Used when the rate provider cannot be reached. Units per USD.
FALLBACK_RATES: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "INR": Decimal("83.0"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "AED": Decimal("3.67"),
    "JPY": Decimal("151.0"),
    "CAD": Decimal("1.36"),
    "AUD": Decimal("1.55"),
    "CHF": Decimal("0.88"),
    "SGD": Decimal("1.34"),
    "CNY": Decimal("7.24"),
}

_COMPACT_UNITS = ((Decimal("1e12"), "T"), (Decimal("1e9"), "B"), (Decimal("1e6"), "M"), (Decimal("1e3"), "K"))


def format_compact(value: Any, symbol: str = "$") -> str:
    """$2M, $1.5M, $750K. Values that are not numbers are returned as given."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return str(value)
    if not amount.is_finite():
        return str(value)

    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    for threshold, suffix in _COMPACT_UNITS:
        if amount >= threshold:
            scaled = (amount / threshold).quantize(Decimal("0.1"))
            text = f"{scaled:f}".rstrip("0").rstrip(".")
            return f"{sign}{symbol}{text}{suffix}"
    return f"{sign}{symbol}{amount.quantize(Decimal('1')):f}"


class Preferences(BaseModel):
    """User display preferences with an explicit load/save contract."""

    currency: str = BASE_CURRENCY

    @field_validator("currency")
    @classmethod
    def _supported(cls, v: str) -> str:
        code = v.upper()
        if code not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {v}")
        return code

    @classmethod
    def load(cls, path: Path) -> Preferences:
        if not path.exists():
            return cls()
        try:
            return cls.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (ValueError, ValidationError) as e:
            log.warning("preferences.load_failed", path=str(path), error=str(e))
            return cls()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(), encoding="utf-8")


class CurrencyService:
    """Converts and formats USD amounts into the user's preferred currency.

    Built once at start-up and handed to whatever renders amounts.
    """

    def __init__(
        self,
        preferences: Preferences,
        *,
        preferences_path: Path,
        rates_url: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.preferences = preferences
        self.preferences_path = preferences_path
        self.rates_url = rates_url
        self._client = client
        self.rates: dict[str, Decimal] = {BASE_CURRENCY: Decimal("1")}

    @property
    def currency(self) -> str:
        return self.preferences.currency

    @property
    def symbol(self) -> str:
        return SUPPORTED_CURRENCIES[self.currency][0]

    def set_currency(self, code: str) -> None:
        self.preferences = Preferences(currency=code)
        self.preferences.save(self.preferences_path)

    async def load_rates(self) -> dict[str, Decimal]:
        try:
            if self._client is not None:
                response = await self._client.get(self.rates_url)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.rates_url)
            response.raise_for_status()
            raw = response.json()["rates"]
            self.rates = {str(code): Decimal(str(rate)) for code, rate in raw.items()}
        except (httpx.HTTPError, ValueError, KeyError, TypeError, InvalidOperation) as e:
            log.warning("currency.rates_unavailable", url=self.rates_url, error=str(e))
            self.rates = dict(FALLBACK_RATES)
        return self.rates

    def convert(self, value: Any, from_currency: str = BASE_CURRENCY) -> Decimal:
        amount = to_decimal(value)
        from_rate = self.rates.get(from_currency.upper())
        to_rate = self.rates.get(self.currency)
        if not from_rate or to_rate is None:
            return amount
        return amount / from_rate * to_rate

    def format(self, value: Any, from_currency: str = BASE_CURRENCY) -> str:
        converted = self.convert(value, from_currency).quantize(Decimal("1"))
        return f"{self.symbol}{converted:,f}"

    def format_compact(self, value: Any, from_currency: str = BASE_CURRENCY) -> str:
        return format_compact(self.convert(value, from_currency), self.symbol)
