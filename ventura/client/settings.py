from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VENTURA_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_base_url: str = "http://localhost:8080"
    login_path: str = "/login"
    log_level: str = "INFO"

    # None keeps the transport default: wait indefinitely.
    request_timeout: float | None = None

    # Dev-only: JSON actor payload forwarded on every call.
    dev_actor_header: str = "X-DEV-ACTOR"
    dev_actor: str | None = None

    search_debounce_ms: int = 150

    exchange_rate_url: str = "https://api.exchangerate-api.com/v4/latest/USD"
    preferences_path: Path = Path.home() / ".ventura" / "preferences.json"
