from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from ventura.shared.enums import Env

DEFAULT_FRONTEND_ORIGIN = "http://localhost:3000"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    env: Env = Env.dev
    log_level: str = "INFO"

    database_url: str = "sqlite+pysqlite:///./ventura.db"

    # Dev-only actor header
    dev_actor_header: str = "X-DEV-ACTOR"

    # Production frontend URL(s), comma-separated. The local dev origin is always allowed.
    frontend_url: str | None = None

    @property
    def cors_origins(self) -> list[str]:
        origins = [DEFAULT_FRONTEND_ORIGIN]
        if self.frontend_url:
            for origin in self.frontend_url.split(","):
                origin = origin.strip()
                if origin and origin not in origins:
                    origins.append(origin)
        return origins


settings = Settings()
