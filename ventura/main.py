from __future__ import annotations

import json

from fastapi import APIRouter, Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ventura.core.config import settings
from ventura.core.db.models import Organization
from ventura.core.db.session import get_db
from ventura.core.logging import configure_logging
from ventura.core.middleware.request_id import RequestIdMiddleware
from ventura.modules.deals.routes import router as deals_router
from ventura.modules.deals.seed import seed_sample_deals
from ventura.modules.founders.routes import router as founders_router
from ventura.modules.monthly_updates.routes import router as monthly_updates_router
from ventura.modules.portfolio.routes import router as portfolio_router
from ventura.modules.search.routes import router as search_router
from ventura.shared.enums import Env


class DevSeedRequest(BaseModel):
    organization_name: str = Field(default="Ventura Capital", min_length=2, max_length=200)
    actor_id: str = Field(default="dev-user", min_length=1, max_length=128)
    with_sample_deals: bool = True


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Ventura - Portfolio & Deal Flow API", version="0.1.0")
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization", settings.dev_actor_header],
        expose_headers=["Content-Length", "X-Request-ID"],
    )

    @app.get("/health", tags=["admin"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/admin/dev/seed", tags=["admin"])
    def dev_seed(payload: DevSeedRequest, db: Session = Depends(get_db)) -> dict:
        if settings.env != Env.dev:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        org = Organization(name=payload.organization_name)
        db.add(org)
        db.flush()

        deals = seed_sample_deals(db, organization_id=org.id) if payload.with_sample_deals else []
        db.commit()

        return {
            "organization_id": org.id,
            "deal_count": len(deals),
            "dev_actor_header_name": settings.dev_actor_header,
            "dev_actor_header_value": json.dumps({"actor_id": payload.actor_id, "organization_id": org.id}),
        }

    api_router = APIRouter(prefix="/api")
    api_router.add_api_route("/health", health, methods=["GET"], tags=["admin"])
    api_router.include_router(deals_router)
    api_router.include_router(portfolio_router)
    api_router.include_router(founders_router)
    api_router.include_router(monthly_updates_router)
    api_router.include_router(search_router)
    app.include_router(api_router)

    return app


app = create_app()
