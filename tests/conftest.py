from __future__ import annotations

import json
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ventura.core.config import settings
from ventura.core.db.base import Base
from ventura.core.db.models import Organization
from ventura.core.db.session import get_db, import_model_modules
from ventura.main import create_app
from ventura.shared.enums import Env

# Ensure model modules are imported so Base.metadata is complete.
import_model_modules()


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False, class_=Session)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def app(db_session: Session):
    settings.env = Env.dev
    app = create_app()

    def _override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return app


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def seeded_org(client: TestClient, db_session: Session) -> dict:
    org = Organization(name="Seeded Capital")
    db_session.add(org)
    db_session.commit()

    actor_header = json.dumps({"actor_id": "seed-user", "organization_id": org.id})
    # Default client header so tests can call routes without passing headers.
    client.headers.update({"X-DEV-ACTOR": actor_header})
    return {"organization_id": org.id, "actor_header": actor_header}


@pytest.fixture()
def deal_payload() -> dict:
    return {
        "companyName": "TechFlow AI",
        "sector": "AI/ML",
        "requestedAmount": "2000000",
        "valuation": "10000000",
        "roundStage": "Seed",
        "teamScore": 7,
        "productScore": 6,
        "marketScore": 8,
        "tractionScore": 5,
        "founderName": "Sarah Chen",
        "founderEmail": "sarah@techflow.ai",
        "notes": "Warm intro",
    }


@pytest.fixture()
def company_payload() -> dict:
    return {
        "name": "Nimbus Labs",
        "sector": "SaaS",
        "amountInvested": "1000000",
        "currentValuation": "8000000",
        "roundStage": "Seed",
        "cashRemaining": "900000",
        "monthlyBurnRate": "100000",
        "monthlyRevenue": "20000",
    }


@pytest.fixture()
def company(client: TestClient, seeded_org: dict, company_payload: dict) -> dict:
    r = client.post("/api/portfolio/companies", json=company_payload)
    assert r.status_code == 201, r.text
    return r.json()
