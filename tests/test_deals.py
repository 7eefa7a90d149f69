from __future__ import annotations

import json

from fastapi.testclient import TestClient


def _create(client: TestClient, payload: dict, **overrides) -> dict:
    r = client.post("/api/deals", json={**payload, **overrides})
    assert r.status_code == 201, r.text
    return r.json()


def test_create_deal_forces_incoming_and_totals_scores(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload, stage="term_sheet")

    assert deal["stage"] == "incoming"
    assert deal["totalScore"] == 26
    assert deal["companyName"] == "TechFlow AI"
    assert deal["archivedAt"] is None
    assert deal["convertedCompanyId"] is None


def test_create_deal_validates_scores_and_amounts(client, seeded_org, deal_payload):
    r = client.post("/api/deals", json={**deal_payload, "teamScore": 11})
    assert r.status_code == 422

    r = client.post("/api/deals", json={**deal_payload, "requestedAmount": "0"})
    assert r.status_code == 422

    r = client.post("/api/deals", json={**deal_payload, "founderEmail": "not-an-email"})
    assert r.status_code == 422


def test_deals_require_actor(client, seeded_org):
    r = client.get("/api/deals", headers={"X-DEV-ACTOR": ""})
    assert r.status_code == 401

    r = client.get("/api/deals", headers={"X-DEV-ACTOR": "{not json"})
    assert r.status_code == 401


def test_deals_are_scoped_to_organization(client, seeded_org, deal_payload, db_session):
    from ventura.core.db.models import Organization

    _create(client, deal_payload)

    other = Organization(name="Other Ventures")
    db_session.add(other)
    db_session.commit()

    r = client.get(
        "/api/deals",
        headers={"X-DEV-ACTOR": json.dumps({"actor_id": "other", "organization_id": other.id})},
    )
    assert r.status_code == 200
    assert r.json() == []


def test_patch_stage_moves_between_active_stages(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)

    # skipping stages is allowed
    r = client.patch(f"/api/deals/{deal['id']}/stage", json={"stage": "term_sheet"})
    assert r.status_code == 200
    assert r.json()["stage"] == "term_sheet"

    r = client.get("/api/deals", params={"stage": "term_sheet"})
    assert [d["id"] for d in r.json()] == [deal["id"]]


def test_patch_stage_rejects_terminal_stages(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)

    for stage in ("closed", "lost"):
        r = client.patch(f"/api/deals/{deal['id']}/stage", json={"stage": stage})
        assert r.status_code == 400

    r = client.patch(f"/api/deals/{deal['id']}/stage", json={"stage": "negotiation"})
    assert r.status_code == 422


def test_patch_stage_unknown_deal(client, seeded_org):
    r = client.patch("/api/deals/9999/stage", json={"stage": "screening"})
    assert r.status_code == 404


def test_close_with_conversion_creates_company(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)

    r = client.post(
        f"/api/deals/{deal['id']}/close",
        json={
            "convertToPortfolio": True,
            "cashRemaining": "1200000",
            "monthlyBurnRate": "100000",
            "monthlyRevenue": "25000",
        },
    )
    assert r.status_code == 200
    company_id = r.json()["companyId"]
    assert company_id is not None

    archived = client.get("/api/deals", params={"archived": "true"}).json()
    assert len(archived) == 1
    assert archived[0]["stage"] == "closed"
    assert archived[0]["convertedCompanyId"] == company_id
    assert archived[0]["archivedAt"] is not None

    assert client.get("/api/deals", params={"archived": "false"}).json() == []

    company = client.get(f"/api/portfolio/companies/{company_id}").json()
    assert company["name"] == "TechFlow AI"
    assert company["runwayMonths"] == 12
    assert company["healthStatus"] == "green"


def test_close_without_conversion(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)

    r = client.post(f"/api/deals/{deal['id']}/close", json={"convertToPortfolio": False})
    assert r.status_code == 200
    assert r.json()["companyId"] is None

    archived = client.get("/api/deals", params={"archived": "true"}).json()
    assert archived[0]["convertedCompanyId"] is None
    assert client.get("/api/portfolio/companies").json() == []


def test_archived_deal_cannot_move_again(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)
    client.post(f"/api/deals/{deal['id']}/close", json={"convertToPortfolio": False})

    r = client.patch(f"/api/deals/{deal['id']}/stage", json={"stage": "screening"})
    assert r.status_code == 409

    r = client.post(f"/api/deals/{deal['id']}/lose", json={"reason": "other"})
    assert r.status_code == 409


def test_lose_deal_records_reason(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)

    r = client.post(f"/api/deals/{deal['id']}/lose", json={"reason": "founder_declined"})
    assert r.status_code == 200

    archived = client.get("/api/deals", params={"archived": "true"}).json()
    assert archived[0]["stage"] == "lost"
    assert archived[0]["lossReason"] == "founder_declined"


def test_lose_deal_rejects_free_text_reason(client, seeded_org, deal_payload):
    deal = _create(client, deal_payload)

    r = client.post(f"/api/deals/{deal['id']}/lose", json={"reason": "they were rude"})
    assert r.status_code == 422

    r = client.post(f"/api/deals/{deal['id']}/lose", json={})
    assert r.status_code == 422


def test_archived_list_is_newest_first(client, seeded_org, deal_payload):
    first = _create(client, deal_payload, companyName="First")
    second = _create(client, deal_payload, companyName="Second")

    client.post(f"/api/deals/{first['id']}/lose", json={"reason": "passed"})
    client.post(f"/api/deals/{second['id']}/close", json={"convertToPortfolio": False})

    archived = client.get("/api/deals", params={"archived": "true"}).json()
    assert [d["companyName"] for d in archived] == ["Second", "First"]


def test_dev_seed_creates_sample_pipeline(client):
    r = client.post("/admin/dev/seed", json={"organization_name": "Seeded Org", "actor_id": "dev-user"})
    assert r.status_code == 200
    body = r.json()
    assert body["deal_count"] == 7

    r = client.get("/api/deals", headers={body["dev_actor_header_name"]: body["dev_actor_header_value"]})
    assert r.status_code == 200
    assert len(r.json()) == 7
    assert {d["stage"] for d in r.json()} == {"incoming", "screening", "due_diligence", "term_sheet"}


def test_dev_seed_hidden_outside_dev(client, monkeypatch):
    from ventura.core.config import settings
    from ventura.shared.enums import Env

    monkeypatch.setattr(settings, "env", Env.prod)
    r = client.post("/admin/dev/seed", json={})
    assert r.status_code == 404
