from __future__ import annotations

import json

from ventura.core.db.models import Organization


def _founder(client, company_id: int, **overrides) -> dict:
    payload = {
        "name": "Maya Patel",
        "email": "maya@nimbus.dev",
        "role": "CEO",
        "linkedinUrl": "https://linkedin.com/in/mayapatel",
        **overrides,
    }
    r = client.post(f"/api/portfolio/companies/{company_id}/founders", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_list_founders_for_company(client, company):
    founder = _founder(client, company["id"])
    assert founder["companyId"] == company["id"]
    assert founder["role"] == "CEO"

    listed = client.get(f"/api/portfolio/companies/{company['id']}/founders").json()
    assert [f["id"] for f in listed] == [founder["id"]]
    assert [f["id"] for f in client.get("/api/founders").json()] == [founder["id"]]
    assert client.get(f"/api/founders/{founder['id']}").json()["email"] == "maya@nimbus.dev"


def test_founder_for_unknown_company(client, seeded_org):
    r = client.post("/api/portfolio/companies/999/founders", json={"name": "X", "email": "x@example.com"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Company not found"
    assert client.get("/api/portfolio/companies/999/founders").status_code == 404


def test_duplicate_email_conflicts(client, company):
    _founder(client, company["id"])
    r = client.post(
        f"/api/portfolio/companies/{company['id']}/founders",
        json={"name": "Other", "email": "MAYA@nimbus.dev"},
    )
    assert r.status_code == 409


def test_update_founder(client, company):
    founder = _founder(client, company["id"])
    other = _founder(client, company["id"], name="Leo Park", email="leo@nimbus.dev")

    r = client.put(f"/api/founders/{founder['id']}", json={"role": "CTO"})
    assert r.status_code == 200
    assert r.json()["role"] == "CTO"
    assert r.json()["name"] == "Maya Patel"

    r = client.put(f"/api/founders/{other['id']}", json={"email": "maya@nimbus.dev"})
    assert r.status_code == 409

    # Keeping one's own email is not a conflict.
    r = client.put(f"/api/founders/{founder['id']}", json={"email": "maya@nimbus.dev"})
    assert r.status_code == 200


def test_delete_founder(client, company):
    founder = _founder(client, company["id"])
    r = client.delete(f"/api/founders/{founder['id']}")
    assert r.status_code == 200
    r = client.get(f"/api/founders/{founder['id']}")
    assert r.status_code == 404
    assert r.json()["detail"] == "Founder not found"
    assert client.delete(f"/api/founders/{founder['id']}").status_code == 404


def test_founders_are_organization_scoped(client, db_session, company):
    founder = _founder(client, company["id"])

    other = Organization(name="Other Capital")
    db_session.add(other)
    db_session.commit()
    header = json.dumps({"actor_id": "someone", "organization_id": other.id})

    assert client.get(f"/api/founders/{founder['id']}", headers={"X-DEV-ACTOR": header}).status_code == 404
    assert client.get("/api/founders", headers={"X-DEV-ACTOR": header}).json() == []
