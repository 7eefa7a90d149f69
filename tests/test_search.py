from __future__ import annotations

from ventura.modules.search.service import MAX_RESULTS_PER_GROUP, STATIC_PAGES


def test_empty_query_returns_static_pages(client, seeded_org):
    r = client.get("/api/search", params={"q": ""})
    assert r.status_code == 200
    body = r.json()
    assert body["companies"] == []
    assert body["deals"] == []
    assert len(body["pages"]) == len(STATIC_PAGES)


def test_search_matches_deals_case_insensitively(client, seeded_org, deal_payload):
    client.post("/api/deals", json=deal_payload)
    client.post("/api/deals", json={**deal_payload, "companyName": "GreenEnergy", "sector": "CleanTech"})

    body = client.get("/api/search", params={"q": "techFLOW"}).json()
    assert [d["name"] for d in body["deals"]] == ["TechFlow AI"]
    assert body["deals"][0]["type"] == "deal"
    assert body["deals"][0]["url"] == "/deals"

    body = client.get("/api/search", params={"q": "cleantech"}).json()
    assert [d["name"] for d in body["deals"]] == ["GreenEnergy"]


def test_search_matches_pages(client, seeded_org):
    body = client.get("/api/search", params={"q": "portfolio"}).json()
    assert [p["name"] for p in body["pages"]] == ["Portfolio"]


def test_search_limits_each_group(client, seeded_org, deal_payload):
    for i in range(MAX_RESULTS_PER_GROUP + 2):
        client.post("/api/deals", json={**deal_payload, "companyName": f"Acme {i}"})

    body = client.get("/api/search", params={"q": "acme"}).json()
    assert len(body["deals"]) == MAX_RESULTS_PER_GROUP


def test_search_escapes_like_wildcards(client, seeded_org, deal_payload):
    client.post("/api/deals", json=deal_payload)
    body = client.get("/api/search", params={"q": "%"}).json()
    assert body["deals"] == []
