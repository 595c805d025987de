"""Test company API routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "logoUrl": "http://new.img",
    "description": "DescNew",
    "numEmployees": 10,
}


@pytest.mark.asyncio
async def test_create_company_as_admin(client: AsyncClient, seeded, admin_headers):
    resp = await client.post("/companies", json=NEW_COMPANY, headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json() == {"company": NEW_COMPANY}


@pytest.mark.asyncio
async def test_create_company_unauthorized(client: AsyncClient, seeded, u1_headers):
    resp = await client.post("/companies", json=NEW_COMPANY, headers=u1_headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_duplicate_company(client: AsyncClient, seeded, admin_headers):
    resp = await client.post(
        "/companies", json={**NEW_COMPANY, "handle": "c1"}, headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Duplicate company: c1"


@pytest.mark.asyncio
async def test_list_companies(client: AsyncClient, seeded):
    resp = await client.get("/companies")
    assert resp.status_code == 200
    assert [c["handle"] for c in resp.json()["companies"]] == ["c1", "c2", "c3"]


@pytest.mark.asyncio
async def test_list_companies_filtered(client: AsyncClient, seeded):
    resp = await client.get("/companies", params={"nameLike": "c", "minEmployees": 2})
    assert [c["handle"] for c in resp.json()["companies"]] == ["c2", "c3"]


@pytest.mark.asyncio
async def test_list_companies_invalid_range(client: AsyncClient, seeded):
    resp = await client.get("/companies", params={"minEmployees": 50, "maxEmployees": 10})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "minEmployees cannot be greater than maxEmployees"


@pytest.mark.asyncio
async def test_list_companies_ignores_unknown_filters(client: AsyncClient, seeded):
    resp = await client.get("/companies", params={"handle": "c1"})
    assert resp.status_code == 200
    assert len(resp.json()["companies"]) == 3


@pytest.mark.asyncio
async def test_get_company(client: AsyncClient, seeded):
    resp = await client.get("/companies/c1")
    assert resp.status_code == 200
    company = resp.json()["company"]
    assert company["handle"] == "c1"
    assert [j["title"] for j in company["jobs"]] == ["j1", "j2"]


@pytest.mark.asyncio
async def test_get_missing_company(client: AsyncClient, seeded):
    resp = await client.get("/companies/nope")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_company(client: AsyncClient, seeded, admin_headers):
    resp = await client.patch("/companies/c1", json={"name": "C1-new"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["company"]["name"] == "C1-new"
    assert resp.json()["company"]["numEmployees"] == 1


@pytest.mark.asyncio
async def test_update_company_handle_rejected(client: AsyncClient, seeded, admin_headers):
    resp = await client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_company_empty_body(client: AsyncClient, seeded, admin_headers):
    resp = await client.patch("/companies/c1", json={}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "No data", "status": 400}}


@pytest.mark.asyncio
async def test_update_company_unauthorized(client: AsyncClient, seeded, u1_headers):
    resp = await client.patch("/companies/c1", json={"name": "x"}, headers=u1_headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_delete_company(client: AsyncClient, seeded, admin_headers):
    resp = await client.delete("/companies/c1", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"deleted": "c1"}

    resp = await client.get(f"/jobs/{seeded['jobs']['j1']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_company_anon(client: AsyncClient, seeded):
    resp = await client.delete("/companies/c1")
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "description"])
async def test_update_company_null_required_field(client: AsyncClient, seeded, admin_headers, field):
    resp = await client.patch("/companies/c1", json={field: None}, headers=admin_headers)
    assert resp.status_code == 400
    assert "Duplicate" not in str(resp.json()["error"]["message"])


@pytest.mark.asyncio
async def test_update_company_clears_optional_fields(client: AsyncClient, seeded, admin_headers):
    resp = await client.patch(
        "/companies/c1", json={"logoUrl": None, "numEmployees": None}, headers=admin_headers
    )
    assert resp.status_code == 200
    company = resp.json()["company"]
    assert company["logoUrl"] is None
    assert company["numEmployees"] is None


@pytest.mark.asyncio
async def test_update_company_duplicate_name(client: AsyncClient, seeded, admin_headers):
    resp = await client.patch("/companies/c1", json={"name": "C2"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Duplicate company name: C2"
