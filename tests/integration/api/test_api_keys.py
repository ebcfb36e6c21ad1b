"""Integration tests for tenant API key endpoints."""

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration

BASE = "/api/v1/tenants/acme/api-keys"


async def test_created_key_is_shown_once(client: AsyncClient):
    response = await client.post(BASE, json={"name": "CI"})

    assert response.status_code == 201
    created = response.json()
    assert created["success"] is True
    secret = created["key"]["key"]
    assert secret.startswith("sk-acme-")

    listed = (await client.get(BASE)).json()
    assert len(listed) == 1
    assert listed[0]["key"] != secret
    assert listed[0]["key"].endswith(secret[-4:])
    assert "****" in listed[0]["key"]


async def test_revoke_key(client: AsyncClient):
    created = (await client.post(BASE, json={"name": "CI"})).json()

    response = await client.post(f"{BASE}/{created['key']['id']}/revoke")

    assert response.json()["success"] is True
    listed = (await client.get(BASE)).json()
    assert listed[0]["status"] == "已撤销"


async def test_revoke_missing_key_fails(client: AsyncClient):
    response = await client.post(f"{BASE}/missing/revoke")

    assert response.status_code == 200
    assert response.json()["success"] is False


async def test_keys_are_scoped_to_tenant(client: AsyncClient):
    await client.post(BASE, json={"name": "CI"})

    assert (await client.get("/api/v1/tenants/other/api-keys")).json() == []
