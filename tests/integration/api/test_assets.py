"""Integration tests for platform asset endpoints."""

import pytest
from httpx import AsyncClient

from prompt_universe.core.documents.sql import SqlDocumentStore


pytestmark = pytest.mark.integration

CONNECTION = {
    "modelName": "gemini-1.5-flash",
    "provider": "Google",
    "apiKey": "secret-key",
    "priority": 5,
}


async def test_connection_api_key_is_never_returned(
    client: AsyncClient, store: SqlDocumentStore
):
    created = (await client.post("/api/v1/assets/connections", json=CONNECTION)).json()
    assert created["success"] is True

    listed = (await client.get("/api/v1/assets/connections")).json()

    assert len(listed) == 1
    assert "apiKey" not in listed[0]
    assert listed[0]["hasApiKey"] is True
    assert listed[0]["provider"] == "google"
    stored = await store.get("llm_connections", created["id"])
    assert stored.data["apiKey"] == "secret-key"


async def test_update_keeps_api_key(client: AsyncClient, store: SqlDocumentStore):
    created = (await client.post("/api/v1/assets/connections", json=CONNECTION)).json()

    response = await client.post(
        "/api/v1/assets/connections",
        json={"id": created["id"], "modelName": "gemini-1.5-pro", "provider": "google"},
    )

    assert response.json()["success"] is True
    stored = await store.get("llm_connections", created["id"])
    assert stored.data["modelName"] == "gemini-1.5-pro"
    assert stored.data["apiKey"] == "secret-key"


async def test_new_connection_needs_api_key(client: AsyncClient):
    payload = {k: v for k, v in CONNECTION.items() if k != "apiKey"}

    response = await client.post("/api/v1/assets/connections", json=payload)

    assert response.status_code == 422


async def test_unknown_provider_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/v1/assets/connections", json={**CONNECTION, "provider": "acme-ai"}
    )

    assert response.status_code == 422


async def test_exclusive_connection_needs_tenant(client: AsyncClient):
    response = await client.post(
        "/api/v1/assets/connections", json={**CONNECTION, "scope": "专属"}
    )

    assert response.status_code == 422


async def test_platform_assets_overview(client: AsyncClient):
    await client.post("/api/v1/assets/connections", json=CONNECTION)
    await client.post(
        "/api/v1/assets/tokens",
        json={"key": "tok-1", "assignedTo": "Acme", "usageLimit": 1000},
    )
    await client.post(
        "/api/v1/assets/software", json={"name": "IDE", "type": "license"}
    )

    assets = (await client.get("/api/v1/assets")).json()

    assert len(assets["connections"]) == 1
    assert "apiKey" not in assets["connections"][0]
    assert assets["tokenAllocations"][0]["usageLimit"] == 1000
    assert assets["tokenAllocations"][0]["used"] == 0
    assert assets["softwareAssets"][0]["name"] == "IDE"


async def test_delete_token_allocation(client: AsyncClient):
    created = (
        await client.post(
            "/api/v1/assets/tokens",
            json={"key": "tok-1", "assignedTo": "Acme", "usageLimit": 10},
        )
    ).json()

    response = await client.delete(f"/api/v1/assets/tokens/{created['id']}")

    assert response.json()["success"] is True
    assert (await client.get("/api/v1/assets")).json()["tokenAllocations"] == []
