"""Integration tests for tenant endpoints."""

import pytest
from httpx import AsyncClient

from prompt_universe.core.documents.sql import SqlDocumentStore


pytestmark = pytest.mark.integration

ACME = {"companyName": "Acme", "adminEmail": "a@acme.com", "status": "待审核"}


class TestSaveTenant:
    """Tests for POST /api/v1/tenants."""

    async def test_create_then_list(self, client: AsyncClient):
        response = await client.post("/api/v1/tenants", json=ACME)

        assert response.status_code == 200
        result = response.json()
        assert result["success"] is True
        assert result["id"]

        tenants = (await client.get("/api/v1/tenants")).json()
        saved = next(t for t in tenants if t["id"] == result["id"])
        assert saved["status"] == "待审核"
        assert saved["companyName"] == "Acme"
        assert saved["registeredDate"] is not None

    async def test_update_merges(self, client: AsyncClient):
        created = (await client.post("/api/v1/tenants", json=ACME)).json()

        response = await client.post(
            "/api/v1/tenants",
            json={"id": created["id"], "companyName": "Acme Corp", "adminEmail": "a@acme.com"},
        )

        assert response.json()["message"] == "租户已更新。"
        tenant = (await client.get(f"/api/v1/tenants/{created['id']}")).json()
        assert tenant["companyName"] == "Acme Corp"
        assert tenant["status"] == "待审核"

    async def test_invalid_email_is_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tenants", json={**ACME, "adminEmail": "not-an-email"}
        )

        assert response.status_code == 422
        fields = [error["field"] for error in response.json()["errors"]]
        assert "adminEmail" in fields


class TestReadTenants:
    """Tests for tenant read endpoints."""

    async def test_missing_tenant_is_404(self, client: AsyncClient):
        response = await client.get("/api/v1/tenants/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "租户不存在。"

    async def test_malformed_tenant_is_409(
        self, client: AsyncClient, store: SqlDocumentStore
    ):
        await store.set("tenants", "bad", {"companyName": "Broken"})

        response = await client.get("/api/v1/tenants/bad")

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/invalid_document")

    async def test_delete_missing_tenant_succeeds(self, client: AsyncClient):
        response = await client.delete("/api/v1/tenants/missing")

        assert response.json()["success"] is True

    async def test_tenants_and_users(self, client: AsyncClient, store: SqlDocumentStore):
        await store.set("tenants", "acme", ACME)
        await store.set(
            "users", "u1", {"email": "u@acme.com", "role": "租户管理员", "tenantId": "acme"}
        )

        data = (await client.get("/api/v1/tenants/with-users")).json()

        assert [t["id"] for t in data["tenants"]] == ["acme"]
        assert [u["id"] for u in data["users"]] == ["u1"]

    async def test_dashboard(self, client: AsyncClient, store: SqlDocumentStore):
        await store.set("tenants", "acme", ACME)
        await store.set("users", "member", {"email": "m@acme.com", "role": "技术工程师", "tenantId": "acme"})
        await store.set("users", "other", {"email": "o@else.com", "role": "个人用户", "tenantId": "else"})
        await store.set("tenants/acme/roles", "r1", {"name": "Editor"})
        await store.set("tenants/acme/departments", "d1", {"name": "R&D"})
        await store.set("tenants/acme/positions", "p1", {"name": "Dev", "departmentId": "d1"})
        for order_id, created in [("old", "2025-01-01T00:00:00.000000+00:00"), ("new", "2025-06-01T00:00:00.000000+00:00")]:
            await store.set(
                "orders",
                order_id,
                {
                    "tenantId": "acme",
                    "items": [],
                    "totalAmount": 0,
                    "status": "待支付",
                    "createdAt": created,
                },
            )

        response = await client.get("/api/v1/tenants/acme/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["tenant"]["companyName"] == "Acme"
        assert [u["id"] for u in data["users"]] == ["member"]
        assert [o["id"] for o in data["orders"]] == ["new", "old"]
        assert [r["name"] for r in data["roles"]] == ["Editor"]
        assert [d["name"] for d in data["departments"]] == ["R&D"]
        assert [p["name"] for p in data["positions"]] == ["Dev"]

    async def test_dashboard_for_missing_tenant(self, client: AsyncClient):
        response = await client.get("/api/v1/tenants/missing/dashboard")

        assert response.status_code == 404
