"""Integration tests for user and tenant member endpoints."""

import pytest
from httpx import AsyncClient

from prompt_universe.core.documents.sql import SqlDocumentStore


pytestmark = pytest.mark.integration


class TestRegistration:
    """Tests for POST /api/v1/users/register."""

    async def test_registration_is_pending_review(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users/register",
            json={"uid": "uid-1", "email": "new@example.com", "name": "New", "role": "个人用户"},
        )

        assert response.status_code == 201
        assert response.json() == {
            "success": True,
            "message": "注册成功，请等待管理员审核。",
            "id": "uid-1",
        }
        users = (await client.get("/api/v1/users")).json()
        assert users[0]["status"] == "待审核"

    async def test_legacy_role_label_is_accepted(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users/register",
            json={"email": "dev@example.com", "name": "Dev", "role": "Prompt Engineer/Developer"},
        )

        assert response.json()["success"] is True
        users = (await client.get("/api/v1/users")).json()
        assert users[0]["role"] == "技术工程师"

    async def test_unknown_role_is_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users/register",
            json={"email": "x@example.com", "name": "X", "role": "Superuser"},
        )

        assert response.status_code == 422


class TestTenantMembers:
    """Tests for member invitation and updates."""

    async def test_invite_batch(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tenants/acme/members/invite",
            json={
                "users": [
                    {"email": "a@acme.com", "name": "A", "role": "技术工程师"},
                    {"email": "b@acme.com", "name": "B", "role": "租户管理员"},
                ]
            },
        )

        assert response.json() == {"success": True, "message": "已邀请 2 位成员。", "id": None}
        members = (await client.get("/api/v1/users", params={"tenantId": "acme"})).json()
        assert sorted(m["email"] for m in members) == ["a@acme.com", "b@acme.com"]
        assert {m["status"] for m in members} == {"邀请中"}

    async def test_update_member(self, client: AsyncClient, store: SqlDocumentStore):
        await store.set("users", "u1", {"email": "u@acme.com", "role": "技术工程师", "tenantId": "acme"})

        response = await client.patch(
            "/api/v1/tenants/acme/members/u1",
            json={"role": "租户管理员", "departmentId": "d1", "positionId": "p1"},
        )

        assert response.json()["success"] is True
        stored = await store.get("users", "u1")
        assert stored.data["role"] == "租户管理员"
        assert stored.data["departmentId"] == "d1"

    async def test_update_member_of_other_tenant_fails(
        self, client: AsyncClient, store: SqlDocumentStore
    ):
        await store.set("users", "u1", {"email": "u@else.com", "role": "技术工程师", "tenantId": "else"})

        response = await client.patch(
            "/api/v1/tenants/acme/members/u1", json={"role": "租户管理员"}
        )

        assert response.json() == {
            "success": False,
            "message": "该用户不属于此租户。",
            "id": None,
        }
        stored = await store.get("users", "u1")
        assert stored.data["role"] == "技术工程师"

    async def test_update_missing_member_fails(self, client: AsyncClient):
        response = await client.patch(
            "/api/v1/tenants/acme/members/ghost", json={"role": "技术工程师"}
        )

        assert response.json()["success"] is False
        assert response.json()["message"] == "用户不存在。"

    async def test_update_member_with_unknown_stored_role_fails(
        self, client: AsyncClient, store: SqlDocumentStore
    ):
        await store.set("users", "u1", {"email": "u@acme.com", "role": "Guest", "tenantId": "acme"})

        response = await client.patch(
            "/api/v1/tenants/acme/members/u1", json={"role": "租户管理员"}
        )

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["message"] == "该记录数据不完整或格式无效，无法处理。"
