"""Unit tests for the collection repositories."""

import pytest

from prompt_universe.core.documents.sql import SqlDocumentStore
from prompt_universe.core.errors import (
    BadRequestError,
    InvalidDocumentError,
    NotFoundError,
)
from prompt_universe.modules.organization.repos import RoleRepository
from prompt_universe.modules.tenants.repos import TenantRepository
from prompt_universe.modules.tenants.schemas import TenantSave
from prompt_universe.modules.users.repos import UserRepository
from tests.factories.tenant import TenantSaveFactory
from tests.factories.user import UserSaveFactory


class TestSave:
    """Tests for the create-or-merge save operation."""

    async def test_save_without_id_creates(self, store: SqlDocumentStore):
        repo = TenantRepository(store)

        tenant_id, created = await repo.save(TenantSaveFactory.build())

        assert created is True
        snapshot = await store.get("tenants", tenant_id)
        assert snapshot.data["status"] == "待审核"
        assert "createdAt" in snapshot.data

    async def test_save_with_id_merges_sent_fields_only(self, store: SqlDocumentStore):
        repo = TenantRepository(store)
        tenant_id, _ = await repo.save(
            TenantSave(companyName="Acme", adminEmail="admin@acme.com", status="活跃")
        )

        update = TenantSave.model_validate(
            {"id": tenant_id, "companyName": "Acme Corp", "adminEmail": "admin@acme.com"}
        )
        _, created = await repo.save(update)

        assert created is False
        tenant = await repo.get_or_404(tenant_id)
        assert tenant.company_name == "Acme Corp"
        assert tenant.status == "活跃"
        assert tenant.created_at is not None


class TestRead:
    """Tests for get and list."""

    async def test_get_or_404_raises(self, store: SqlDocumentStore):
        with pytest.raises(NotFoundError) as exc_info:
            await TenantRepository(store).get_or_404("missing")

        assert exc_info.value.message == "租户不存在。"

    async def test_get_invalid_document_raises_app_error(self, store: SqlDocumentStore):
        await store.set("tenants", "bad", {"companyName": "Broken"})

        with pytest.raises(InvalidDocumentError) as exc_info:
            await TenantRepository(store).get("bad")

        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {"resource": "tenants", "resource_id": "bad"}

    async def test_list_skips_invalid_documents(self, store: SqlDocumentStore):
        await store.set(
            "tenants",
            "good",
            {"companyName": "Acme", "adminEmail": "a@acme.com", "status": "活跃"},
        )
        await store.set("tenants", "bad", {"companyName": "Broken"})

        tenants = await TenantRepository(store).list()

        assert [tenant.id for tenant in tenants] == ["good"]

    async def test_registered_date_is_created_at(self, store: SqlDocumentStore):
        repo = TenantRepository(store)
        tenant_id, _ = await repo.save(TenantSaveFactory.build())

        tenant = await repo.get_or_404(tenant_id)

        assert tenant.registered_date == tenant.created_at
        assert "registeredDate" in tenant.model_dump(by_alias=True)


class TestTenantCollections:
    """Tests for repositories nested under a tenant."""

    async def test_unbound_repository_raises(self, store: SqlDocumentStore):
        with pytest.raises(BadRequestError):
            await RoleRepository(store).list()

    async def test_binding_does_not_change_original(self, store: SqlDocumentStore):
        repo = RoleRepository(store)

        bound = repo.for_tenant("t1")

        assert bound.collection_path() == "tenants/t1/roles"
        assert repo.tenant_id is None


class TestUserRepository:
    """Tests for user queries and batch creation."""

    async def test_list_by_tenant(self, store: SqlDocumentStore):
        repo = UserRepository(store)
        member = UserSaveFactory.build().model_copy(update={"tenant_id": "acme"})
        await repo.save(member)
        await repo.save(UserSaveFactory.build())

        members = await repo.list_by_tenant("acme")

        assert [user.email for user in members] == [member.email]

    async def test_create_many_writes_every_document(self, store: SqlDocumentStore):
        repo = UserRepository(store)
        documents = [
            UserSaveFactory.build().to_document(),
            UserSaveFactory.build().to_document(),
        ]

        ids = await repo.create_many(documents)

        assert len(set(ids)) == 2
        users = await repo.list()
        assert sorted(user.id for user in users) == sorted(ids)
        assert all(user.created_at is not None for user in users)
