"""Integration tests for the prompt library, execution and metadata analysis."""

import json

import pytest
from httpx import AsyncClient

from prompt_universe.core.documents.sql import SqlDocumentStore
from prompt_universe.core.llm import LlmConnection
from tests.fakes import FakeLLM


pytestmark = pytest.mark.integration

METADATA = {
    "scope": "营销文案",
    "recommendedModel": "gemini-1.5-flash",
    "constraints": "需要提供产品名称",
    "scenario": "电商详情页",
}


def _prompt(name: str, **fields) -> dict:
    return {
        "name": name,
        "expertId": "writing",
        "userPrompt": f"{name} {{{{topic}}}}",
        **fields,
    }


class TestPromptLibrary:
    """Tests for prompt CRUD and listing."""

    async def test_save_and_get(self, client: AsyncClient):
        created = (await client.post("/api/v1/prompts", json=_prompt("Summary"))).json()

        assert created["success"] is True
        prompt = (await client.get(f"/api/v1/prompts/{created['id']}")).json()
        assert prompt["userPrompt"] == "Summary {{topic}}"
        assert prompt["archived"] is False
        assert prompt["scope"] == "通用"

    async def test_exclusive_prompt_needs_tenant(self, client: AsyncClient):
        response = await client.post("/api/v1/prompts", json=_prompt("Secret", scope="专属"))

        assert response.status_code == 422

    async def test_tenant_sees_universal_and_own_prompts(self, client: AsyncClient):
        await client.post("/api/v1/prompts", json=_prompt("Shared"))
        await client.post(
            "/api/v1/prompts", json=_prompt("Mine", scope="专属", tenantId="acme")
        )
        await client.post(
            "/api/v1/prompts", json=_prompt("Theirs", scope="专属", tenantId="other")
        )

        names = {
            p["name"]
            for p in (await client.get("/api/v1/prompts", params={"tenantId": "acme"})).json()
        }

        assert names == {"Shared", "Mine"}

    async def test_archived_prompt_is_hidden(self, client: AsyncClient):
        kept = (await client.post("/api/v1/prompts", json=_prompt("Kept"))).json()
        gone = (await client.post("/api/v1/prompts", json=_prompt("Gone"))).json()

        response = await client.post(f"/api/v1/prompts/{gone['id']}/archive")

        assert response.json()["success"] is True
        listed = (await client.get("/api/v1/prompts")).json()
        assert [p["id"] for p in listed] == [kept["id"]]

    async def test_missing_prompt_is_404(self, client: AsyncClient):
        response = await client.get("/api/v1/prompts/missing")

        assert response.status_code == 404


class TestExecutePrompt:
    """Tests for POST /api/v1/prompts/execute."""

    async def test_variables_are_substituted(
        self, client: AsyncClient, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = "Hi there"

        response = await client.post(
            "/api/v1/prompts/execute",
            json={
                "userPrompt": "Hello {{name}}",
                "variables": {"name": "World"},
                "connectionId": connection.id,
            },
        )

        assert response.status_code == 200
        assert response.json() == {"response": "Hi there", "connectionId": connection.id}
        assert "Hello World" in json.dumps(fake_llm.last_body, ensure_ascii=False)

    async def test_general_connection_is_used_by_default(
        self, client: AsyncClient, connection: LlmConnection
    ):
        response = await client.post("/api/v1/prompts/execute", json={"userPrompt": "Hi"})

        assert response.json()["connectionId"] == connection.id

    async def test_no_connection_available(self, client: AsyncClient):
        response = await client.post("/api/v1/prompts/execute", json={"userPrompt": "Hi"})

        assert response.status_code == 502
        assert "通用模型" in response.json()["detail"]

    async def test_unknown_connection(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/prompts/execute",
            json={"userPrompt": "Hi", "connectionId": "missing"},
        )

        assert response.status_code == 502
        assert "missing" in response.json()["detail"]

    async def test_provider_failure(
        self, client: AsyncClient, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.status_code = 500

        response = await client.post(
            "/api/v1/prompts/execute",
            json={"userPrompt": "Hi", "connectionId": connection.id},
        )

        assert response.status_code == 502
        assert response.json()["type"].endswith("prompt_execution_failed")

    async def test_invalid_template(self, client: AsyncClient, connection: LlmConnection):
        response = await client.post(
            "/api/v1/prompts/execute",
            json={"userPrompt": "Hello {{ name", "connectionId": connection.id},
        )

        assert response.status_code == 400


class TestExecuteStoredPrompt:
    """Tests for POST /api/v1/prompts/{id}/execute."""

    async def test_stored_prompt_fields_are_sent(
        self, client: AsyncClient, connection: LlmConnection, fake_llm: FakeLLM
    ):
        created = (
            await client.post(
                "/api/v1/prompts",
                json=_prompt("Summary", systemPrompt="You are terse."),
            )
        ).json()

        response = await client.post(
            f"/api/v1/prompts/{created['id']}/execute",
            json={"variables": {"topic": "tides"}},
        )

        assert response.status_code == 200
        body = fake_llm.last_body
        assert body["systemInstruction"]["parts"][0]["text"] == "You are terse."
        assert body["contents"][0]["parts"][0]["text"] == "Summary tides"

    async def test_archived_prompt_cannot_run(
        self, client: AsyncClient, connection: LlmConnection
    ):
        created = (await client.post("/api/v1/prompts", json=_prompt("Old"))).json()
        await client.post(f"/api/v1/prompts/{created['id']}/archive")

        response = await client.post(f"/api/v1/prompts/{created['id']}/execute", json={})

        assert response.status_code == 404

    async def test_prompt_content_runs_on_its_own(
        self, client: AsyncClient, connection: LlmConnection, fake_llm: FakeLLM
    ):
        response = await client.post(
            "/api/v1/prompts/not-in-library/execute",
            json={"promptContent": "Draft {{topic}}", "variables": {"topic": "a memo"}},
        )

        assert response.status_code == 200
        body = fake_llm.last_body
        assert "systemInstruction" not in body
        assert body["contents"][0]["parts"][0]["text"] == "Draft a memo"


class TestMetadataAnalysis:
    """Tests for metadata analysis endpoints."""

    async def test_analyze_returns_four_fields(
        self, client: AsyncClient, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = f"```json\n{json.dumps(METADATA, ensure_ascii=False)}\n```"

        response = await client.post(
            "/api/v1/prompts/analyze-metadata", json={"userPrompt": ""}
        )

        assert response.status_code == 200
        assert response.json() == METADATA

    async def test_non_json_reply_is_502(
        self, client: AsyncClient, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = "I cannot help with that."

        response = await client.post(
            "/api/v1/prompts/analyze-metadata", json={"userPrompt": "Write a poem"}
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "AI返回的元数据格式无效，无法解析。"

    async def test_no_general_connection_is_503(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/prompts/analyze-metadata", json={"userPrompt": "Write a poem"}
        )

        assert response.status_code == 503

    async def test_metadata_is_stored_on_prompt(
        self, client: AsyncClient, store: SqlDocumentStore, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = json.dumps(METADATA)
        created = (await client.post("/api/v1/prompts", json=_prompt("Copy"))).json()

        response = await client.post(f"/api/v1/prompts/{created['id']}/metadata")

        assert response.status_code == 200
        stored = await store.get("prompts", created["id"])
        assert stored.data["metadata"] == METADATA


async def test_expert_domain_lifecycle(client: AsyncClient):
    created = (await client.post("/api/v1/expert-domains", json={"name": "法律"})).json()
    assert created["success"] is True

    domains = (await client.get("/api/v1/expert-domains")).json()
    assert [d["name"] for d in domains] == ["法律"]

    await client.delete(f"/api/v1/expert-domains/{created['id']}")
    assert (await client.get("/api/v1/expert-domains")).json() == []
