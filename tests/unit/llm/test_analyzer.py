"""Unit tests for JSON extraction and the metadata analyzer."""

import json

import httpx
import pytest

from prompt_universe.core.documents.sql import SqlDocumentStore
from prompt_universe.core.errors import MetadataAnalysisError, ServiceUnavailableError
from prompt_universe.core.llm import LlmConnection, ModelGateway, PromptMetadataAnalyzer
from prompt_universe.core.llm.analyzer import build_analysis_request
from prompt_universe.core.llm.parsing import extract_json_object, first_balanced_object
from tests.fakes import FakeLLM


METADATA = {
    "scope": "营销文案",
    "recommendedModel": "gemini-1.5-flash",
    "constraints": "需要提供产品名称",
    "scenario": "电商详情页",
}


class TestExtractJsonObject:
    """Tests for JSON extraction from model output."""

    def test_plain_json(self):
        assert extract_json_object(json.dumps(METADATA)) == METADATA

    def test_fenced_block(self):
        text = f"Here you go:\n```json\n{json.dumps(METADATA)}\n```\nThanks"

        assert extract_json_object(text) == METADATA

    def test_embedded_object(self):
        text = f'Result: {json.dumps(METADATA)} (end)'

        assert extract_json_object(text) == METADATA

    def test_braces_inside_strings(self):
        assert first_balanced_object('x {"a": "}{"} y') == '{"a": "}{"}'

    @pytest.mark.parametrize("text", ["", "no json here", "[1, 2]", "{broken"])
    def test_no_object(self, text):
        assert extract_json_object(text) is None


def test_analysis_request_sections():
    request = build_analysis_request("", system_prompt="Be brief", negative_prompt="slang")

    assert "[System Prompt]:\nBe brief" in request
    assert "[User Prompt]:\n" in request
    assert "[Negative Prompt]:\nslang" in request
    assert "[Context/Examples]" not in request


class TestPromptMetadataAnalyzer:
    """Tests for PromptMetadataAnalyzer.analyze."""

    @pytest.fixture
    def analyzer(
        self, store: SqlDocumentStore, http_client: httpx.AsyncClient
    ) -> PromptMetadataAnalyzer:
        return PromptMetadataAnalyzer(ModelGateway(store, http_client))

    async def test_returns_metadata(
        self, analyzer, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = f"```json\n{json.dumps(METADATA, ensure_ascii=False)}\n```"

        metadata = await analyzer.analyze("写一段关于{{product}}的文案")

        assert metadata.scope == "营销文案"
        assert metadata.recommended_model == "gemini-1.5-flash"
        body = fake_llm.last_body
        assert body["generationConfig"]["temperature"] == 0.2
        assert body["generationConfig"]["responseMimeType"] == "application/json"

    async def test_accepts_use_case_alias(
        self, analyzer, connection: LlmConnection, fake_llm: FakeLLM
    ):
        payload = {**METADATA, "useCase": "客服"}
        del payload["scenario"]
        fake_llm.reply = json.dumps(payload)

        metadata = await analyzer.analyze("")

        assert metadata.scenario == "客服"

    async def test_no_general_connection(self, analyzer):
        with pytest.raises(ServiceUnavailableError):
            await analyzer.analyze("anything")

    async def test_unstructured_answer(
        self, analyzer, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = "I cannot help with that."

        with pytest.raises(MetadataAnalysisError):
            await analyzer.analyze("anything")

    async def test_missing_fields(
        self, analyzer, connection: LlmConnection, fake_llm: FakeLLM
    ):
        fake_llm.reply = json.dumps({"scope": "x", "constraints": ""})

        with pytest.raises(MetadataAnalysisError):
            await analyzer.analyze("anything")
