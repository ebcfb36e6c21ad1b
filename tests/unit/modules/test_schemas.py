"""Unit tests for module schemas."""

import pytest
from pydantic import ValidationError

from prompt_universe.core.llm import PromptMetadata
from prompt_universe.modules.assets.schemas import LlmConnectionPublic, LlmConnectionSave
from prompt_universe.modules.demands.schemas import DemandSave
from prompt_universe.modules.procurement.schemas import OrderStatus, can_transition
from prompt_universe.modules.prompts.schemas import PromptExecutionRequest, PromptSave
from prompt_universe.modules.users.schemas import User, UserRole, UserSave
from tests.factories.connection import LlmConnectionFactory


class TestUserRoles:
    """Tests for role label normalisation."""

    @pytest.mark.parametrize(
        ("label", "role"),
        [
            ("平台管理员", UserRole.PLATFORM_ADMIN),
            ("Platform Admin", UserRole.PLATFORM_ADMIN),
            ("Tenant Admin", UserRole.TENANT_ADMIN),
            ("Prompt Engineer/Developer", UserRole.ENGINEER),
            ("Individual User", UserRole.INDIVIDUAL),
        ],
    )
    def test_known_labels(self, label, role):
        assert UserRole.parse(label) is role

    def test_unknown_label_is_rejected(self):
        with pytest.raises(ValidationError):
            UserSave(name="A", email="a@example.com", role="Superhero")

    def test_legacy_label_is_stored_normalised(self):
        user = UserSave(name="A", email="a@example.com", role="Tenant Admin")

        assert user.to_document()["role"] == "租户管理员"

    @pytest.mark.parametrize("status", [None, ""])
    def test_missing_status_reads_as_active(self, status):
        user = User.model_validate(
            {"id": "u1", "email": "a@example.com", "role": "个人用户", "status": status}
        )

        assert user.status == "活跃"


class TestOrderTransitions:
    """Tests for the order lifecycle."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.PENDING_CONFIRMATION, OrderStatus.PENDING_PAYMENT),
            (OrderStatus.PENDING_PAYMENT, OrderStatus.CONFIGURING),
            (OrderStatus.CONFIGURING, OrderStatus.COMPLETED),
            (OrderStatus.CONFIGURING, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.PENDING_CONFIRMATION, OrderStatus.COMPLETED),
            (OrderStatus.COMPLETED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING_PAYMENT),
        ],
    )
    def test_rejected(self, current, target):
        assert not can_transition(current, target)


class TestConnections:
    """Tests for connection schemas."""

    def test_public_view_has_no_api_key(self):
        connection = LlmConnectionFactory.build()

        public = LlmConnectionPublic.from_connection(connection)

        dumped = public.model_dump(by_alias=True)
        assert "apiKey" not in dumped
        assert dumped["hasApiKey"] is True

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            LlmConnectionSave(modelName="m", provider="acme-ai", apiKey="k")

    def test_provider_is_normalised(self):
        data = LlmConnectionSave(modelName="m", provider=" DeepSeek ", apiKey="k")

        assert data.provider == "deepseek"

    def test_new_connection_requires_api_key(self):
        with pytest.raises(ValidationError):
            LlmConnectionSave(modelName="m", provider="google")

    def test_update_may_omit_api_key(self):
        data = LlmConnectionSave(id="c1", modelName="m", provider="google")

        assert "apiKey" not in data.to_document()

    def test_priority_bounds(self):
        with pytest.raises(ValidationError):
            LlmConnectionSave(modelName="m", provider="google", apiKey="k", priority=0)

    def test_exclusive_requires_tenant(self):
        with pytest.raises(ValidationError):
            LlmConnectionSave(modelName="m", provider="google", apiKey="k", scope="专属")


class TestPrompts:
    """Tests for prompt schemas."""

    def test_exclusive_prompt_requires_tenant(self):
        with pytest.raises(ValidationError):
            PromptSave(name="P", expertId="e1", scope="专属")

    def test_exclusive_prompt_with_tenant(self):
        prompt = PromptSave(name="P", expertId="e1", scope="专属", tenantId="t1")

        assert prompt.to_document()["tenantId"] == "t1"

    def test_model_id_is_accepted_for_connection(self):
        request = PromptExecutionRequest.model_validate({"modelId": "c1"})

        assert request.connection_id == "c1"

    def test_metadata_accepts_model_and_use_case(self):
        metadata = PromptMetadata.model_validate(
            {"scope": "a", "model": "b", "constraints": "c", "use_case": "d"}
        )

        assert metadata.model_dump(by_alias=True) == {
            "scope": "a",
            "recommendedModel": "b",
            "constraints": "c",
            "scenario": "d",
        }

    def test_metadata_joins_lists(self):
        metadata = PromptMetadata.model_validate(
            {
                "scope": "a",
                "recommendedModel": "b",
                "constraints": ["x", "y"],
                "scenario": "d",
            }
        )

        assert metadata.constraints == "x\ny"


def test_demand_tags_from_comma_separated_text():
    demand = DemandSave(title="Logo", category="设计", description="需要一个logo", tags="a, b,,c")

    assert demand.tags == ["a", "b", "c"]
