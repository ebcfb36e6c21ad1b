"""AI-generated metadata for prompts."""

import structlog
from pydantic import ValidationError as PydanticValidationError

from prompt_universe.config import settings
from prompt_universe.core.errors import MetadataAnalysisError, ServiceUnavailableError
from prompt_universe.core.llm.gateway import ModelGateway
from prompt_universe.core.llm.messages import ChatMessage
from prompt_universe.core.llm.models import PromptMetadata
from prompt_universe.core.llm.parsing import extract_json_object
from prompt_universe.core.llm.providers import JSON_RESPONSE_FORMAT


logger = structlog.get_logger()

ANALYST_INSTRUCTION = """你是一个经验丰富的提示词工程专家。你的任务是分析用户提供的结构化提示词，并为其生成准确、专业的元数据。

请严格按照以下要求，并遵循JSON输出格式：

1. **适用范围 (scope)**: 总结这个提示词主要适用于哪个领域或哪一类任务。
2. **推荐模型 (recommendedModel)**: 根据提示词的复杂度、语言和任务类型，推荐最合适的模型（例如：gemini-1.5-flash适用于简单、快速的任务；gemini-1.5-pro适用于复杂的推理和多语言任务）。
3. **约束条件 (constraints)**: 指出使用此提示词时需要注意的潜在问题、限制或前提条件。例如，它是否依赖特定格式的输入变量。
4. **适用场景 (scenario)**: 描述1-2个这个提示词可以被有效利用的具体业务场景。

只返回一个包含 scope、recommendedModel、constraints、scenario 四个字符串字段的JSON对象。"""

JSON_REMINDER = "请严格以JSON格式返回你的分析结果。"


def build_analysis_request(
    user_prompt: str,
    system_prompt: str | None = None,
    context: str | None = None,
    negative_prompt: str | None = None,
) -> str:
    """Lay out the prompt fields as labelled sections for the analyst model."""
    sections: list[str] = []
    if system_prompt:
        sections.append(f"[System Prompt]:\n{system_prompt}")
    sections.append(f"[User Prompt]:\n{user_prompt}")
    if context:
        sections.append(f"[Context/Examples]:\n{context}")
    if negative_prompt:
        sections.append(f"[Negative Prompt]:\n{negative_prompt}")
    sections.append(JSON_REMINDER)
    return "\n\n".join(sections)


class PromptMetadataAnalyzer:
    """Asks the platform's general model to classify a prompt."""

    def __init__(self, gateway: ModelGateway) -> None:
        self.gateway = gateway

    async def analyze(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        context: str | None = None,
        negative_prompt: str | None = None,
    ) -> PromptMetadata:
        """Generate ``PromptMetadata`` for the given prompt fields.

        Raises:
            ServiceUnavailableError: If no general-purpose connection is configured
            ExecutionError: If the generation call fails
            MetadataAnalysisError: If the answer holds no valid metadata object
        """
        connection = await self.gateway.find_general_connection()
        if connection is None:
            raise ServiceUnavailableError(
                "无法分析元数据，因为平台当前没有配置可用的AI模型。请联系管理员。"
            )

        messages = [
            ChatMessage(role="system", content=ANALYST_INSTRUCTION),
            ChatMessage(
                role="user",
                content=build_analysis_request(
                    user_prompt, system_prompt, context, negative_prompt
                ),
            ),
        ]
        raw = await self.gateway.generate(
            connection.id,
            messages,
            temperature=settings.metadata_analysis_temperature,
            response_format=JSON_RESPONSE_FORMAT,
        )

        parsed = extract_json_object(raw)
        if parsed is None:
            logger.warning("metadata_response_not_json", response_chars=len(raw))
            raise MetadataAnalysisError()

        try:
            metadata = PromptMetadata.model_validate(parsed)
        except PydanticValidationError as e:
            logger.warning(
                "metadata_response_invalid",
                errors=e.error_count(),
                fields=sorted(parsed),
            )
            raise MetadataAnalysisError(
                details={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]}
            ) from e

        logger.info("metadata_analyzed", connection_id=connection.id)
        return metadata
