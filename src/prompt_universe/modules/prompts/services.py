"""Prompt service: the prompt library, execution and metadata analysis."""

from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.api.dependencies import Analyzer, Gateway
from prompt_universe.core.documents import SERVER_TIMESTAMP, OperationResult
from prompt_universe.core.errors import AppException, ExecutionError, NotFoundError
from prompt_universe.core.llm import PromptMetadata, assemble_messages, template_engine
from prompt_universe.modules.prompts.repos import ExpertDomainRepo, PromptRepo
from prompt_universe.modules.prompts.schemas import (
    ExpertDomain,
    ExpertDomainSave,
    MetadataAnalysisRequest,
    Prompt,
    PromptExecutionRequest,
    PromptExecutionResult,
    PromptSave,
    StoredPromptExecutionRequest,
)


logger = structlog.get_logger()


class PromptService:
    """Service for prompt library operations.

    Library writes follow the usual result convention; execution and
    analysis raise, since their callers need the generated output.
    """

    def __init__(
        self,
        prompts: PromptRepo,
        expert_domains: ExpertDomainRepo,
        gateway: Gateway,
        analyzer: Analyzer,
    ) -> None:
        self.prompts = prompts
        self.expert_domains = expert_domains
        self.gateway = gateway
        self.analyzer = analyzer

    # ============================================================
    # Library
    # ============================================================

    async def list_prompts(self, tenant_id: str | None = None) -> list[Prompt]:
        return await self.prompts.list_active(tenant_id)

    async def get_prompt(self, prompt_id: str) -> Prompt:
        """Get a prompt by id.

        Raises:
            NotFoundError: If the prompt does not exist
        """
        return await self.prompts.get_or_404(prompt_id)

    async def save_prompt(self, data: PromptSave) -> OperationResult:
        document = {**data.to_document(), "updatedAt": SERVER_TIMESTAMP}
        try:
            if data.id:
                await self.prompts.merge(data.id, document)
                prompt_id, created = data.id, False
            else:
                prompt_id = await self.prompts.create({**document, "archived": False})
                created = True
        except AppException as e:
            logger.error("prompt_save_failed", prompt_id=data.id, error=e.message)
            return OperationResult.fail(e.message)

        logger.info("prompt_saved", prompt_id=prompt_id, scope=data.scope, created=created)
        return OperationResult.ok("提示词已创建。" if created else "提示词已更新。", id=prompt_id)

    async def archive_prompt(self, prompt_id: str) -> OperationResult:
        """Hide a prompt from the library; the document is kept."""
        try:
            await self.prompts.update(
                prompt_id, {"archived": True, "updatedAt": SERVER_TIMESTAMP}
            )
        except AppException as e:
            logger.error("prompt_archive_failed", prompt_id=prompt_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("prompt_archived", prompt_id=prompt_id)
        return OperationResult.ok("提示词已归档。", id=prompt_id)

    # ============================================================
    # Expert domains
    # ============================================================

    async def list_expert_domains(self) -> list[ExpertDomain]:
        return await self.expert_domains.list()

    async def save_expert_domain(self, data: ExpertDomainSave) -> OperationResult:
        try:
            domain_id, created = await self.expert_domains.save(data)
        except AppException as e:
            logger.error("expert_domain_save_failed", domain_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("expert_domain_saved", domain_id=domain_id, created=created)
        return OperationResult.ok(
            "专家领域已创建。" if created else "专家领域已更新。", id=domain_id
        )

    async def delete_expert_domain(self, domain_id: str) -> OperationResult:
        try:
            await self.expert_domains.delete(domain_id)
        except AppException as e:
            logger.error("expert_domain_delete_failed", domain_id=domain_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("expert_domain_deleted", domain_id=domain_id)
        return OperationResult.ok("专家领域已删除。", id=domain_id)

    # ============================================================
    # Execution
    # ============================================================

    async def execute_prompt(self, data: PromptExecutionRequest) -> PromptExecutionResult:
        """Fill the user prompt template and send the prompt to a model.

        Raises:
            TemplateRenderError: If the user prompt is not a valid template
            ExecutionError: If no connection is usable or the call fails
        """
        connection_id = data.connection_id
        if not connection_id:
            connection = await self.gateway.find_general_connection()
            if connection is None:
                raise ExecutionError(
                    "抱歉，执行操作所需的模型ID缺失，且平台没有配置可用的通用模型。"
                )
            connection_id = connection.id

        instruction = template_engine.render(data.user_prompt, data.variables)
        unresolved = template_engine.variables_in(data.user_prompt) - data.variables.keys()
        if unresolved:
            logger.info("prompt_variables_unresolved", variables=sorted(unresolved))

        messages = assemble_messages(
            instruction,
            system_prompt=data.system_prompt,
            context=data.context,
            negative_prompt=data.negative_prompt,
        )
        response = await self.gateway.generate(
            connection_id, messages, temperature=data.temperature
        )
        return PromptExecutionResult(response=response, connection_id=connection_id)

    async def execute_stored_prompt(
        self, prompt_id: str, data: StoredPromptExecutionRequest
    ) -> PromptExecutionResult:
        """Run a library prompt by id with the given variables.

        With ``prompt_content`` that text is run on its own and the stored
        prompt is not loaded.

        Raises:
            NotFoundError: If the prompt does not exist or is archived
            TemplateRenderError: If the user prompt is not a valid template
            ExecutionError: If no connection is usable or the call fails
        """
        if data.prompt_content:
            return await self.execute_prompt(
                PromptExecutionRequest(
                    user_prompt=data.prompt_content,
                    variables=data.variables,
                    temperature=data.temperature,
                    connection_id=data.connection_id,
                )
            )

        prompt = await self.prompts.get_or_404(prompt_id)
        if prompt.archived:
            raise NotFoundError(
                self.prompts.not_found_message, resource="prompts", resource_id=prompt_id
            )

        return await self.execute_prompt(
            PromptExecutionRequest(
                user_prompt=prompt.user_prompt,
                system_prompt=prompt.system_prompt or None,
                context=prompt.context or None,
                negative_prompt=prompt.negative_prompt or None,
                variables=data.variables,
                temperature=data.temperature,
                connection_id=data.connection_id,
            )
        )

    # ============================================================
    # Metadata
    # ============================================================

    async def analyze_prompt_metadata(self, data: MetadataAnalysisRequest) -> PromptMetadata:
        return await self.analyzer.analyze(
            data.user_prompt,
            system_prompt=data.system_prompt,
            context=data.context,
            negative_prompt=data.negative_prompt,
        )

    async def analyze_and_store_metadata(self, prompt_id: str) -> PromptMetadata:
        """Analyze a stored prompt and save the result as its ``metadata``."""
        prompt = await self.prompts.get_or_404(prompt_id)
        metadata = await self.analyzer.analyze(
            prompt.user_prompt,
            system_prompt=prompt.system_prompt or None,
            context=prompt.context or None,
            negative_prompt=prompt.negative_prompt or None,
        )
        await self.prompts.update(
            prompt_id,
            {
                "metadata": metadata.model_dump(by_alias=True),
                "updatedAt": SERVER_TIMESTAMP,
            },
        )
        logger.info("prompt_metadata_stored", prompt_id=prompt_id)
        return metadata


# Type alias for dependency injection
PromptSvc = Annotated[PromptService, Depends(PromptService)]
