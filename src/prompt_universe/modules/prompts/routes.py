"""Prompt library API routes."""

from fastapi import APIRouter, Query

from prompt_universe.core.documents import OperationResult
from prompt_universe.core.llm import PromptMetadata
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
from prompt_universe.modules.prompts.services import PromptSvc


router = APIRouter(tags=["prompts"])


# ============================================================
# Library
# ============================================================


@router.get(
    "/prompts",
    response_model=list[Prompt],
    summary="List prompts",
    description=(
        "Non-archived prompts, most recently updated first. With tenantId: "
        "universal prompts plus that tenant's exclusive prompts."
    ),
)
async def list_prompts(
    service: PromptSvc,
    tenant_id: str | None = Query(None, alias="tenantId"),
) -> list[Prompt]:
    return await service.list_prompts(tenant_id)


@router.post("/prompts", response_model=OperationResult, summary="Save prompt")
async def save_prompt(data: PromptSave, service: PromptSvc) -> OperationResult:
    return await service.save_prompt(data)


@router.post(
    "/prompts/execute",
    response_model=PromptExecutionResult,
    summary="Execute prompt",
    description="Fill the user prompt with variables and run it on a model connection.",
)
async def execute_prompt(
    data: PromptExecutionRequest, service: PromptSvc
) -> PromptExecutionResult:
    return await service.execute_prompt(data)


@router.post(
    "/prompts/analyze-metadata",
    response_model=PromptMetadata,
    summary="Analyze prompt metadata",
)
async def analyze_prompt_metadata(
    data: MetadataAnalysisRequest, service: PromptSvc
) -> PromptMetadata:
    return await service.analyze_prompt_metadata(data)


@router.get("/prompts/{prompt_id}", response_model=Prompt, summary="Get prompt")
async def get_prompt(prompt_id: str, service: PromptSvc) -> Prompt:
    return await service.get_prompt(prompt_id)


@router.post(
    "/prompts/{prompt_id}/archive",
    response_model=OperationResult,
    summary="Archive prompt",
)
async def archive_prompt(prompt_id: str, service: PromptSvc) -> OperationResult:
    return await service.archive_prompt(prompt_id)


@router.post(
    "/prompts/{prompt_id}/execute",
    response_model=PromptExecutionResult,
    summary="Execute stored prompt",
)
async def execute_stored_prompt(
    prompt_id: str, data: StoredPromptExecutionRequest, service: PromptSvc
) -> PromptExecutionResult:
    return await service.execute_stored_prompt(prompt_id, data)


@router.post(
    "/prompts/{prompt_id}/metadata",
    response_model=PromptMetadata,
    summary="Analyze and store prompt metadata",
)
async def analyze_and_store_metadata(prompt_id: str, service: PromptSvc) -> PromptMetadata:
    return await service.analyze_and_store_metadata(prompt_id)


# ============================================================
# Expert domains
# ============================================================


@router.get("/expert-domains", response_model=list[ExpertDomain], summary="List expert domains")
async def list_expert_domains(service: PromptSvc) -> list[ExpertDomain]:
    return await service.list_expert_domains()


@router.post("/expert-domains", response_model=OperationResult, summary="Save expert domain")
async def save_expert_domain(data: ExpertDomainSave, service: PromptSvc) -> OperationResult:
    return await service.save_expert_domain(data)


@router.delete(
    "/expert-domains/{domain_id}",
    response_model=OperationResult,
    summary="Delete expert domain",
)
async def delete_expert_domain(domain_id: str, service: PromptSvc) -> OperationResult:
    return await service.delete_expert_domain(domain_id)
