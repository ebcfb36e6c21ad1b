"""API key service."""

import secrets
from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.constants import API_KEY_PREFIX, API_KEY_SECRET_BYTES
from prompt_universe.core.documents import OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.modules.api_keys.repos import ApiKeyRepo
from prompt_universe.modules.api_keys.schemas import (
    ApiKey,
    ApiKeyCreate,
    ApiKeyCreated,
    ApiKeyStatus,
)


logger = structlog.get_logger()


def generate_api_key(tenant_id: str) -> str:
    """Generate a secret of the form ``sk-<tenant prefix>-<random>``."""
    return f"{API_KEY_PREFIX}-{tenant_id[:4]}-{secrets.token_urlsafe(API_KEY_SECRET_BYTES)}"


class ApiKeyService:
    """Issue, list and revoke a tenant's API keys."""

    def __init__(self, repo: ApiKeyRepo) -> None:
        self.repo = repo

    async def list_api_keys(self, tenant_id: str) -> list[ApiKey]:
        """List keys newest first, with secrets masked."""
        keys = await self.repo.for_tenant(tenant_id).list_newest_first()
        return [key.masked() for key in keys]

    async def create_api_key(self, tenant_id: str, data: ApiKeyCreate) -> ApiKeyCreated:
        repo = self.repo.for_tenant(tenant_id)
        secret = generate_api_key(tenant_id)
        try:
            key_id = await repo.create(
                {
                    "name": data.name,
                    "key": secret,
                    "tenantId": tenant_id,
                    "status": ApiKeyStatus.ACTIVE.value,
                }
            )
            key = await repo.get_or_404(key_id)
        except AppException as e:
            logger.error("api_key_create_failed", tenant_id=tenant_id, error=e.message)
            return ApiKeyCreated(success=False, message=e.message)

        logger.info("api_key_created", tenant_id=tenant_id, key_id=key_id)
        return ApiKeyCreated(
            success=True,
            message="API密钥已创建，请立即妥善保存，之后将无法再次查看。",
            key=key,
        )

    async def revoke_api_key(self, tenant_id: str, key_id: str) -> OperationResult:
        try:
            await self.repo.for_tenant(tenant_id).update(
                key_id, {"status": ApiKeyStatus.REVOKED.value}
            )
        except AppException as e:
            logger.warning(
                "api_key_revoke_failed", tenant_id=tenant_id, key_id=key_id, error=e.message
            )
            return OperationResult.fail(e.message)
        logger.info("api_key_revoked", tenant_id=tenant_id, key_id=key_id)
        return OperationResult.ok("API密钥已撤销。", id=key_id)


# Type alias for dependency injection
ApiKeySvc = Annotated[ApiKeyService, Depends(ApiKeyService)]
