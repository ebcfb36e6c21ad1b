"""User service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.documents import OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.modules.users.repos import UserRepo
from prompt_universe.modules.users.schemas import (
    InviteUsersRequest,
    TenantUserUpdate,
    User,
    UserRegistration,
    UserSave,
    UserStatus,
)


logger = structlog.get_logger()


class UserService:
    """Service for user management operations.

    Covers the platform admin's user list, self-registration records and
    the tenant admin's member management.
    """

    def __init__(self, repo: UserRepo) -> None:
        self.repo = repo

    async def list_users(self, tenant_id: str | None = None) -> list[User]:
        """List all users, or only the members of one tenant."""
        if tenant_id:
            return await self.repo.list_by_tenant(tenant_id)
        return await self.repo.list()

    async def save_user(self, data: UserSave) -> OperationResult:
        """Create a user, or merge changes into an existing one."""
        try:
            user_id, created = await self.repo.save(data)
        except AppException as e:
            logger.error("user_save_failed", user_id=data.id, error=e.message)
            return OperationResult.fail(e.message)

        if created:
            logger.info("user_created", user_id=user_id, tenant_id=data.tenant_id)
            return OperationResult.ok("用户已创建。", id=user_id)
        logger.info("user_updated", user_id=user_id)
        return OperationResult.ok("用户已更新。", id=user_id)

    async def delete_user(self, user_id: str) -> OperationResult:
        try:
            await self.repo.delete(user_id)
        except AppException as e:
            logger.error("user_delete_failed", user_id=user_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("user_deleted", user_id=user_id)
        return OperationResult.ok("用户已删除。", id=user_id)

    async def register_user(self, data: UserRegistration) -> OperationResult:
        """Create the record of a newly signed-up user, pending review.

        The record id is the identity provider's uid when one is given.
        """
        try:
            user_id = await self.repo.create(
                {
                    "email": data.email,
                    "name": data.name,
                    "role": data.role,
                    "status": UserStatus.PENDING.value,
                },
                doc_id=data.uid,
            )
        except AppException as e:
            logger.error("user_registration_failed", email=data.email, error=e.message)
            return OperationResult.fail("无法在数据库中创建用户记录。")
        logger.info("user_registered", user_id=user_id, role=data.role)
        return OperationResult.ok("注册成功，请等待管理员审核。", id=user_id)

    async def invite_users(
        self, tenant_id: str, data: InviteUsersRequest
    ) -> OperationResult:
        """Add invited members to a tenant; all are written or none."""
        documents = [
            {**user.model_dump(by_alias=True), "tenantId": tenant_id}
            for user in data.users
        ]
        try:
            ids = await self.repo.create_many(documents)
        except AppException as e:
            logger.error("user_invite_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("users_invited", tenant_id=tenant_id, count=len(ids))
        return OperationResult.ok(f"已邀请 {len(ids)} 位成员。")

    async def update_tenant_user(
        self, tenant_id: str, user_id: str, data: TenantUserUpdate
    ) -> OperationResult:
        """Change a member's role, department and position."""
        try:
            user = await self.repo.get(user_id)
            if user is None:
                return OperationResult.fail("用户不存在。")
            if user.tenant_id != tenant_id:
                logger.warning(
                    "tenant_user_mismatch",
                    tenant_id=tenant_id,
                    user_id=user_id,
                    user_tenant_id=user.tenant_id,
                )
                return OperationResult.fail("该用户不属于此租户。")

            await self.repo.update(
                user_id,
                {
                    "role": data.role,
                    "departmentId": data.department_id,
                    "positionId": data.position_id,
                },
            )
        except AppException as e:
            logger.error("tenant_user_update_failed", user_id=user_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("tenant_user_updated", tenant_id=tenant_id, user_id=user_id)
        return OperationResult.ok("成员信息已更新。", id=user_id)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
