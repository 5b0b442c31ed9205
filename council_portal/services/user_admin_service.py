"""
User administration for the operator (superAdmin) role.

Responsibility: User listing, role changes, profile edits, account deletion
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import UserModel
from ..db.repositories import (
    AdminUserRepository,
    LikeRepository,
    NewsRepository,
    SessionTokenRepository,
    UserRepository,
)
from ..exceptions import NotFoundError, PermissionDeniedError, ValidationError
from ..utils.time_utils import utcnow
from .permission_service import ALL_ROLES, ROLE_SUPER_ADMIN, ROLE_USER, PermissionService

logger = logging.getLogger(__name__)


class UserAdminService:
    """
    Example:
        service = UserAdminService(session)
        await service.change_user_role(operator_id, target_id, "admin")
    """

    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.session = session
        self.permissions = permissions or PermissionService(session)
        self.users = UserRepository(session)
        self.admins = AdminUserRepository(session)

    async def get_current_user(self, user_id: Optional[str]) -> Optional[UserModel]:
        return await self.users.get_by_id(user_id)

    async def list_users(self, user_id: Optional[str]) -> List[Dict[str, Any]]:
        """Every user with their effective role."""
        await self.permissions.require_super_admin(user_id)

        roles = {admin.user_id: admin.role for admin in await self.admins.list_all()}
        return [
            {
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "role": roles.get(user.id, ROLE_USER),
                "creation_time": user.creation_time,
            }
            for user in await self.users.list_all()
        ]

    async def change_user_role(self, user_id: Optional[str], target_user_id: str, role: str) -> str:
        """
        Set a user's role; ``user`` removes the role row.

        Raises:
            ValidationError: unknown role
            PermissionDeniedError: the operator demoting themself
        """
        operator = await self.permissions.require_super_admin(user_id)

        if role not in ALL_ROLES:
            raise ValidationError(f"無効なロールです: {role}")
        if target_user_id == user_id and role != ROLE_SUPER_ADMIN:
            raise PermissionDeniedError("自分の運営者権限は削除できません")

        existing = await self.admins.get_by_user_id(target_user_id)
        if role == ROLE_USER:
            if existing:
                await self.admins.delete(existing)
        elif existing:
            await self.admins.patch(existing, role=role)
        else:
            await self.admins.grant(target_user_id, role, granted_by=operator.user_id)

        logger.info(f"User {target_user_id} role set to {role} by {user_id}")
        return target_user_id

    async def make_first_user_super_admin(self, user_id: Optional[str]) -> bool:
        """Promote the caller when no superAdmin exists yet."""
        self.permissions.require_user(user_id)

        if await self.admins.list_by_role(ROLE_SUPER_ADMIN):
            return False

        existing = await self.admins.get_by_user_id(user_id)
        if existing:
            await self.admins.patch(existing, role=ROLE_SUPER_ADMIN, granted_at=utcnow())
        else:
            await self.admins.grant(user_id, ROLE_SUPER_ADMIN, granted_by=user_id)
        logger.warning(f"Bootstrapped first superAdmin: {user_id}")
        return True

    async def update_user(
        self,
        user_id: Optional[str],
        target_user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> str:
        await self.permissions.require_super_admin(user_id)

        user = await self.users.get_by_id(target_user_id)
        if user is None:
            raise NotFoundError("user", target_user_id, "ユーザーが見つかりません")

        values: Dict[str, Any] = {}
        if name is not None:
            values["name"] = name
        if email is not None:
            values["email"] = email.strip().lower()
        if values:
            await self.users.patch(user, **values)
        return target_user_id

    async def delete_user(self, user_id: Optional[str], target_user_id: str) -> str:
        """
        Delete an account with its role row, likes, authored news and tokens.

        Raises:
            PermissionDeniedError: the operator deleting themself
        """
        await self.permissions.require_super_admin(user_id)

        if target_user_id == user_id:
            raise PermissionDeniedError("自分のアカウントは削除できません")

        existing = await self.admins.get_by_user_id(target_user_id)
        if existing:
            await self.admins.delete(existing)

        likes = await LikeRepository(self.session).delete_for_user(target_user_id)
        news = await NewsRepository(self.session).delete_for_author(target_user_id)
        await SessionTokenRepository(self.session).delete_for_user(target_user_id)
        await self.users.delete_by_id(target_user_id)

        logger.warning(
            f"Deleted user {target_user_id} ({likes} likes, {news} news) by {user_id}"
        )
        return target_user_id
