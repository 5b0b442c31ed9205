"""
Permission gate for role-restricted operations.

Roles come only from the ``admin_users`` table: ``admin``, ``superAdmin``,
or the default ``user`` when the caller has no row. Queries degrade
silently for anonymous callers; ``require_*`` raise before any side effect.

Responsibility: Resolve caller roles and enforce admin/superAdmin checks
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import AdminUserModel
from ..db.repositories import AdminUserRepository
from ..exceptions import AuthenticationRequiredError, PermissionDeniedError

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "superAdmin"

ADMIN_ROLES = frozenset({ROLE_ADMIN, ROLE_SUPER_ADMIN})
ALL_ROLES = frozenset({ROLE_USER, ROLE_ADMIN, ROLE_SUPER_ADMIN})


class PermissionService:
    """
    Capability resolution for a caller identity.

    Example:
        gate = PermissionService(session)
        admin = await gate.require_admin(user_id)
    """

    def __init__(self, session: AsyncSession):
        self.admins = AdminUserRepository(session)

    async def get_admin_record(self, user_id: Optional[str]) -> Optional[AdminUserModel]:
        return await self.admins.get_by_user_id(user_id)

    async def get_role(self, user_id: Optional[str]) -> str:
        """Role of the caller; ``user`` when anonymous or without a role row."""
        admin = await self.get_admin_record(user_id)
        return admin.role if admin else ROLE_USER

    async def is_admin(self, user_id: Optional[str]) -> bool:
        return await self.get_role(user_id) in ADMIN_ROLES

    async def is_super_admin(self, user_id: Optional[str]) -> bool:
        return await self.get_role(user_id) == ROLE_SUPER_ADMIN

    def require_user(self, user_id: Optional[str]) -> str:
        """Return the caller id or raise for anonymous callers."""
        if not user_id:
            raise AuthenticationRequiredError()
        return user_id

    async def require_admin(self, user_id: Optional[str]) -> AdminUserModel:
        """
        Require role admin or superAdmin.

        Returns:
            The caller's AdminUserModel row

        Raises:
            AuthenticationRequiredError: anonymous caller
            PermissionDeniedError: caller has the default role
        """
        self.require_user(user_id)
        admin = await self.get_admin_record(user_id)
        if admin is None or admin.role not in ADMIN_ROLES:
            logger.warning(f"Admin permission denied for user {user_id}")
            raise PermissionDeniedError("編集者権限以上が必要です", required_role=ROLE_ADMIN)
        return admin

    async def require_super_admin(self, user_id: Optional[str]) -> AdminUserModel:
        """Require role superAdmin; same contract as ``require_admin``."""
        self.require_user(user_id)
        admin = await self.get_admin_record(user_id)
        if admin is None or admin.role != ROLE_SUPER_ADMIN:
            logger.warning(f"SuperAdmin permission denied for user {user_id}")
            raise PermissionDeniedError("運営者権限が必要です", required_role=ROLE_SUPER_ADMIN)
        return admin
