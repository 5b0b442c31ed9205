"""
Council member management.

Responsibility: Council member listing and admin CRUD
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import CouncilMemberModel
from ..db.repositories import CouncilMemberRepository
from ..exceptions import NotFoundError
from .permission_service import PermissionService

logger = logging.getLogger(__name__)


class CouncilMemberService:
    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.members = CouncilMemberRepository(session)

    async def list_members(self, active_only: bool = False) -> List[CouncilMemberModel]:
        return await self.members.list_members(active_only=active_only)

    async def get_member(self, member_id: str) -> CouncilMemberModel:
        member = await self.members.get_by_id(member_id)
        if member is None:
            raise NotFoundError("councilMember", member_id, "議員が見つかりません")
        return member

    async def create_member(self, user_id: Optional[str], **values: Any) -> CouncilMemberModel:
        await self.permissions.require_admin(user_id)
        values.setdefault("is_active", True)
        member = await self.members.insert(**values)
        logger.info(f"Created council member {member.id} ({member.name})")
        return member

    async def update_member(
        self, user_id: Optional[str], member_id: str, **values: Any
    ) -> CouncilMemberModel:
        await self.permissions.require_admin(user_id)
        member = await self.get_member(member_id)
        return await self.members.patch(member, **values)

    async def delete_member(self, user_id: Optional[str], member_id: str) -> None:
        await self.permissions.require_admin(user_id)
        member = await self.get_member(member_id)
        await self.members.delete(member)
        logger.info(f"Deleted council member {member_id}")
