"""
Frequently asked questions.

Responsibility: FAQ listing grouped by category and admin CRUD
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import FAQItemModel
from ..db.repositories import FAQItemRepository
from ..exceptions import NotFoundError
from ..utils.time_utils import utcnow
from .permission_service import PermissionService

logger = logging.getLogger(__name__)


class FAQService:
    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.items = FAQItemRepository(session)

    async def list_grouped(self) -> Dict[str, List[FAQItemModel]]:
        """Published items keyed by category, each group in display order."""
        grouped: Dict[str, List[FAQItemModel]] = {}
        for item in await self.items.list_ordered(published_only=True):
            grouped.setdefault(item.category, []).append(item)
        return grouped

    async def list_all(self, user_id: Optional[str]) -> List[FAQItemModel]:
        await self.permissions.require_admin(user_id)
        return await self.items.list_ordered(published_only=False)

    async def create_item(self, user_id: Optional[str], **values: Any) -> FAQItemModel:
        admin = await self.permissions.require_admin(user_id)
        item = await self.items.insert(
            created_by=admin.user_id, created_at=utcnow(), **values
        )
        logger.info(f"Created FAQ item {item.id}")
        return item

    async def update_item(self, user_id: Optional[str], item_id: str, **values: Any) -> FAQItemModel:
        admin = await self.permissions.require_admin(user_id)
        item = await self.items.get_by_id(item_id)
        if item is None:
            raise NotFoundError("faqItem", item_id, "FAQが見つかりません")
        return await self.items.patch(
            item, updated_by=admin.user_id, updated_at=utcnow(), **values
        )

    async def delete_item(self, user_id: Optional[str], item_id: str) -> None:
        await self.permissions.require_admin(user_id)
        if not await self.items.delete_by_id(item_id):
            raise NotFoundError("faqItem", item_id, "FAQが見つかりません")
