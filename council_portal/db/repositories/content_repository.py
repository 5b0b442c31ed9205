"""
Repositories for site content: news, slideshow, FAQ and contact messages.

Responsibility: Data access layer for editorial tables
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select

from council_portal.db.models import (
    ContactMessageModel,
    FAQItemModel,
    NewsModel,
    SlideshowSlideModel,
)
from council_portal.db.repositories.base import DocumentRepository

logger = logging.getLogger(__name__)


class NewsRepository(DocumentRepository[NewsModel]):
    """Repository for ``NewsModel`` records."""

    model = NewsModel

    async def find_by_title(self, title: str) -> Optional[NewsModel]:
        return await self.find_first(title=title)

    async def list_newest(
        self,
        published_only: bool = True,
        category: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[NewsModel]:
        stmt = select(NewsModel).order_by(NewsModel.creation_time.desc(), NewsModel.id.desc())
        if published_only:
            stmt = stmt.where(NewsModel.is_published.is_(True))
        if category:
            stmt = stmt.where(NewsModel.category == category)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def published_categories(self) -> List[str]:
        result = await self.session.execute(
            select(NewsModel.category)
            .where(NewsModel.is_published.is_(True))
            .distinct()
        )
        return sorted(result.scalars().all())

    async def delete_for_author(self, author_id: str) -> int:
        result = await self.session.execute(
            delete(NewsModel).where(NewsModel.author_id == author_id)
        )
        return result.rowcount or 0


class SlideshowSlideRepository(DocumentRepository[SlideshowSlideModel]):
    """Repository for ``SlideshowSlideModel`` records."""

    model = SlideshowSlideModel

    async def list_by_order(self, active_only: bool = True) -> List[SlideshowSlideModel]:
        stmt = select(SlideshowSlideModel).order_by(
            SlideshowSlideModel.order, SlideshowSlideModel.creation_time
        )
        if active_only:
            stmt = stmt.where(SlideshowSlideModel.is_active.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class FAQItemRepository(DocumentRepository[FAQItemModel]):
    """Repository for ``FAQItemModel`` records."""

    model = FAQItemModel

    async def find_by_question(self, question: str) -> Optional[FAQItemModel]:
        return await self.find_first(question=question)

    async def list_ordered(self, published_only: bool = True) -> List[FAQItemModel]:
        stmt = select(FAQItemModel).order_by(
            FAQItemModel.category, FAQItemModel.order, FAQItemModel.creation_time
        )
        if published_only:
            stmt = stmt.where(FAQItemModel.is_published.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ContactMessageRepository(DocumentRepository[ContactMessageModel]):
    """Repository for ``ContactMessageModel`` records."""

    model = ContactMessageModel

    async def list_newest(self, status: Optional[str] = None) -> List[ContactMessageModel]:
        stmt = select(ContactMessageModel).order_by(ContactMessageModel.creation_time.desc())
        if status:
            stmt = stmt.where(ContactMessageModel.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
