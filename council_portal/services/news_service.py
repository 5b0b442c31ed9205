"""
News articles.

Drafts are visible to admins only. When an article has a stored
thumbnail (``thumbnail_id``) its URL is resolved from storage and takes
precedence over ``thumbnail_url``.

Responsibility: News listing and admin CRUD
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import NewsModel
from ..db.repositories import NewsRepository, UserRepository
from ..exceptions import NotFoundError
from ..storage import StorageClient
from ..utils.time_utils import utcnow
from .image_service import ImageService
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "匿名"


class NewsService:
    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[StorageClient] = None,
        permissions: Optional[PermissionService] = None,
    ):
        self.permissions = permissions or PermissionService(session)
        self.images = ImageService(session, storage=storage, permissions=self.permissions)
        self.news = NewsRepository(session)
        self.users = UserRepository(session)

    async def _present(self, item: NewsModel) -> Dict[str, Any]:
        author = await self.users.get_by_id(item.author_id)
        thumbnail_url = item.thumbnail_url
        if item.thumbnail_id:
            thumbnail_url = await self.images.get_url(item.thumbnail_id)

        return {
            "id": item.id,
            "creation_time": item.creation_time,
            "title": item.title,
            "content": item.content,
            "category": item.category,
            "is_published": item.is_published,
            "publish_date": item.publish_date,
            "author_id": item.author_id,
            "thumbnail_id": item.thumbnail_id,
            "thumbnail_url": thumbnail_url,
            "author": (
                {"name": author.name or ANONYMOUS_AUTHOR, "email": author.email}
                if author else None
            ),
        }

    async def list_published(
        self, category: Optional[str] = None, limit: int = 20
    ) -> List[Dict[str, Any]]:
        items = await self.news.list_newest(published_only=True, category=category, limit=limit)
        return [await self._present(item) for item in items]

    async def list_all(self, user_id: Optional[str]) -> List[Dict[str, Any]]:
        await self.permissions.require_admin(user_id)
        items = await self.news.list_newest(published_only=False)
        return [await self._present(item) for item in items]

    async def get_recent(self, limit: int = 5) -> List[Dict[str, Any]]:
        return await self.list_published(limit=limit)

    async def get_news(self, news_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Single article. Drafts look missing to non-admin callers.

        Raises:
            NotFoundError: unknown id, or a draft requested by a non-admin
        """
        item = await self.news.get_by_id(news_id)
        if item is None or (not item.is_published and not await self.permissions.is_admin(user_id)):
            raise NotFoundError("news", news_id, "お知らせが見つかりません")
        return await self._present(item)

    async def get_categories(self) -> List[str]:
        return await self.news.published_categories()

    async def create_news(
        self,
        user_id: Optional[str],
        title: str,
        content: str,
        category: str,
        is_published: bool,
        thumbnail_url: Optional[str] = None,
        thumbnail_id: Optional[str] = None,
    ) -> NewsModel:
        admin = await self.permissions.require_admin(user_id)
        item = await self.news.insert(
            title=title,
            content=content,
            category=category,
            is_published=is_published,
            publish_date=utcnow(),
            author_id=admin.user_id,
            thumbnail_url=thumbnail_url,
            thumbnail_id=thumbnail_id,
        )
        logger.info(f"Created news {item.id} (published={is_published})")
        return item

    async def update_news(self, user_id: Optional[str], news_id: str, **values: Any) -> NewsModel:
        await self.permissions.require_admin(user_id)
        item = await self.news.get_by_id(news_id)
        if item is None:
            raise NotFoundError("news", news_id, "お知らせが見つかりません")
        return await self.news.patch(item, **values)

    async def delete_news(self, user_id: Optional[str], news_id: str) -> None:
        """Delete an article and its stored thumbnail."""
        await self.permissions.require_admin(user_id)
        item = await self.news.get_by_id(news_id)
        if item is None:
            raise NotFoundError("news", news_id, "お知らせが見つかりません")

        if item.thumbnail_id:
            await self.images.delete_file(item.thumbnail_id)
        await self.news.delete(item)
        logger.info(f"Deleted news {news_id}")

    async def generate_thumbnail_upload_url(
        self, user_id: Optional[str], content_type: Optional[str] = None
    ) -> Dict[str, str]:
        return await self.images.generate_upload_url(user_id, content_type)
