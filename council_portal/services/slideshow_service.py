"""
Front-page slideshow.

Responsibility: Slide listing and admin CRUD
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import SlideshowSlideModel
from ..db.repositories import SlideshowSlideRepository
from ..exceptions import NotFoundError
from ..storage import StorageClient
from .image_service import ImageService
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

STORAGE_URL_MARKER = "/api/storage/"


class SlideshowService:
    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[StorageClient] = None,
        permissions: Optional[PermissionService] = None,
    ):
        self.permissions = permissions or PermissionService(session)
        self.images = ImageService(session, storage=storage, permissions=self.permissions)
        self.slides = SlideshowSlideRepository(session)

    async def _present(self, slide: SlideshowSlideModel) -> Dict[str, Any]:
        image_url = slide.image_url
        if slide.image_id:
            image_url = await self.images.get_url(slide.image_id) or image_url
        return {
            "id": slide.id,
            "creation_time": slide.creation_time,
            "title": slide.title,
            "description": slide.description,
            "image_url": image_url,
            "image_id": slide.image_id,
            "link_url": slide.link_url,
            "background_color": slide.background_color,
            "order": slide.order,
            "is_active": slide.is_active,
        }

    async def list_active(self) -> List[Dict[str, Any]]:
        return [await self._present(slide) for slide in await self.slides.list_by_order()]

    async def list_all(self, user_id: Optional[str]) -> List[Dict[str, Any]]:
        await self.permissions.require_admin(user_id)
        slides = await self.slides.list_by_order(active_only=False)
        return [await self._present(slide) for slide in slides]

    async def _image_id_from_url(self, image_url: Optional[str]) -> Optional[str]:
        """Stored file id named by a ``/api/storage/<id>`` URL, if it exists."""
        if not image_url or STORAGE_URL_MARKER not in image_url:
            return None
        candidate = image_url.rstrip("/").rsplit("/", 1)[-1]
        if candidate and await self.images.get_file(candidate):
            return candidate
        return None

    async def create_slide(self, user_id: Optional[str], **values: Any) -> SlideshowSlideModel:
        admin = await self.permissions.require_admin(user_id)
        if not values.get("image_id"):
            values["image_id"] = await self._image_id_from_url(values.get("image_url"))

        slide = await self.slides.insert(created_by=admin.user_id, **values)
        logger.info(f"Created slide {slide.id}")
        return slide

    async def update_slide(
        self, user_id: Optional[str], slide_id: str, **values: Any
    ) -> SlideshowSlideModel:
        admin = await self.permissions.require_admin(user_id)
        slide = await self.slides.get_by_id(slide_id)
        if slide is None:
            raise NotFoundError("slideshowSlide", slide_id, "スライドが見つかりません")

        if "image_url" in values and not values.get("image_id"):
            values["image_id"] = await self._image_id_from_url(values["image_url"])
        return await self.slides.patch(slide, updated_by=admin.user_id, **values)

    async def delete_slide(self, user_id: Optional[str], slide_id: str) -> None:
        await self.permissions.require_admin(user_id)
        if not await self.slides.delete_by_id(slide_id):
            raise NotFoundError("slideshowSlide", slide_id, "スライドが見つかりません")

    async def generate_upload_url(
        self, user_id: Optional[str], content_type: Optional[str] = None
    ) -> Dict[str, str]:
        return await self.images.generate_upload_url(user_id, content_type)

    async def get_image_url(self, storage_id: str) -> Optional[str]:
        return await self.images.get_url(storage_id)
