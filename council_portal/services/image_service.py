"""
Uploaded image management.

Files live in object storage; ``stored_files`` keeps their metadata so
they can be listed, referenced by id (``thumbnailId``, ``imageId``) and
resolved to a signed URL.

Responsibility: Upload URLs, signed URLs, listing and deletion of stored files
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..db.models import StoredFileModel, new_document_id
from ..db.repositories import StoredFileRepository
from ..exceptions import NotFoundError
from ..storage import StorageClient, get_storage_client
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"


class ImageService:
    """
    Example:
        service = ImageService(session, storage=InMemoryStorageClient())
        upload = await service.generate_upload_url(user_id, "image/png")
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[StorageClient] = None,
        permissions: Optional[PermissionService] = None,
    ):
        self.storage = storage or get_storage_client()
        self.permissions = permissions or PermissionService(session)
        self.files = StoredFileRepository(session)

    async def get_file(self, storage_id: Optional[str]) -> Optional[StoredFileModel]:
        return await self.files.get_by_id(storage_id)

    async def get_url(self, storage_id: Optional[str]) -> Optional[str]:
        """Signed download URL, or None for an unknown id."""
        stored = await self.files.get_by_id(storage_id)
        if stored is None:
            return None
        return self.storage.presign_get(stored.object_key, expires_in=settings.storage.presign_ttl)

    async def list_images(self, user_id: Optional[str]) -> List[Dict[str, Any]]:
        await self.permissions.require_admin(user_id)
        return [
            {
                "id": stored.id,
                "creation_time": stored.creation_time,
                "content_type": stored.content_type,
                "size": stored.size,
                "sha256": stored.sha256,
                "url": self.storage.presign_get(
                    stored.object_key, expires_in=settings.storage.presign_ttl
                ),
            }
            for stored in await self.files.list_images()
        ]

    async def generate_upload_url(
        self, user_id: Optional[str], content_type: Optional[str] = None
    ) -> Dict[str, str]:
        """
        Reserve a storage id and return a signed upload URL for it.

        Returns:
            Dict with ``storage_id`` and ``upload_url``
        """
        admin = await self.permissions.require_admin(user_id)

        storage_id = new_document_id()
        object_key = f"{UPLOAD_PREFIX}/{storage_id}"
        await self.files.insert(
            id=storage_id,
            object_key=object_key,
            content_type=content_type,
            uploaded_by=admin.user_id,
        )
        upload_url = self.storage.presign_put(
            object_key, content_type=content_type, expires_in=settings.storage.presign_ttl
        )
        return {"storage_id": storage_id, "upload_url": upload_url}

    async def delete_file(self, storage_id: str) -> bool:
        """Remove the object and its metadata row; False if unknown."""
        stored = await self.files.get_by_id(storage_id)
        if stored is None:
            return False
        self.storage.delete_object(stored.object_key)
        await self.files.delete(stored)
        logger.info(f"Deleted stored file {storage_id}")
        return True

    async def delete_image(self, user_id: Optional[str], storage_id: str) -> None:
        await self.permissions.require_admin(user_id)
        if not await self.delete_file(storage_id):
            raise NotFoundError("storedFile", storage_id, "画像が見つかりません")
