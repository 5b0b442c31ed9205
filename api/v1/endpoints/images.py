"""
Image management API endpoints.

Responsibility: Stored image endpoints for API v1
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id, get_storage
from api.v1.schemas.common import MessageResponse, UploadUrlResponse
from api.v1.schemas.content import ImageResponse, UploadUrlRequest
from council_portal.db.session import get_db
from council_portal.services.image_service import ImageService
from council_portal.storage import StorageClient

router = APIRouter(prefix="/images", tags=["images"])


@router.get("", response_model=List[ImageResponse])
async def list_images(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """Stored images newest first, with signed URLs (admin)."""
    return await ImageService(db, storage=storage).list_images(user_id)


@router.post("/upload-url", response_model=UploadUrlResponse)
async def generate_upload_url(
    request: UploadUrlRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    upload = await ImageService(db, storage=storage).generate_upload_url(
        user_id, request.content_type
    )
    await db.commit()
    return upload


@router.delete("/{storage_id}", response_model=MessageResponse)
async def delete_image(
    storage_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
) -> dict:
    await ImageService(db, storage=storage).delete_image(user_id, storage_id)
    await db.commit()
    return {"message": "画像を削除しました"}
