"""
Slideshow API endpoints.

Responsibility: Front-page slideshow endpoints for API v1
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id, get_storage
from api.v1.schemas.common import IdResponse, MessageResponse, UploadUrlResponse, UrlResponse
from api.v1.schemas.content import SlideResponse, SlideWrite, UploadUrlRequest
from council_portal.db.session import get_db
from council_portal.services.slideshow_service import SlideshowService
from council_portal.storage import StorageClient

router = APIRouter(prefix="/slideshow", tags=["slideshow"])


@router.get("", response_model=List[SlideResponse])
async def list_slides(
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """Active slides in display order."""
    return await SlideshowService(db, storage=storage).list_active()


@router.get("/all", response_model=List[SlideResponse])
async def list_all_slides(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    return await SlideshowService(db, storage=storage).list_all(user_id)


@router.get("/images/{storage_id}", response_model=UrlResponse)
async def get_image_url(
    storage_id: str,
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
) -> dict:
    return {"url": await SlideshowService(db, storage=storage).get_image_url(storage_id)}


@router.post("/upload-url", response_model=UploadUrlResponse)
async def generate_upload_url(
    request: UploadUrlRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    upload = await SlideshowService(db, storage=storage).generate_upload_url(
        user_id, request.content_type
    )
    await db.commit()
    return upload


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def create_slide(
    request: SlideWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Create a slide (admin).

    An ``imageUrl`` of the form ``.../api/storage/<id>`` naming a stored
    file also sets ``imageId``.
    """
    slide = await SlideshowService(db).create_slide(user_id, **request.model_dump())
    await db.commit()
    return {"id": slide.id}


@router.put("/{slide_id}", response_model=IdResponse)
async def update_slide(
    slide_id: str,
    request: SlideWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    slide = await SlideshowService(db).update_slide(user_id, slide_id, **request.model_dump())
    await db.commit()
    return {"id": slide.id}


@router.delete("/{slide_id}", response_model=MessageResponse)
async def delete_slide(
    slide_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    await SlideshowService(db).delete_slide(user_id, slide_id)
    await db.commit()
    return {"message": "スライドを削除しました"}
