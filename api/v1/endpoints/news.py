"""
News API endpoints.

Responsibility: News endpoints for API v1
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id, get_storage
from api.v1.schemas.common import IdResponse, MessageResponse, UploadUrlResponse
from api.v1.schemas.content import NewsResponse, NewsWrite, UploadUrlRequest
from council_portal.db.session import get_db
from council_portal.services.news_service import NewsService
from council_portal.storage import StorageClient

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=List[NewsResponse])
async def list_news(
    category: Optional[str] = Query(None, description="Filter by category"),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """
    List published news, newest first.

    Args:
        category: Filter by category
        limit: Maximum results (1-100)
        db: Database session
        storage: Object storage for thumbnail URLs

    Returns:
        List of NewsResponse
    """
    return await NewsService(db, storage=storage).list_published(category=category, limit=limit)


@router.get("/all", response_model=List[NewsResponse])
async def list_all_news(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """All news including drafts (admin)."""
    return await NewsService(db, storage=storage).list_all(user_id)


@router.get("/recent", response_model=List[NewsResponse])
async def get_recent_news(
    limit: int = Query(5, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    return await NewsService(db, storage=storage).get_recent(limit=limit)


@router.get("/categories", response_model=List[str])
async def get_news_categories(db: AsyncSession = Depends(get_db)):
    return await NewsService(db).get_categories()


@router.post("/thumbnail-upload-url", response_model=UploadUrlResponse)
async def generate_thumbnail_upload_url(
    request: UploadUrlRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    upload = await NewsService(db, storage=storage).generate_thumbnail_upload_url(
        user_id, request.content_type
    )
    await db.commit()
    return upload


@router.get("/{news_id}", response_model=NewsResponse)
async def get_news(
    news_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """
    Get a news article.

    Raises:
        NotFoundError: 404 if missing, or a draft requested by a non-admin
    """
    return await NewsService(db, storage=storage).get_news(news_id, user_id)


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def create_news(
    request: NewsWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    item = await NewsService(db).create_news(user_id, **request.model_dump())
    await db.commit()
    return {"id": item.id}


@router.put("/{news_id}", response_model=IdResponse)
async def update_news(
    news_id: str,
    request: NewsWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    item = await NewsService(db).update_news(user_id, news_id, **request.model_dump())
    await db.commit()
    return {"id": item.id}


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(
    news_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
) -> dict:
    """Delete an article and its stored thumbnail (admin)."""
    await NewsService(db, storage=storage).delete_news(user_id, news_id)
    await db.commit()
    return {"message": "お知らせを削除しました"}
