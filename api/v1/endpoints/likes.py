"""
Like API endpoints.

Responsibility: Question like endpoints for API v1
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.council import (
    LikeCountResponse,
    LikeStateResponse,
    LikeToggleResponse,
    UserLikesRequest,
)
from council_portal.db.session import get_db
from council_portal.services.like_service import LikeService

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("/{question_id}/toggle", response_model=LikeToggleResponse)
async def toggle_like(
    question_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Like the question, or remove the caller's like if present."""
    liked = await LikeService(db).toggle(user_id, question_id)
    await db.commit()
    return {"liked": liked}


@router.post("/mine", response_model=List[str])
async def get_user_likes(
    request: UserLikesRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Ids among ``questionIds`` the caller has liked."""
    return await LikeService(db).get_user_likes(user_id, request.question_ids)


@router.get("/{question_id}/count", response_model=LikeCountResponse)
async def get_like_count(question_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    return {"question_id": question_id, "count": await LikeService(db).get_count(question_id)}


@router.get("/{question_id}/mine", response_model=LikeStateResponse)
async def get_user_like(
    question_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Whether the caller has liked the question; false when anonymous."""
    like = await LikeService(db).get_user_like(user_id, question_id)
    return {"question_id": question_id, "liked": like is not None}
