"""
Council member API endpoints.

Responsibility: Council member endpoints for API v1
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.council import (
    CouncilMemberCreate,
    CouncilMemberResponse,
    CouncilMemberUpdate,
    QuestionSummaryResponse,
)
from council_portal.db.session import get_db
from council_portal.services.council_member_service import CouncilMemberService
from council_portal.services.question_service import QuestionService

router = APIRouter(prefix="/council-members", tags=["council-members"])


@router.get("", response_model=List[CouncilMemberResponse])
async def list_council_members(
    active_only: bool = Query(False, alias="activeOnly", description="Only active members"),
    db: AsyncSession = Depends(get_db)
):
    """
    List council members ordered by name.

    Args:
        active_only: Only return members with ``isActive``
        db: Database session

    Returns:
        List of CouncilMemberResponse
    """
    return await CouncilMemberService(db).list_members(active_only=active_only)


@router.get("/{member_id}", response_model=CouncilMemberResponse)
async def get_council_member(member_id: str, db: AsyncSession = Depends(get_db)):
    return await CouncilMemberService(db).get_member(member_id)


@router.get("/{member_id}/questions", response_model=List[QuestionSummaryResponse])
async def list_member_questions(
    member_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await QuestionService(db).list_by_council_member(member_id, user_id)


@router.post("", response_model=CouncilMemberResponse, status_code=status.HTTP_201_CREATED)
async def create_council_member(
    request: CouncilMemberCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    member = await CouncilMemberService(db).create_member(user_id, **request.model_dump())
    await db.commit()
    return member


@router.patch("/{member_id}", response_model=CouncilMemberResponse)
async def update_council_member(
    member_id: str,
    request: CouncilMemberUpdate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    member = await CouncilMemberService(db).update_member(
        user_id, member_id, **request.model_dump(exclude_unset=True)
    )
    await db.commit()
    return member


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_council_member(
    member_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    await CouncilMemberService(db).delete_member(user_id, member_id)
    await db.commit()
    return {"message": "議員を削除しました"}
