"""
Questions API endpoints.

Provides REST endpoints for council questions and their responses.

Responsibility: Question and response endpoints for API v1
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.council import (
    CategoryCountResponse,
    QuestionCreate,
    QuestionDetailResponse,
    QuestionPageResponse,
    QuestionResponse,
    QuestionStatsResponse,
    QuestionSummaryResponse,
    QuestionUpdate,
    ResponseCreate,
    ResponseResponse,
)
from council_portal.db.session import get_db
from council_portal.services.question_service import QuestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=List[QuestionSummaryResponse])
async def list_questions(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    List all questions, newest session first.

    Args:
        user_id: Caller, used for ``isLiked``
        db: Database session

    Returns:
        Questions with member name/party, response and like counts
    """
    return await QuestionService(db).list_questions(user_id)


@router.get("/paginated", response_model=QuestionPageResponse)
async def list_questions_paginated(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await QuestionService(db).list_paginated(page=page, limit=limit, user_id=user_id)


@router.get("/recent", response_model=List[QuestionSummaryResponse])
async def get_recent_questions(
    limit: int = Query(5, ge=1, le=50),
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await QuestionService(db).get_recent(limit=limit, user_id=user_id)


@router.get("/popular", response_model=List[QuestionSummaryResponse])
async def get_popular_questions(
    limit: int = Query(5, ge=1, le=50),
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Most liked among the latest 50 questions."""
    return await QuestionService(db).get_popular(limit=limit, user_id=user_id)


@router.get("/top-liked", response_model=List[QuestionSummaryResponse])
async def get_top_liked_questions(
    limit: int = Query(10, ge=1, le=100),
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Most liked among the latest 100 questions."""
    return await QuestionService(db).get_top_liked(limit=limit, user_id=user_id)


@router.get("/stats", response_model=QuestionStatsResponse)
async def get_question_stats(db: AsyncSession = Depends(get_db)):
    return await QuestionService(db).get_stats()


@router.get("/categories", response_model=List[CategoryCountResponse])
async def get_question_categories(db: AsyncSession = Depends(get_db)):
    return await QuestionService(db).get_categories()


@router.get("/session-numbers", response_model=List[str])
async def get_session_numbers(db: AsyncSession = Depends(get_db)):
    return await QuestionService(db).get_session_numbers()


@router.get("/{question_id}", response_model=QuestionDetailResponse)
async def get_question(
    question_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Get a question with its responses.

    Raises:
        NotFoundError: 404 if the question does not exist
    """
    return await QuestionService(db).get_question(question_id, user_id)


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    request: QuestionCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    question = await QuestionService(db).create_question(user_id, **request.model_dump())
    await db.commit()
    return question


@router.patch("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    request: QuestionUpdate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    question = await QuestionService(db).update_question(
        user_id, question_id, **request.model_dump(exclude_unset=True)
    )
    await db.commit()
    return question


@router.delete("/{question_id}", response_model=MessageResponse)
async def delete_question(
    question_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    await QuestionService(db).remove_question(user_id, question_id)
    await db.commit()
    return {"message": "質問を削除しました"}


# MARK: Responses

@router.get("/{question_id}/responses", response_model=List[ResponseResponse])
async def list_responses(question_id: str, db: AsyncSession = Depends(get_db)):
    return await QuestionService(db).get_responses(question_id)


@router.post(
    "/{question_id}/responses",
    response_model=ResponseResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_response(
    question_id: str,
    request: ResponseCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Add an official response; the question becomes ``answered``."""
    response = await QuestionService(db).add_response(user_id, question_id, **request.model_dump())
    await db.commit()
    logger.info(f"Added response {response.id} to question {question_id}")
    return response


@router.delete("/responses/{response_id}", response_model=MessageResponse)
async def delete_response(
    response_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    await QuestionService(db).delete_response(user_id, response_id)
    await db.commit()
    return {"message": "回答を削除しました"}
