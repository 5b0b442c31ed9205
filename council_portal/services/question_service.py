"""
Questions and responses.

Listings are enriched with the member's name and party, the response and
like counts, and whether the caller liked the question.

Responsibility: Question/response queries, statistics and admin edits
"""

import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import QuestionModel, ResponseModel
from ..db.repositories import (
    CouncilMemberRepository,
    LikeRepository,
    QuestionRepository,
    ResponseRepository,
)
from ..exceptions import NotFoundError, ValidationError
from ..utils.time_utils import utcnow
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

UNKNOWN_MEMBER_NAME = "不明"
POPULAR_WINDOW = 50
TOP_LIKED_WINDOW = 100
QUESTION_STATUSES = ("pending", "answered", "archived")


class QuestionService:
    """
    Example:
        service = QuestionService(session)
        page = await service.list_paginated(page=2, limit=20, user_id=user_id)
    """

    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.members = CouncilMemberRepository(session)
        self.questions = QuestionRepository(session)
        self.responses = ResponseRepository(session)
        self.likes = LikeRepository(session)

    async def _with_details(
        self,
        questions: List[QuestionModel],
        user_id: Optional[str],
        include_member: bool = True,
    ) -> List[Dict[str, Any]]:
        ids = [question.id for question in questions]
        response_counts = await self.responses.counts_for_questions(ids)
        like_counts = await self.likes.counts_for_questions(ids)
        liked = await self.likes.liked_question_ids(user_id, ids) if user_id else set()
        members = (
            await self.members.get_many(q.council_member_id for q in questions)
            if include_member else {}
        )

        details = []
        for question in questions:
            item = question_to_dict(question)
            if include_member:
                member = members.get(question.council_member_id)
                item["member_name"] = member.name if member else UNKNOWN_MEMBER_NAME
                item["member_party"] = member.party if member else None
            item["response_count"] = response_counts.get(question.id, 0)
            item["like_count"] = like_counts.get(question.id, 0)
            item["is_liked"] = question.id in liked
            details.append(item)
        return details

    # MARK: - Queries

    async def list_questions(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._with_details(await self.questions.list_by_session_date(), user_id)

    async def list_by_council_member(
        self, council_member_id: str, user_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        questions = await self.questions.list_by_session_date(council_member_id=council_member_id)
        return await self._with_details(questions, user_id, include_member=False)

    async def get_question(self, question_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        """Question with member, responses and like state."""
        question = await self.questions.get_by_id(question_id)
        if question is None:
            raise NotFoundError("question", question_id, "質問が見つかりません")

        member = await self.members.get_by_id(question.council_member_id)
        responses = await self.responses.list_for_question(question.id)
        item = question_to_dict(question)
        item["member_name"] = member.name if member else UNKNOWN_MEMBER_NAME
        item["member_party"] = member.party if member else None
        item["responses"] = responses
        item["like_count"] = await self.likes.count_for_question(question.id)
        item["is_liked"] = bool(
            user_id and await self.likes.get_for_user_and_question(user_id, question.id)
        )
        return item

    async def get_recent(self, limit: int = 5, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        questions = await self.questions.list_by_session_date(limit=limit)
        return await self._with_details(questions, user_id)

    async def get_popular(self, limit: int = 5, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Most liked among the latest questions."""
        return await self._most_liked(POPULAR_WINDOW, limit, user_id)

    async def get_top_liked(self, limit: int = 10, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._most_liked(TOP_LIKED_WINDOW, limit, user_id)

    async def _most_liked(self, window: int, limit: int, user_id: Optional[str]) -> List[Dict[str, Any]]:
        questions = await self.questions.list_by_session_date(limit=window)
        details = await self._with_details(questions, user_id)
        # Stable sort keeps session-date order among ties
        details.sort(key=lambda item: item["like_count"], reverse=True)
        return details[:limit]

    async def list_paginated(
        self, page: int = 1, limit: int = 20, user_id: Optional[str] = None
    ) -> Dict[str, Any]:
        page = max(page, 1)
        total_count = await self.questions.count()
        questions = await self.questions.list_by_session_date(
            limit=limit, offset=(page - 1) * limit
        )
        return {
            "questions": await self._with_details(questions, user_id),
            "total_count": total_count,
            "current_page": page,
            "total_pages": math.ceil(total_count / limit) if limit else 0,
        }

    async def get_stats(self) -> Dict[str, int]:
        return {
            "total_questions": await self.questions.count(),
            "total_responses": await self.responses.count(),
            "total_members": await self.members.count(is_active=True),
            "answered_questions": await self.questions.count(status="answered"),
        }

    async def get_categories(self) -> List[Dict[str, Any]]:
        """Categories with question counts, most used first."""
        counts = await self.questions.category_counts()
        return [
            {"name": name, "count": count}
            for name, count in sorted(counts.items(), key=lambda item: item[1], reverse=True)
        ]

    async def get_session_numbers(self) -> List[str]:
        return await self.questions.session_numbers()

    # MARK: - Admin edits

    async def create_question(self, user_id: Optional[str], **values: Any) -> QuestionModel:
        await self.permissions.require_admin(user_id)
        if await self.members.get_by_id(values.get("council_member_id")) is None:
            raise ValidationError("指定された議員が存在しません")

        values["status"] = "pending"
        question = await self.questions.insert(**values)
        logger.info(f"Created question {question.id}")
        return question

    async def update_question(
        self, user_id: Optional[str], question_id: str, **values: Any
    ) -> QuestionModel:
        await self.permissions.require_admin(user_id)
        if "status" in values and values["status"] not in QUESTION_STATUSES:
            raise ValidationError(f"無効なステータスです: {values['status']}")

        question = await self.questions.get_by_id(question_id)
        if question is None:
            raise NotFoundError("question", question_id, "質問が見つかりません")
        return await self.questions.patch(question, **values)

    async def remove_question(self, user_id: Optional[str], question_id: str) -> None:
        await self.permissions.require_admin(user_id)
        if not await self.questions.delete_by_id(question_id):
            raise NotFoundError("question", question_id, "質問が見つかりません")
        logger.info(f"Deleted question {question_id}")

    # MARK: - Responses

    async def get_responses(self, question_id: str) -> List[ResponseModel]:
        return await self.responses.list_for_question(question_id)

    async def add_response(
        self, user_id: Optional[str], question_id: str, **values: Any
    ) -> ResponseModel:
        """Record an answer and mark the question answered."""
        await self.permissions.require_admin(user_id)
        question = await self.questions.get_by_id(question_id)
        if question is None:
            raise NotFoundError("question", question_id, "質問が見つかりません")

        response = await self.responses.insert(
            question_id=question.id, response_date=utcnow(), **values
        )
        await self.questions.patch(question, status="answered")
        return response

    async def delete_response(self, user_id: Optional[str], response_id: str) -> None:
        await self.permissions.require_admin(user_id)
        if not await self.responses.delete_by_id(response_id):
            raise NotFoundError("response", response_id, "回答が見つかりません")


def question_to_dict(question: QuestionModel) -> Dict[str, Any]:
    return {
        "id": question.id,
        "creation_time": question.creation_time,
        "title": question.title,
        "content": question.content,
        "category": question.category,
        "council_member_id": question.council_member_id,
        "session_date": question.session_date,
        "session_number": question.session_number,
        "status": question.status,
        "youtube_url": question.youtube_url,
        "document_url": question.document_url,
    }
