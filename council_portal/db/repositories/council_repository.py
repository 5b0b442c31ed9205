"""
Repositories for council members, questions, responses and likes.

Responsibility: Data access layer for the council Q&A tables
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, select

from council_portal.db.models import (
    CouncilMemberModel,
    LikeModel,
    QuestionModel,
    ResponseModel,
)
from council_portal.db.repositories.base import DocumentRepository

logger = logging.getLogger(__name__)


class CouncilMemberRepository(DocumentRepository[CouncilMemberModel]):
    """Repository for ``CouncilMemberModel`` records."""

    model = CouncilMemberModel

    async def find_by_name(self, name: str) -> Optional[CouncilMemberModel]:
        """First member with exactly this name (the natural key)."""
        return await self.find_first(name=name)

    async def list_members(self, active_only: bool = False) -> List[CouncilMemberModel]:
        stmt = select(CouncilMemberModel).order_by(CouncilMemberModel.name)
        if active_only:
            stmt = stmt.where(CouncilMemberModel.is_active.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_many(self, member_ids: Iterable[str]) -> Dict[str, CouncilMemberModel]:
        ids = {member_id for member_id in member_ids if member_id}
        if not ids:
            return {}
        result = await self.session.execute(
            select(CouncilMemberModel).where(CouncilMemberModel.id.in_(ids))
        )
        return {member.id: member for member in result.scalars().all()}


class QuestionRepository(DocumentRepository[QuestionModel]):
    """Repository for ``QuestionModel`` records."""

    model = QuestionModel

    async def find_by_title(self, title: str) -> Optional[QuestionModel]:
        return await self.find_first(title=title)

    async def find_by_title_and_member(
        self,
        title: str,
        council_member_id: str
    ) -> Optional[QuestionModel]:
        return await self.find_first(title=title, council_member_id=council_member_id)

    async def list_by_session_date(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        council_member_id: Optional[str] = None
    ) -> List[QuestionModel]:
        """Questions newest session first."""
        stmt = select(QuestionModel).order_by(
            QuestionModel.session_date.desc(),
            QuestionModel.creation_time.desc()
        )
        if council_member_id:
            stmt = stmt.where(QuestionModel.council_member_id == council_member_id)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def category_counts(self) -> Dict[str, int]:
        result = await self.session.execute(
            select(QuestionModel.category, func.count())
            .group_by(QuestionModel.category)
        )
        return {category: int(count) for category, count in result.all()}

    async def session_numbers(self) -> List[str]:
        result = await self.session.execute(
            select(QuestionModel.session_number)
            .where(QuestionModel.session_number.isnot(None))
            .where(QuestionModel.session_number != "")
            .distinct()
        )
        return sorted(value for value in result.scalars().all())


class ResponseRepository(DocumentRepository[ResponseModel]):
    """Repository for ``ResponseModel`` records."""

    model = ResponseModel

    async def list_for_question(self, question_id: str) -> List[ResponseModel]:
        return await self.find_all(question_id=question_id)

    async def counts_for_questions(self, question_ids: Iterable[str]) -> Dict[str, int]:
        ids = list(question_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(ResponseModel.question_id, func.count())
            .where(ResponseModel.question_id.in_(ids))
            .group_by(ResponseModel.question_id)
        )
        return {question_id: int(count) for question_id, count in result.all()}


class LikeRepository(DocumentRepository[LikeModel]):
    """Repository for ``LikeModel`` records."""

    model = LikeModel

    async def get_for_user_and_question(
        self,
        user_id: str,
        question_id: str
    ) -> Optional[LikeModel]:
        return await self.find_first(user_id=user_id, question_id=question_id)

    async def list_for_user(self, user_id: str) -> List[LikeModel]:
        return await self.find_all(user_id=user_id)

    async def count_for_question(self, question_id: str) -> int:
        return await self.count(question_id=question_id)

    async def counts_for_questions(self, question_ids: Iterable[str]) -> Dict[str, int]:
        ids = list(question_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(LikeModel.question_id, func.count())
            .where(LikeModel.question_id.in_(ids))
            .group_by(LikeModel.question_id)
        )
        return {question_id: int(count) for question_id, count in result.all()}

    async def liked_question_ids(
        self,
        user_id: str,
        question_ids: Iterable[str]
    ) -> set[str]:
        ids = list(question_ids)
        if not ids:
            return set()
        result = await self.session.execute(
            select(LikeModel.question_id)
            .where(LikeModel.user_id == user_id)
            .where(LikeModel.question_id.in_(ids))
        )
        return {question_id for question_id in result.scalars().all() if question_id}

    async def delete_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(LikeModel).where(LikeModel.user_id == user_id)
        )
        return result.rowcount or 0
