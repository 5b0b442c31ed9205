"""
Question likes.

Responsibility: Toggle likes and report like state per user and question
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import LikeModel
from ..db.repositories import LikeRepository, QuestionRepository
from ..exceptions import NotFoundError
from .permission_service import PermissionService

logger = logging.getLogger(__name__)


class LikeService:
    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.likes = LikeRepository(session)
        self.questions = QuestionRepository(session)

    async def toggle(self, user_id: Optional[str], question_id: str) -> bool:
        """
        Like or unlike a question.

        Returns:
            True when the question is now liked
        """
        self.permissions.require_user(user_id)

        existing = await self.likes.get_for_user_and_question(user_id, question_id)
        if existing:
            await self.likes.delete(existing)
            return False

        if await self.questions.get_by_id(question_id) is None:
            raise NotFoundError("question", question_id, "質問が見つかりません")
        await self.likes.insert(user_id=user_id, question_id=question_id)
        return True

    async def get_user_likes(self, user_id: Optional[str], question_ids: Iterable[str]) -> List[str]:
        """Ids among ``question_ids`` liked by the caller; empty when anonymous."""
        if not user_id:
            return []
        ids = list(question_ids)
        liked = await self.likes.liked_question_ids(user_id, ids)
        return [question_id for question_id in ids if question_id in liked]

    async def get_count(self, question_id: str) -> int:
        return await self.likes.count_for_question(question_id)

    async def get_user_like(self, user_id: Optional[str], question_id: str) -> Optional[LikeModel]:
        """The caller's like on a question; None when anonymous or not liked."""
        if not user_id:
            return None
        return await self.likes.get_for_user_and_question(user_id, question_id)
