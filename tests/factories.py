"""Record builders shared by the test modules."""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from council_portal.db.repositories import (
    AdminUserRepository,
    CouncilMemberRepository,
    QuestionRepository,
    UserRepository,
)


async def create_user(
    session: AsyncSession,
    email: str,
    role: Optional[str] = None,
    name: Optional[str] = None,
) -> str:
    user = await UserRepository(session).insert(name=name, email=email, password_hash="unused")
    if role:
        await AdminUserRepository(session).grant(user.id, role, granted_by=user.id)
    return user.id


async def create_member(session: AsyncSession, name: str, **values) -> str:
    member = await CouncilMemberRepository(session).insert(name=name, **values)
    return member.id


async def create_question(
    session: AsyncSession,
    title: str,
    council_member_id: str,
    session_date: datetime = datetime(2024, 3, 1),
    **values,
) -> str:
    question = await QuestionRepository(session).insert(
        title=title,
        content=f"{title} content",
        category=values.pop("category", "general"),
        council_member_id=council_member_id,
        session_date=session_date,
        **values,
    )
    return question.id
