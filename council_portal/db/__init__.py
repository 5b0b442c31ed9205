"""
Database package for Council Portal.

Provides ORM models, session management, and repository pattern
for data persistence.
"""

from .models import (
    Base,
    UserModel,
    AdminUserModel,
    CouncilMemberModel,
    QuestionModel,
    ResponseModel,
    LikeModel,
)
from .session import Database, db, get_db

__all__ = [
    "Base",
    "UserModel",
    "AdminUserModel",
    "CouncilMemberModel",
    "QuestionModel",
    "ResponseModel",
    "LikeModel",
    "Database",
    "db",
    "get_db",
]
