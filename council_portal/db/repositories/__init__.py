"""
Repository package for data access operations.

Implements repository pattern for abstracting database operations.
"""

from .base import DocumentRepository
from .user_repository import UserRepository, SessionTokenRepository, AdminUserRepository
from .council_repository import (
    CouncilMemberRepository,
    QuestionRepository,
    ResponseRepository,
    LikeRepository,
)
from .content_repository import (
    NewsRepository,
    SlideshowSlideRepository,
    FAQItemRepository,
    ContactMessageRepository,
)
from .demographic_repository import UserDemographicRepository
from .stored_file_repository import StoredFileRepository

__all__ = [
    "DocumentRepository",
    "UserRepository",
    "SessionTokenRepository",
    "AdminUserRepository",
    "CouncilMemberRepository",
    "QuestionRepository",
    "ResponseRepository",
    "LikeRepository",
    "NewsRepository",
    "SlideshowSlideRepository",
    "FAQItemRepository",
    "ContactMessageRepository",
    "UserDemographicRepository",
    "StoredFileRepository",
]
