"""
Domain models package for Council Portal.

Pydantic models describing data exchanged outside the database.
"""

from .snapshot import (
    SnapshotRecord,
    CouncilMemberRecord,
    QuestionRecord,
    ResponseRecord,
    LikeRecord,
    NewsRecord,
    SlideshowSlideRecord,
    FAQItemRecord,
    ContactMessageRecord,
    UserDemographicRecord,
)

__all__ = [
    "SnapshotRecord",
    "CouncilMemberRecord",
    "QuestionRecord",
    "ResponseRecord",
    "LikeRecord",
    "NewsRecord",
    "SlideshowSlideRecord",
    "FAQItemRecord",
    "ContactMessageRecord",
    "UserDemographicRecord",
]
