"""
Snapshot record models.

One pydantic model per exported table. Records use camelCase keys on the
wire (``councilMemberId``, ``isActive``), carry the system fields ``_id`` and
``_creationTime``, encode every timestamp as epoch milliseconds and ignore
unknown keys so snapshots from older exports still load.

Responsibility: Validated intermediate representation for export/import
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from ..utils.time_utils import from_epoch_ms, to_epoch_ms

EpochMillis = Annotated[
    datetime,
    BeforeValidator(from_epoch_ms),
    PlainSerializer(to_epoch_ms, return_type=int, when_used="json"),
]


class SnapshotRecord(BaseModel):
    """
    Base for all snapshot records.

    ``to_columns`` strips system fields (and any denormalized fields) and
    returns keyword arguments for the ORM model.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: Optional[str] = Field(default=None, alias="_id")
    creation_time: Optional[EpochMillis] = Field(default=None, alias="_creationTime")

    SYSTEM_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"id", "creation_time"})
    DENORMALIZED_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    def to_columns(self) -> Dict[str, Any]:
        return self.model_dump(
            exclude=set(self.SYSTEM_FIELDS | self.DENORMALIZED_FIELDS),
            exclude_none=True,
        )

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# MARK: - Council content

class CouncilMemberRecord(SnapshotRecord):
    """Natural key: ``name``"""

    name: str
    party: Optional[str] = None
    position: Optional[str] = None
    political_party: Optional[str] = None
    election_count: Optional[int] = None
    committee: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    term_start: Optional[EpochMillis] = None
    term_end: Optional[EpochMillis] = None
    is_active: Optional[bool] = None


class QuestionRecord(SnapshotRecord):
    """Natural key: ``(title, councilMemberId)``"""

    title: str
    content: str
    category: str
    council_member_id: Optional[str] = None
    session_date: EpochMillis
    session_number: Optional[str] = None
    status: Optional[Literal["pending", "answered", "archived"]] = None
    youtube_url: Optional[str] = None
    document_url: Optional[str] = None

    # Denormalized on export for re-linking
    council_member_name: Optional[str] = None

    DENORMALIZED_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"council_member_name"})


class ResponseRecord(SnapshotRecord):
    """No natural key; responses are append-only."""

    question_id: Optional[str] = None
    content: str
    respondent_title: str
    department: Optional[str] = None
    response_date: Optional[EpochMillis] = None
    document_url: Optional[str] = None

    # Denormalized on export for re-linking
    question_title: Optional[str] = None

    DENORMALIZED_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"question_title"})


class LikeRecord(SnapshotRecord):
    user_id: str
    question_id: Optional[str] = None


# MARK: - Site content

class NewsRecord(SnapshotRecord):
    """Natural key: ``title``"""

    title: str
    content: str
    category: str
    is_published: bool = False
    publish_date: Optional[EpochMillis] = None
    author_id: Optional[str] = None
    thumbnail_url: Optional[str] = None
    thumbnail_id: Optional[str] = None


class SlideshowSlideRecord(SnapshotRecord):
    title: str
    description: str = ""
    image_url: Optional[str] = None
    image_id: Optional[str] = None
    link_url: Optional[str] = None
    background_color: Optional[str] = None
    order: int = 0
    is_active: bool = True
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class FAQItemRecord(SnapshotRecord):
    """Natural key: ``question``"""

    category: str
    question: str
    answer: str
    order: Optional[int] = None
    is_published: Optional[bool] = None
    created_at: Optional[EpochMillis] = None
    created_by: Optional[str] = None
    updated_at: Optional[EpochMillis] = None
    updated_by: Optional[str] = None


class ContactMessageRecord(SnapshotRecord):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: str = ""
    status: Optional[str] = None


class UserDemographicRecord(SnapshotRecord):
    user_id: str
    age_group: str
    gender: str
    region: str
    registered_at: Optional[EpochMillis] = None
