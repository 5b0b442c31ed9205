"""
SQLAlchemy database models for Council Portal.

Every table behaves like a document collection: an opaque string id
assigned at insert, an immutable creation timestamp, and references to
other tables held as plain indexed id columns. Foreign keys are not
enforced by the store.

Responsibility: Define database schema and ORM mappings
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String, Integer, DateTime, Boolean, Text,
    Index, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..utils.time_utils import utcnow


def new_document_id() -> str:
    """Opaque identifier for a new row."""
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


class DocumentMixin:
    """System fields shared by every table."""

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)

    creation_time: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        index=True
    )


# MARK: - Identity and roles

class UserModel(DocumentMixin, Base):
    """Registered citizen or administrator account."""

    __tablename__ = "users"

    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(300), nullable=False)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


class SessionTokenModel(DocumentMixin, Base):
    """Bearer token issued at sign-in. Only the SHA-256 digest is stored."""

    __tablename__ = "session_tokens"

    token_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<SessionTokenModel(id={self.id}, user_id={self.user_id})>"


class AdminUserModel(DocumentMixin, Base):
    """
    Elevated role for a user.

    Absence of a row means the default role ``user``.
    """

    __tablename__ = "admin_users"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    granted_by: Mapped[str] = mapped_column(String(64), nullable=False)
    granted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'superAdmin')", name="ck_admin_user_role"),
    )

    def __repr__(self) -> str:
        return f"<AdminUserModel(user_id={self.user_id}, role={self.role})>"


# MARK: - Council content

class CouncilMemberModel(DocumentMixin, Base):
    """
    City council member.

    ``name`` is the natural key used for de-duplication on import.
    """

    __tablename__ = "council_members"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    party: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    political_party: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    election_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    committee: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Contact information
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    term_start: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    term_end: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    def __repr__(self) -> str:
        return f"<CouncilMemberModel(id={self.id}, name={self.name})>"


class QuestionModel(DocumentMixin, Base):
    """Question raised by a council member in a session."""

    __tablename__ = "questions"

    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    council_member_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    session_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    session_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    youtube_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    document_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'answered', 'archived')",
            name="ck_question_status"
        ),
        Index("idx_question_title_member", "title", "council_member_id"),
    )

    def __repr__(self) -> str:
        return f"<QuestionModel(id={self.id}, title={self.title})>"


class ResponseModel(DocumentMixin, Base):
    """Official answer to a question."""

    __tablename__ = "responses"

    question_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    respondent_title: Mapped[str] = mapped_column(String(200), nullable=False)
    department: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    response_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    document_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<ResponseModel(id={self.id}, question_id={self.question_id})>"


class LikeModel(DocumentMixin, Base):
    """A user's interest in a question. At most one per (user, question)."""

    __tablename__ = "likes"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    question_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    __table_args__ = (
        Index("idx_like_user_question", "user_id", "question_id"),
    )

    def __repr__(self) -> str:
        return f"<LikeModel(user_id={self.user_id}, question_id={self.question_id})>"


# MARK: - Site content

class NewsModel(DocumentMixin, Base):
    """News article shown on the portal."""

    __tablename__ = "news"

    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    publish_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    author_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    thumbnail_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<NewsModel(id={self.id}, title={self.title})>"


class SlideshowSlideModel(DocumentMixin, Base):
    """Front-page slideshow slide."""

    __tablename__ = "slideshow_slides"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    image_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    link_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    background_color: Mapped[str] = mapped_column(String(50), nullable=False, default="#ffffff")
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<SlideshowSlideModel(id={self.id}, order={self.order})>"


class FAQItemModel(DocumentMixin, Base):
    """Frequently asked question."""

    __tablename__ = "faq_items"

    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<FAQItemModel(id={self.id}, category={self.category})>"


class ContactMessageModel(DocumentMixin, Base):
    """Message submitted through the contact form."""

    __tablename__ = "contact_messages"

    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    subject: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")

    def __repr__(self) -> str:
        return f"<ContactMessageModel(id={self.id}, status={self.status})>"


class UserDemographicModel(DocumentMixin, Base):
    """Self-reported demographics. At most one per user."""

    __tablename__ = "user_demographics"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    age_group: Mapped[str] = mapped_column(String(20), nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    region: Mapped[str] = mapped_column(String(50), nullable=False)
    registered_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<UserDemographicModel(user_id={self.user_id})>"


# MARK: - Object storage metadata

class StoredFileModel(DocumentMixin, Base):
    """Metadata for an object uploaded to the blob store."""

    __tablename__ = "stored_files"

    object_key: Mapped[str] = mapped_column(String(300), nullable=False)
    content_type: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, index=True)
    size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    sha256: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    uploaded_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        UniqueConstraint("object_key", name="uq_stored_file_key"),
    )

    def __repr__(self) -> str:
        return f"<StoredFileModel(id={self.id}, key={self.object_key})>"
