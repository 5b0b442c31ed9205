"""
Council API schemas: members, questions, responses and likes.

Responsibility: API v1 council request/response schemas
"""

from typing import List, Literal, Optional

from pydantic import Field

from api.v1.schemas.common import CamelModel, DocumentResponse
from council_portal.models.snapshot import EpochMillis


# MARK: - Council members

class CouncilMemberFields(CamelModel):
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


class CouncilMemberCreate(CouncilMemberFields):
    name: str = Field(..., min_length=1, max_length=200)
    is_active: bool = True


class CouncilMemberUpdate(CouncilMemberFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    is_active: Optional[bool] = None


class CouncilMemberResponse(CouncilMemberFields, DocumentResponse):
    name: str
    is_active: bool


# MARK: - Responses

class ResponseCreate(CamelModel):
    content: str = Field(..., min_length=1)
    respondent_title: str = Field(..., min_length=1)
    department: Optional[str] = None
    document_url: Optional[str] = None


class ResponseResponse(DocumentResponse):
    question_id: str
    content: str
    respondent_title: str
    department: Optional[str] = None
    response_date: EpochMillis
    document_url: Optional[str] = None


# MARK: - Questions

QuestionStatus = Literal["pending", "answered", "archived"]


class QuestionCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    council_member_id: str
    session_date: EpochMillis
    session_number: Optional[str] = None
    youtube_url: Optional[str] = None
    document_url: Optional[str] = None


class QuestionUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = None
    category: Optional[str] = None
    session_date: Optional[EpochMillis] = None
    session_number: Optional[str] = None
    youtube_url: Optional[str] = None
    document_url: Optional[str] = None
    status: Optional[QuestionStatus] = None


class QuestionResponse(DocumentResponse):
    title: str
    content: str
    category: str
    council_member_id: str
    session_date: EpochMillis
    session_number: Optional[str] = None
    status: QuestionStatus
    youtube_url: Optional[str] = None
    document_url: Optional[str] = None


class QuestionSummaryResponse(QuestionResponse):
    """Question with counts and like state for listings."""

    member_name: Optional[str] = None
    member_party: Optional[str] = None
    response_count: int = 0
    like_count: int = 0
    is_liked: bool = False


class QuestionDetailResponse(QuestionResponse):
    member_name: str
    member_party: Optional[str] = None
    responses: List[ResponseResponse]
    like_count: int
    is_liked: bool


class QuestionPageResponse(CamelModel):
    questions: List[QuestionSummaryResponse]
    total_count: int
    current_page: int
    total_pages: int


class QuestionStatsResponse(CamelModel):
    total_questions: int
    total_responses: int
    total_members: int
    answered_questions: int


class CategoryCountResponse(CamelModel):
    name: str
    count: int


# MARK: - Likes

class LikeToggleResponse(CamelModel):
    liked: bool


class UserLikesRequest(CamelModel):
    question_ids: List[str]


class LikeCountResponse(CamelModel):
    question_id: str
    count: int


class LikeStateResponse(CamelModel):
    question_id: str
    liked: bool
