"""
Site content schemas: news, slideshow, FAQ, contact messages and images.

Responsibility: API v1 editorial request/response schemas
"""

from typing import Literal, Optional

from pydantic import Field

from api.v1.schemas.common import CamelModel, DocumentResponse
from council_portal.models.snapshot import EpochMillis


# MARK: - News

class NewsWrite(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    is_published: bool
    thumbnail_url: Optional[str] = None
    thumbnail_id: Optional[str] = None


class NewsAuthor(CamelModel):
    name: str
    email: Optional[str] = None


class NewsResponse(DocumentResponse):
    title: str
    content: str
    category: str
    is_published: bool
    publish_date: EpochMillis
    author_id: str
    thumbnail_url: Optional[str] = None
    thumbnail_id: Optional[str] = None
    author: Optional[NewsAuthor] = None


# MARK: - Slideshow

class SlideWrite(CamelModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    image_url: Optional[str] = None
    image_id: Optional[str] = None
    link_url: Optional[str] = None
    background_color: str = "#ffffff"
    order: int = 0
    is_active: bool = True


class SlideResponse(SlideWrite, DocumentResponse):
    pass


# MARK: - FAQ

class FAQWrite(CamelModel):
    category: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    order: int = 0
    is_published: bool = True


class FAQResponse(FAQWrite, DocumentResponse):
    created_at: EpochMillis
    created_by: str
    updated_at: Optional[EpochMillis] = None
    updated_by: Optional[str] = None


# MARK: - Contact

ContactStatus = Literal["new", "read", "replied"]


class ContactSubmit(CamelModel):
    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=320)
    subject: Optional[str] = Field(default=None, max_length=500)
    message: str = Field(..., min_length=1)


class ContactStatusUpdate(CamelModel):
    status: ContactStatus


class ContactResponse(DocumentResponse):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: str
    status: str


# MARK: - Images

class UploadUrlRequest(CamelModel):
    content_type: Optional[str] = None


class ImageResponse(DocumentResponse):
    content_type: Optional[str] = None
    size: Optional[int] = None
    sha256: Optional[str] = None
    url: Optional[str] = None
