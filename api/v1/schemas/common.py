"""
Shared schema base.

Responses use camelCase keys and epoch-millisecond timestamps, matching
the export format the portal frontend already consumes.

Responsibility: API v1 schema base classes
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from council_portal.models.snapshot import EpochMillis


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DocumentResponse(CamelModel):
    """System fields of every stored record."""

    id: str = Field(alias="_id")
    creation_time: EpochMillis = Field(alias="_creationTime")


class IdResponse(CamelModel):
    id: str


class MessageResponse(CamelModel):
    message: str
    success: bool = True


class UploadUrlResponse(CamelModel):
    storage_id: str
    upload_url: str


class UrlResponse(CamelModel):
    url: Optional[str] = None
