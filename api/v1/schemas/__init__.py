"""API v1 request and response schemas."""

from api.v1.schemas.common import (
    CamelModel,
    DocumentResponse,
    IdResponse,
    MessageResponse,
    UploadUrlResponse,
    UrlResponse,
)
from api.v1.schemas.migration import (
    ImportOptionsRequest,
    ImportRequest,
    ImportResponse,
    ExportResponse,
    ClearResponse,
)

__all__ = [
    "CamelModel",
    "DocumentResponse",
    "IdResponse",
    "MessageResponse",
    "UploadUrlResponse",
    "UrlResponse",
    "ImportOptionsRequest",
    "ImportRequest",
    "ImportResponse",
    "ExportResponse",
    "ClearResponse",
]
