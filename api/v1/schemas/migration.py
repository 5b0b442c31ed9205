"""
Data migration request/response schemas.

Responsibility: API v1 export/import/clear schemas
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from api.v1.schemas.common import CamelModel


class ImportOptionsRequest(CamelModel):
    clear_existing_data: bool = False
    skip_duplicates: bool = True


class ImportRequest(CamelModel):
    """Request body of ``POST /migration/import``."""

    json_data: str = Field(..., description="Exported snapshot as a JSON string")
    options: ImportOptionsRequest = Field(default_factory=ImportOptionsRequest)


class TableStatsResponse(CamelModel):
    imported: int
    skipped: int


class ImportResponse(CamelModel):
    success: bool
    message: str
    stats: Optional[Dict[str, TableStatsResponse]] = None


class ExportResponse(CamelModel):
    exported_at: int
    data: Dict[str, List[Dict[str, Any]]]


class ClearResponse(CamelModel):
    success: bool
    deleted: Dict[str, int]
    failed: List[str]
