"""
Data migration API endpoints.

Provides endpoints for:
- Exporting every table as a re-linkable JSON snapshot
- Importing a snapshot (optionally clearing existing data first)
- Clearing every table

Responsibility: Admin export/import/clear endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.migration import (
    ClearResponse,
    ExportResponse,
    ImportRequest,
    ImportResponse,
)
from council_portal.db.session import get_db
from council_portal.services.migration_service import DataMigrationService, ImportOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/migration", tags=["migration"])


@router.get("/export", response_model=ExportResponse)
async def export_all_data(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Export all portal data.

    Questions carry ``councilMemberName`` and responses ``questionTitle``
    so the snapshot can be re-linked on import.

    Args:
        user_id: Authenticated caller (admin or superAdmin)
        db: Database session

    Returns:
        ExportResponse with ``exportedAt`` and per-table records
    """
    payload = await DataMigrationService(db).export_all_data(user_id)
    logger.info(f"Exported snapshot for user {user_id}")
    return payload


@router.post("/import", response_model=ImportResponse)
async def import_all_data(
    request: ImportRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Import an exported snapshot.

    A malformed snapshot is reported with ``success: false`` and a 200
    status; nothing is written in that case.

    Args:
        request: Snapshot JSON string and import options
        user_id: Authenticated caller (admin or superAdmin)
        db: Database session

    Returns:
        ImportResponse with per-table imported/skipped counts
    """
    result = await DataMigrationService(db).import_all_data(
        user_id,
        request.json_data,
        ImportOptions(
            clear_existing_data=request.options.clear_existing_data,
            skip_duplicates=request.options.skip_duplicates,
        ),
    )
    await db.commit()
    return result.to_dict()


@router.post("/clear", response_model=ClearResponse)
async def clear_all_data(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Delete every council, content and engagement record (superAdmin only).

    Users, roles and stored files are kept.
    """
    report = await DataMigrationService(db).clear_all_data(user_id)
    return {"success": report.ok, "deleted": report.deleted, "failed": report.failed}
