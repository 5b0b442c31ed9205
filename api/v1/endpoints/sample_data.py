"""
Sample data API endpoint.

Responsibility: Seed a fresh installation
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from council_portal.db.session import get_db
from council_portal.services.sample_data_service import SampleDataService

router = APIRouter(prefix="/sample-data", tags=["sample-data"])


@router.post("/seed")
async def seed_database(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> Dict[str, Any]:
    """Insert sample members, questions, responses and news if none exist (admin)."""
    result = await SampleDataService(db).seed(user_id)
    await db.commit()
    return result
