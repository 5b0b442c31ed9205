"""
User demographics API endpoints.

Responsibility: Demographic profile and statistics endpoints for API v1
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.users import DemographicResponse, DemographicStatsResponse, DemographicWrite
from council_portal.db.session import get_db
from council_portal.services.demographic_service import DemographicService

router = APIRouter(prefix="/demographics", tags=["demographics"])


@router.post("", response_model=DemographicResponse)
async def save_demographics(
    request: DemographicWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Create or replace the caller's demographic record."""
    record = await DemographicService(db).save(user_id, **request.model_dump())
    await db.commit()
    return record


@router.put("", response_model=DemographicResponse)
async def update_demographics(
    request: DemographicWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Update the caller's demographic record.

    Raises:
        NotFoundError: 404 if the caller has no record yet
    """
    record = await DemographicService(db).update(user_id, **request.model_dump())
    await db.commit()
    return record


@router.get("/me", response_model=Optional[DemographicResponse])
async def get_my_demographics(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await DemographicService(db).get_current(user_id)


@router.get("/statistics", response_model=DemographicStatsResponse)
async def get_demographic_statistics(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Counts by age group, gender and region (admin)."""
    return await DemographicService(db).get_statistics(user_id)


@router.get("/users/{target_user_id}", response_model=Optional[DemographicResponse])
async def get_user_demographics(target_user_id: str, db: AsyncSession = Depends(get_db)):
    return await DemographicService(db).get_by_user_id(target_user_id)
