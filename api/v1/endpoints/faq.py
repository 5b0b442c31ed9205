"""
FAQ API endpoints.

Responsibility: FAQ endpoints for API v1
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.content import FAQResponse, FAQWrite
from council_portal.db.session import get_db
from council_portal.services.faq_service import FAQService

router = APIRouter(prefix="/faq", tags=["faq"])


@router.get("", response_model=Dict[str, List[FAQResponse]])
async def list_faq(db: AsyncSession = Depends(get_db)):
    """Published FAQ items grouped by category."""
    return await FAQService(db).list_grouped()


@router.get("/all", response_model=List[FAQResponse])
async def list_all_faq(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await FAQService(db).list_all(user_id)


@router.post("", response_model=FAQResponse, status_code=status.HTTP_201_CREATED)
async def create_faq_item(
    request: FAQWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    item = await FAQService(db).create_item(user_id, **request.model_dump())
    await db.commit()
    return item


@router.put("/{item_id}", response_model=FAQResponse)
async def update_faq_item(
    item_id: str,
    request: FAQWrite,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    item = await FAQService(db).update_item(user_id, item_id, **request.model_dump())
    await db.commit()
    return item


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_faq_item(
    item_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    await FAQService(db).delete_item(user_id, item_id)
    await db.commit()
    return {"message": "FAQを削除しました"}
