"""
Contact form API endpoints.

Responsibility: Contact message endpoints for API v1
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.common import IdResponse
from api.v1.schemas.content import ContactResponse, ContactStatusUpdate, ContactSubmit
from council_portal.db.session import get_db
from council_portal.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_message(
    request: ContactSubmit,
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Submit a contact form message (no sign-in required)."""
    contact = await ContactService(db).submit(**request.model_dump())
    await db.commit()
    return {"id": contact.id}


@router.get("", response_model=List[ContactResponse])
async def list_contact_messages(
    status_filter: Optional[str] = Query(None, alias="status"),
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await ContactService(db).list_messages(user_id, status=status_filter)


@router.patch("/{message_id}", response_model=ContactResponse)
async def update_contact_status(
    message_id: str,
    request: ContactStatusUpdate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    contact = await ContactService(db).update_status(user_id, message_id, request.status)
    await db.commit()
    return contact
