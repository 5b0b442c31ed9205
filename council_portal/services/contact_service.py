"""Contact form messages."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import ContactMessageModel
from ..db.repositories import ContactMessageRepository
from ..exceptions import NotFoundError, ValidationError
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

CONTACT_STATUSES = ("new", "read", "replied")


class ContactService:
    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.messages = ContactMessageRepository(session)

    async def submit(
        self,
        message: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> ContactMessageModel:
        if not message.strip():
            raise ValidationError("お問い合わせ内容を入力してください")
        contact = await self.messages.insert(
            name=name, email=email, subject=subject, message=message, status="new"
        )
        logger.info(f"Received contact message {contact.id}")
        return contact

    async def list_messages(
        self, user_id: Optional[str], status: Optional[str] = None
    ) -> List[ContactMessageModel]:
        await self.permissions.require_admin(user_id)
        return await self.messages.list_newest(status=status)

    async def update_status(
        self, user_id: Optional[str], message_id: str, status: str
    ) -> ContactMessageModel:
        await self.permissions.require_admin(user_id)
        if status not in CONTACT_STATUSES:
            raise ValidationError(f"無効なステータスです: {status}")

        contact = await self.messages.get_by_id(message_id)
        if contact is None:
            raise NotFoundError("contactMessage", message_id, "お問い合わせが見つかりません")
        return await self.messages.patch(contact, status=status)
