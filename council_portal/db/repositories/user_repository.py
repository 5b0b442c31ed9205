"""
Repositories for accounts, session tokens and admin roles.

Handles CRUD and authentication operations for users.

Responsibility: Data access layer for users, session_tokens, admin_users
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import delete, select

from council_portal.db.models import AdminUserModel, SessionTokenModel, UserModel
from council_portal.db.repositories.base import DocumentRepository
from council_portal.utils.hash_utils import generate_token, hash_token
from council_portal.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class UserRepository(DocumentRepository[UserModel]):
    """Repository for user accounts."""

    model = UserModel

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email.strip().lower())
        )
        return result.scalar_one_or_none()


class SessionTokenRepository(DocumentRepository[SessionTokenModel]):
    """Repository for bearer tokens issued at sign-in."""

    model = SessionTokenModel

    async def create_token(
        self,
        user_id: str,
        ttl_days: Optional[int] = None
    ) -> Tuple[str, SessionTokenModel]:
        """
        Issue a new token for a user.

        Args:
            user_id: Owner of the token
            ttl_days: Days until expiration (None = never)

        Returns:
            Tuple of (raw_token, SessionTokenModel); the raw token is not stored
        """
        raw_token = generate_token()
        expires_at = utcnow() + timedelta(days=ttl_days) if ttl_days else None
        token = await self.insert(
            token_hash=hash_token(raw_token),
            user_id=user_id,
            expires_at=expires_at,
        )
        logger.info(f"Issued session token for user {user_id}")
        return raw_token, token

    async def authenticate(self, raw_token: str) -> Optional[SessionTokenModel]:
        """
        Look up a raw token and update last_used_at.

        Returns:
            SessionTokenModel if valid and unexpired, None otherwise
        """
        result = await self.session.execute(
            select(SessionTokenModel).where(
                SessionTokenModel.token_hash == hash_token(raw_token)
            )
        )
        token = result.scalar_one_or_none()
        if token is None:
            return None

        now = utcnow()
        if token.expires_at and token.expires_at < now:
            logger.debug(f"Expired session token for user {token.user_id}")
            return None

        token.last_used_at = now
        await self.session.flush()
        return token

    async def revoke(self, raw_token: str) -> bool:
        result = await self.session.execute(
            delete(SessionTokenModel).where(
                SessionTokenModel.token_hash == hash_token(raw_token)
            )
        )
        return bool(result.rowcount)

    async def delete_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(SessionTokenModel).where(SessionTokenModel.user_id == user_id)
        )
        return result.rowcount or 0


class AdminUserRepository(DocumentRepository[AdminUserModel]):
    """Repository for the role table."""

    model = AdminUserModel

    async def get_by_user_id(self, user_id: Optional[str]) -> Optional[AdminUserModel]:
        if not user_id:
            return None
        result = await self.session.execute(
            select(AdminUserModel).where(AdminUserModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_by_role(self, role: str) -> List[AdminUserModel]:
        return await self.find_all(role=role)

    async def grant(
        self,
        user_id: str,
        role: str,
        granted_by: str,
        granted_at: Optional[datetime] = None
    ) -> AdminUserModel:
        """Insert a role row for a user who has none."""
        admin = await self.insert(
            user_id=user_id,
            role=role,
            granted_by=granted_by,
            granted_at=granted_at or utcnow(),
        )
        logger.info(f"Granted role {role} to user {user_id} (by {granted_by})")
        return admin
