"""
Password authentication and bearer-token sessions.

Responsibility: Register users, sign in/out and resolve bearer tokens
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..db.models import UserModel
from ..db.repositories import SessionTokenRepository, UserRepository
from ..exceptions import AuthenticationRequiredError, ValidationError
from ..utils.hash_utils import hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


@dataclass
class SignInResult:
    user: UserModel
    token: str


class AuthService:
    """
    Example:
        service = AuthService(session)
        result = await service.sign_in("citizen@example.jp", "password123")
        user_id = await service.authenticate(result.token)
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)
        self.tokens = SessionTokenRepository(session)

    async def register(self, email: str, password: str, name: Optional[str] = None) -> SignInResult:
        """
        Create an account and sign it in.

        Raises:
            ValidationError: malformed email, short password or email in use
        """
        email = email.strip().lower()
        if "@" not in email:
            raise ValidationError("メールアドレスの形式が正しくありません")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"パスワードは{MIN_PASSWORD_LENGTH}文字以上にしてください")
        if await self.users.get_by_email(email):
            raise ValidationError("このメールアドレスは既に登録されています")

        user = await self.users.insert(
            name=name,
            email=email,
            password_hash=hash_password(password),
        )
        logger.info(f"Registered user {user.id}")
        return await self._issue(user)

    async def sign_in(self, email: str, password: str) -> SignInResult:
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed sign-in attempt")
            raise AuthenticationRequiredError("メールアドレスまたはパスワードが正しくありません")
        return await self._issue(user)

    async def sign_out(self, raw_token: str) -> bool:
        return await self.tokens.revoke(raw_token)

    async def authenticate(self, raw_token: Optional[str]) -> Optional[str]:
        """User id for a bearer token, or None."""
        if not raw_token:
            return None
        token = await self.tokens.authenticate(raw_token)
        return token.user_id if token else None

    async def _issue(self, user: UserModel) -> SignInResult:
        raw_token, _ = await self.tokens.create_token(user.id, settings.auth.token_ttl_days)
        return SignInResult(user=user, token=raw_token)
