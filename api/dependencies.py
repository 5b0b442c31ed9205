"""
Shared FastAPI dependencies.

Responsibility: Caller identity and storage client injection
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.middleware.session_auth import extract_bearer_token
from council_portal.db.session import get_db
from council_portal.services.auth_service import AuthService
from council_portal.storage import StorageClient, get_storage_client


def get_bearer_token(request: Request) -> Optional[str]:
    """Raw bearer token of the request, if any."""
    token = getattr(request.state, "bearer_token", None)
    if token is None:
        token = extract_bearer_token(request.headers.get("Authorization"))
    return token


async def get_current_user_id(
    token: Optional[str] = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db)
) -> Optional[str]:
    """User id for the request's bearer token; None for anonymous callers."""
    return await AuthService(db).authenticate(token)


def get_storage() -> StorageClient:
    return get_storage_client()
