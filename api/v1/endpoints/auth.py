"""
API endpoints for account registration and bearer-token sessions.

Provides endpoints for:
- Registering with email and password
- Signing in and out
- Retrieving the current user

Responsibility: Authentication endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_bearer_token, get_current_user_id
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.users import RegisterRequest, SignInRequest, SignInResponse, UserResponse
from council_portal.db.session import get_db
from council_portal.services.auth_service import AuthService
from council_portal.services.user_admin_service import UserAdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=SignInResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an account and return a bearer token. The token is displayed only once!"
)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
) -> dict:
    result = await AuthService(db).register(request.email, request.password, request.name)
    await db.commit()
    return {"token": result.token, "user": result.user}


@router.post("/sign-in", response_model=SignInResponse)
async def sign_in(
    request: SignInRequest,
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Sign in with email and password.

    Args:
        request: Credentials
        db: Database session

    Returns:
        SignInResponse with a new bearer token
    """
    result = await AuthService(db).sign_in(request.email, request.password)
    await db.commit()
    return {"token": result.token, "user": result.user}


@router.post("/sign-out", response_model=MessageResponse)
async def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db)
) -> dict:
    revoked = await AuthService(db).sign_out(token) if token else False
    await db.commit()
    return {"message": "signed out", "success": revoked}


@router.get("/me", response_model=Optional[UserResponse])
async def get_current_user(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Current user, or null for anonymous callers."""
    return await UserAdminService(db).get_current_user(user_id)
