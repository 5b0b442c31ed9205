"""
Role and user administration endpoints.

Responsibility: Role queries and superAdmin user management
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_user_id
from api.v1.schemas.common import IdResponse
from api.v1.schemas.users import (
    BootstrapResponse,
    RoleChangeRequest,
    RoleResponse,
    UserUpdateRequest,
    UserWithRoleResponse,
)
from council_portal.db.session import get_db
from council_portal.services.permission_service import (
    ADMIN_ROLES,
    ROLE_SUPER_ADMIN,
    PermissionService,
)
from council_portal.services.user_admin_service import UserAdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/role", response_model=RoleResponse)
async def get_user_role(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Caller's role; anonymous callers get ``user``."""
    role = await PermissionService(db).get_role(user_id)
    return {
        "role": role,
        "is_admin": role in ADMIN_ROLES,
        "is_super_admin": role == ROLE_SUPER_ADMIN,
    }


@router.get("/users", response_model=List[UserWithRoleResponse])
async def list_users(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await UserAdminService(db).list_users(user_id)


@router.put("/users/{target_user_id}/role", response_model=IdResponse)
async def change_user_role(
    target_user_id: str,
    request: RoleChangeRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Change a user's role (superAdmin only).

    Args:
        target_user_id: User whose role changes
        request: New role; ``user`` revokes elevated access
        user_id: Authenticated caller
        db: Database session

    Returns:
        IdResponse with the target user id

    Raises:
        PermissionDeniedError: superAdmin demoting themself (403)
    """
    changed = await UserAdminService(db).change_user_role(user_id, target_user_id, request.role)
    await db.commit()
    return {"id": changed}


@router.patch("/users/{target_user_id}", response_model=IdResponse)
async def update_user(
    target_user_id: str,
    request: UserUpdateRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    updated = await UserAdminService(db).update_user(
        user_id, target_user_id, name=request.name, email=request.email
    )
    await db.commit()
    return {"id": updated}


@router.delete("/users/{target_user_id}", response_model=IdResponse)
async def delete_user(
    target_user_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Delete a user with their role, likes, news and sessions (superAdmin only)."""
    deleted = await UserAdminService(db).delete_user(user_id, target_user_id)
    await db.commit()
    return {"id": deleted}


@router.post("/bootstrap", response_model=BootstrapResponse)
async def make_first_user_super_admin(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Make the caller superAdmin if no superAdmin exists yet."""
    promoted = await UserAdminService(db).make_first_user_super_admin(user_id)
    await db.commit()
    return {"promoted": promoted}
