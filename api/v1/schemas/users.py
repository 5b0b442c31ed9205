"""
Account, role and demographic schemas.

Responsibility: API v1 user-facing request/response schemas
"""

from typing import Dict, Literal, Optional

from pydantic import Field

from api.v1.schemas.common import CamelModel, DocumentResponse
from council_portal.models.snapshot import EpochMillis

Role = Literal["user", "admin", "superAdmin"]


# MARK: - Auth

class RegisterRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=200)
    name: Optional[str] = Field(default=None, max_length=200)


class SignInRequest(CamelModel):
    email: str
    password: str


class UserResponse(DocumentResponse):
    name: Optional[str] = None
    email: str


class SignInResponse(CamelModel):
    token: str
    user: UserResponse


# MARK: - Administration

class UserWithRoleResponse(UserResponse):
    role: Role


class RoleResponse(CamelModel):
    role: Role
    is_admin: bool
    is_super_admin: bool


class RoleChangeRequest(CamelModel):
    role: Role


class UserUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=320)


class BootstrapResponse(CamelModel):
    promoted: bool


# MARK: - Demographics

AgeGroup = Literal["10代", "20代", "30代", "40代", "50代", "60代", "70代以上"]
Gender = Literal["男性", "女性", "その他", "回答しない"]
Region = Literal["三原市民", "その他市民"]


class DemographicWrite(CamelModel):
    age_group: AgeGroup
    gender: Gender
    region: Region


class DemographicResponse(DocumentResponse):
    user_id: str
    age_group: str
    gender: str
    region: str
    registered_at: EpochMillis


class DemographicStatsResponse(CamelModel):
    total: int
    age_group: Dict[str, int]
    gender: Dict[str, int]
    region: Dict[str, int]
