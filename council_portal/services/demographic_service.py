"""
Self-reported user demographics.

Values are stored in Japanese as entered; statistics use ASCII keys
(``20s``, ``70splus``, ``female``, ``mihara_citizen``).

Responsibility: Demographic profile upsert and aggregate statistics
"""

import logging
from collections import Counter
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import UserDemographicModel
from ..db.repositories import UserDemographicRepository
from ..exceptions import NotFoundError, ValidationError
from ..utils.time_utils import utcnow
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

AGE_GROUPS = ("10代", "20代", "30代", "40代", "50代", "60代", "70代以上")
GENDERS = ("男性", "女性", "その他", "回答しない")
REGIONS = ("三原市民", "その他市民")

GENDER_KEYS = {
    "男性": "male",
    "女性": "female",
    "その他": "other",
    "回答しない": "no_answer",
}
REGION_KEYS = {
    "三原市民": "mihara_citizen",
    "その他市民": "other_citizen",
}


def age_group_key(age_group: str) -> str:
    """``30代`` -> ``30s``, ``70代以上`` -> ``70splus``"""
    return age_group.replace("代", "s").replace("以上", "plus")


def _validate(age_group: str, gender: str, region: str) -> None:
    if age_group not in AGE_GROUPS:
        raise ValidationError(f"無効な年代です: {age_group}")
    if gender not in GENDERS:
        raise ValidationError(f"無効な性別です: {gender}")
    if region not in REGIONS:
        raise ValidationError(f"無効な地域です: {region}")


class DemographicService:
    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.demographics = UserDemographicRepository(session)

    async def save(
        self, user_id: Optional[str], age_group: str, gender: str, region: str
    ) -> UserDemographicModel:
        """Create the caller's record, or update it when one exists."""
        self.permissions.require_user(user_id)
        _validate(age_group, gender, region)

        existing = await self.demographics.get_for_user(user_id)
        if existing:
            return await self.demographics.patch(
                existing, age_group=age_group, gender=gender, region=region
            )
        return await self.demographics.insert(
            user_id=user_id,
            age_group=age_group,
            gender=gender,
            region=region,
            registered_at=utcnow(),
        )

    async def update(
        self, user_id: Optional[str], age_group: str, gender: str, region: str
    ) -> UserDemographicModel:
        self.permissions.require_user(user_id)
        _validate(age_group, gender, region)

        existing = await self.demographics.get_for_user(user_id)
        if existing is None:
            raise NotFoundError("userDemographic", user_id, "属性情報が見つかりません")
        return await self.demographics.patch(
            existing, age_group=age_group, gender=gender, region=region
        )

    async def get_by_user_id(self, user_id: str) -> Optional[UserDemographicModel]:
        return await self.demographics.get_for_user(user_id)

    async def get_current(self, user_id: Optional[str]) -> Optional[UserDemographicModel]:
        if not user_id:
            return None
        return await self.demographics.get_for_user(user_id)

    async def get_statistics(self, user_id: Optional[str]) -> Dict[str, Any]:
        await self.permissions.require_admin(user_id)

        rows = await self.demographics.list_all()
        return {
            "total": len(rows),
            "age_group": dict(Counter(age_group_key(row.age_group) for row in rows)),
            "gender": dict(Counter(GENDER_KEYS.get(row.gender, row.gender) for row in rows)),
            "region": dict(Counter(REGION_KEYS.get(row.region, row.region) for row in rows)),
        }
