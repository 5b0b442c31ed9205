"""
Repository for self-reported user demographics.

Responsibility: Data access layer for the ``user_demographics`` table
"""

from typing import Optional

from council_portal.db.models import UserDemographicModel
from council_portal.db.repositories.base import DocumentRepository


class UserDemographicRepository(DocumentRepository[UserDemographicModel]):
    """Repository for ``UserDemographicModel`` records."""

    model = UserDemographicModel

    async def get_for_user(self, user_id: str) -> Optional[UserDemographicModel]:
        return await self.find_first(user_id=user_id)
