"""
Repository for blob-store metadata.

Responsibility: Data access layer for the ``stored_files`` table
"""

from typing import List

from sqlalchemy import select

from council_portal.db.models import StoredFileModel
from council_portal.db.repositories.base import DocumentRepository


class StoredFileRepository(DocumentRepository[StoredFileModel]):
    """Repository for ``StoredFileModel`` records."""

    model = StoredFileModel

    async def list_images(self) -> List[StoredFileModel]:
        """Image files, newest first."""
        stmt = (
            select(StoredFileModel)
            .where(StoredFileModel.content_type.like("image/%"))
            .order_by(StoredFileModel.creation_time.desc(), StoredFileModel.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
