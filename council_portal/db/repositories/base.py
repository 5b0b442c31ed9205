"""
Shared repository behaviour for document-style tables.

Every table has an opaque ``id`` and a ``creation_time``; the operations
here are the document-store primitives the rest of the code builds on:
get, collect, first-match lookup, insert, patch and delete.

Responsibility: Generic data access for ``DocumentMixin`` models
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from council_portal.db.models import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class DocumentRepository(Generic[ModelT]):
    """Base repository; subclasses set ``model``."""

    model: ClassVar[Type[Base]]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _filtered(self, filters: dict[str, Any]):
        stmt = select(self.model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(self.model, column) == value)
        return stmt

    async def get_by_id(self, document_id: Optional[str]) -> Optional[ModelT]:
        """Fetch a single row by id; None for a missing or empty id."""
        if not document_id:
            return None
        return await self.session.get(self.model, document_id)

    async def list_all(self) -> List[ModelT]:
        """Collect every row in insertion order."""
        stmt = select(self.model).order_by(self.model.creation_time, self.model.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_first(self, **filters: Any) -> Optional[ModelT]:
        """First row (oldest) whose columns equal the given values."""
        stmt = (
            self._filtered(filters)
            .order_by(self.model.creation_time, self.model.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_all(self, **filters: Any) -> List[ModelT]:
        """Every row whose columns equal the given values."""
        stmt = self._filtered(filters).order_by(self.model.creation_time, self.model.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, **filters: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(self.model, column) == value)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def insert(self, **values: Any) -> ModelT:
        """Insert a row and flush so its id is assigned."""
        document = self.model(**values)
        self.session.add(document)
        await self.session.flush()
        logger.debug("Inserted %s %s", self.model.__tablename__, document.id)
        return document

    async def patch(self, document: ModelT, **values: Any) -> ModelT:
        """Update the given columns of an existing row."""
        for column, value in values.items():
            setattr(document, column, value)
        await self.session.flush()
        return document

    async def delete(self, document: ModelT) -> None:
        await self.session.delete(document)
        await self.session.flush()

    async def delete_by_id(self, document_id: str) -> bool:
        document = await self.get_by_id(document_id)
        if document is None:
            return False
        await self.delete(document)
        return True

    async def delete_all(self) -> int:
        """Delete every row of the table. Returns the number removed."""
        result = await self.session.execute(delete(self.model))
        deleted = result.rowcount or 0
        logger.debug("Deleted %s rows from %s", deleted, self.model.__tablename__)
        return deleted
