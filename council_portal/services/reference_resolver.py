"""
Two-tier reference resolution for snapshot import.

Snapshot ids are not portable between databases. A reference is resolved
first through the remap table built while importing the parent table
(snapshot id -> new or existing id), then by looking the parent up by its
natural key (a member's name, a question's title).
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

NaturalKeyLookup = Callable[[str], Awaitable[Optional[str]]]


class ReferenceResolver:
    """
    Remap table plus natural-key fallback for one parent entity.

    Scoped to a single import run; nothing is persisted.
    """

    def __init__(self, entity: str, lookup: Optional[NaturalKeyLookup] = None):
        self.entity = entity
        self._lookup = lookup
        self._remap: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._remap)

    def __contains__(self, old_id: object) -> bool:
        return old_id in self._remap

    def record(self, old_id: Optional[str], new_id: str) -> None:
        """Map a snapshot id to the id it now has in this database."""
        if old_id:
            self._remap[old_id] = new_id

    def remapped(self, old_id: Optional[str]) -> Optional[str]:
        if not old_id:
            return None
        return self._remap.get(old_id)

    async def resolve(
        self,
        old_id: Optional[str],
        fallback_key: Optional[str] = None
    ) -> Optional[str]:
        """
        Resolve a snapshot reference.

        Args:
            old_id: The referenced id as it appears in the snapshot
            fallback_key: Natural key of the referenced record, if known

        Returns:
            Id in this database, or None when neither tier resolves
        """
        new_id = self.remapped(old_id)
        if new_id:
            return new_id

        if fallback_key and self._lookup is not None:
            new_id = await self._lookup(fallback_key)
            if new_id:
                logger.debug(f"Resolved {self.entity} by natural key '{fallback_key}'")
            return new_id

        return None
