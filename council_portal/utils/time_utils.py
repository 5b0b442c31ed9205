"""
Timestamp helpers.

Exported snapshots carry every timestamp as integer milliseconds since the
Unix epoch. The database stores naive UTC datetimes.

Responsibility: Convert between epoch milliseconds and datetimes
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC ``datetime`` for database columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return to_epoch_ms(utcnow())


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime (naive values are UTC) to epoch milliseconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(round(value.timestamp() * 1000))


def from_epoch_ms(value: Any) -> Optional[datetime]:
    """
    Best-effort conversion to a naive UTC ``datetime``.

    Accepts epoch milliseconds (int/float), ISO8601 strings and datetimes.
    Returns None for None; raises ValueError for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(tzinfo=None)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unable to parse datetime string %s", value)
            raise
        return from_epoch_ms(parsed)
    raise ValueError(f"Not a timestamp: {value!r}")
