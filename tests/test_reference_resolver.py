import asyncio
from typing import Optional

from council_portal.services.reference_resolver import ReferenceResolver


def _make_resolver(known: dict) -> ReferenceResolver:
    async def lookup(key: str) -> Optional[str]:
        return known.get(key)

    return ReferenceResolver("councilMember", lookup)


def test_remap_takes_precedence_over_natural_key() -> None:
    resolver = _make_resolver({"田中": "by-name"})
    resolver.record("old-1", "new-1")

    assert asyncio.run(resolver.resolve("old-1", "田中")) == "new-1"
    assert "old-1" in resolver
    assert len(resolver) == 1


def test_falls_back_to_natural_key() -> None:
    resolver = _make_resolver({"田中": "by-name"})

    assert asyncio.run(resolver.resolve("stale-id", "田中")) == "by-name"


def test_unresolvable_reference_returns_none() -> None:
    resolver = _make_resolver({})

    assert asyncio.run(resolver.resolve("stale-id", "佐藤")) is None
    assert asyncio.run(resolver.resolve(None, None)) is None
    assert resolver.remapped(None) is None


def test_record_ignores_missing_snapshot_id() -> None:
    resolver = ReferenceResolver("question")
    resolver.record(None, "new-1")
    resolver.record("", "new-2")

    assert len(resolver) == 0
