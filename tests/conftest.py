import asyncio
from typing import Iterator

import pytest

from council_portal.db.session import Database


@pytest.fixture
def database(tmp_path) -> Iterator[Database]:
    """Fresh SQLite database with every table created."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}")

    async def _setup() -> None:
        await database.initialize()
        await database.create_tables()

    asyncio.run(_setup())
    yield database
    asyncio.run(database.close())
