"""Fixtures wiring use cases to a real migrated SQLite database."""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest

from chandlery.application.services import Services, build_sqlite_services
from chandlery.config import get_settings
from chandlery.infrastructure.storage.sqlite import ConnectionPool
from chandlery.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
async def services(tmp_path: Path) -> AsyncGenerator[Services, None]:
    db_path = tmp_path / "chandlery.db"
    await initialize_database(db_path, create_backup_before=False)
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("INSERT INTO ships (id, name) VALUES (1, 'MV Aurora')")
        await conn.execute("INSERT INTO ships (id, name) VALUES (2, 'MT Boreas')")
        await conn.execute(
            "INSERT INTO supply_items (id, name, unit) VALUES (1, 'Rope 24mm', 'MTR')"
        )
        await conn.execute(
            "INSERT INTO supply_items (id, name, unit) VALUES (2, 'Deck paint', 'LTR')"
        )
        await conn.commit()

    pool = ConnectionPool(db_path, pool_size=3, busy_timeout=5000)
    await pool.initialize()
    yield build_sqlite_services(pool, get_settings())
    await pool.close()
