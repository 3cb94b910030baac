"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest

from chandlery.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteOrderStore,
    SQLiteReportStore,
    SQLiteStockStore,
)
from chandlery.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Temporary database migrated to the latest schema, with reference data."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)

    async with aiosqlite.connect(temp_db_path) as conn:
        await conn.executemany(
            "INSERT INTO ships (id, name, imo_number) VALUES (?, ?, ?)",
            [(1, "MV Aurora", "9000001"), (2, "MT Boreas", "9000002")],
        )
        await conn.execute(
            """
            INSERT INTO ship_visits (id, ship_id, port_name, eta, etd)
            VALUES (1, 1, 'Mersin', '2024-03-10', '2024-03-12')
            """
        )
        await conn.executemany(
            "INSERT INTO supply_items (id, name, impa_code, unit) VALUES (?, ?, ?, ?)",
            [
                (1, "Rope 24mm", "210105", "MTR"),
                (2, "Deck paint", "250101", "LTR"),
                (3, "Shackle 10mm", "231002", "PCS"),
            ],
        )
        await conn.commit()

    yield temp_db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Initialized connection pool over the migrated database."""
    pool = ConnectionPool(migrated_db, pool_size=2, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def order_store(pool: ConnectionPool) -> SQLiteOrderStore:
    return SQLiteOrderStore(pool)


@pytest.fixture
def stock_store(pool: ConnectionPool) -> SQLiteStockStore:
    return SQLiteStockStore(pool)


@pytest.fixture
def report_store(pool: ConnectionPool) -> SQLiteReportStore:
    return SQLiteReportStore(pool)
