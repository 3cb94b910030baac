"""Unit tests for SQLite connection pool."""

from pathlib import Path

import pytest

from chandlery.config.settings import StorageSettings
from chandlery.core.exceptions import StorageFailure
from chandlery.infrastructure.storage.sqlite.connection import ConnectionPool


class TestConnectionPoolInit:
    """Tests for ConnectionPool construction."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)

        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False

    def test_from_settings(self, tmp_path: Path):
        settings = StorageSettings(data_dir=tmp_path, db_name="x.db", pool_size=3)

        pool = ConnectionPool.from_settings(settings)

        assert pool.db_path == tmp_path / "x.db"
        assert pool.pool_size == 3


class TestConnectionPoolLifecycle:
    """Tests for initialize() and close()."""

    async def test_initialize_opens_connections(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        await pool.initialize()
        await pool.initialize()

        try:
            assert len(pool._connections) == 2
        finally:
            await pool.close()

        assert pool._initialized is False
        assert pool._connections == []

    async def test_closed_pool_refuses_use(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.initialize()
        await pool.close()

        with pytest.raises(StorageFailure):
            async with pool.acquire():
                pass

    async def test_pragmas(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute("PRAGMA foreign_keys")
                assert (await cursor.fetchone())[0] == 1
                cursor = await conn.execute("PRAGMA journal_mode")
                assert (await cursor.fetchone())[0] == "wal"
        finally:
            await pool.close()


class TestTransactions:
    """Tests for transaction() and error wrapping."""

    async def test_commit(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t VALUES (1)")
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 1
        finally:
            await pool.close()

    async def test_rollback_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")

            with pytest.raises(RuntimeError):
                async with pool.transaction() as conn:
                    await conn.execute("INSERT INTO t VALUES (1)")
                    raise RuntimeError("boom")

            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 0
        finally:
            await pool.close()

    async def test_driver_errors_wrapped(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            with pytest.raises(StorageFailure) as exc_info:
                async with pool.acquire() as conn:
                    await conn.execute("SELECT * FROM missing_table")

            assert exc_info.value.__cause__ is not None
            assert exc_info.value.details["operation"] == "query"
        finally:
            await pool.close()
