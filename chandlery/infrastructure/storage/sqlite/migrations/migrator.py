"""
Versioned schema migrations for the chandlery database.

Migrations are ``vNNN_name.sql`` files next to this module. Each applied
file is recorded in ``schema_migrations`` with a checksum; an applied file
whose checksum later changes stops the run instead of being re-applied.
Before migrating an existing database a snapshot is taken with SQLite's
online backup, so WAL contents are included, and restored if the run fails.
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from chandlery.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = (
    "ships",
    "ship_visits",
    "supply_items",
    "orders",
    "order_items",
    "stock",
    "stock_movements",
    "schema_migrations",
)

# The movement ledger is append-only; losing this trigger silently breaks replay
REQUIRED_TRIGGERS = ("trg_stock_movements_no_update",)

_FILENAME_RE = re.compile(r"^v(\d{3,})_(\w+)\.sql$")

_SCHEMA_MIGRATIONS_DDL = """
    CREATE TABLE IF NOT EXISTS schema_migrations (
        version TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        checksum TEXT NOT NULL,
        applied_at TEXT NOT NULL DEFAULT (datetime('now')),
        execution_time_ms INTEGER
    )
"""


class MigrationError(Exception):
    """A migration run was refused or failed."""


@dataclass(frozen=True)
class Migration:
    """One migration file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "Migration":
        match = _FILENAME_RE.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )

    @property
    def label(self) -> str:
        return f"v{self.version}_{self.name}"


@dataclass
class MigrationOutcome:
    """What happened when one migration was attempted."""

    migration: Migration
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class SchemaCheck:
    name: str
    passed: bool
    detail: str = ""


@dataclass
class MigrationStatus:
    exists: bool
    current_version: str | None = None
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)


def discover_migrations(directory: Path | None = None) -> list[Migration]:
    """Migration files in ascending version order."""
    found = []
    for path in (directory or MIGRATIONS_DIR).glob("v*.sql"):
        try:
            found.append(Migration.load(path))
        except ValueError as e:
            logger.warning("migration_file_ignored", path=str(path), error=str(e))

    found.sort(key=lambda m: int(m.version))
    versions = [m.version for m in found]
    if len(set(versions)) != len(versions):
        raise MigrationError(f"Duplicate migration versions in {versions}")
    return found


async def applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to their recorded checksums."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await applied_checksums(conn)
    return max(applied, key=int) if applied else None


def pending_migrations(
    migrations: list[Migration], applied: dict[str, str]
) -> list[Migration]:
    """Migrations still to run; raises if an applied file was edited."""
    edited = [
        m.label
        for m in migrations
        if m.version in applied and applied[m.version] != m.checksum
    ]
    if edited:
        raise MigrationError(f"Applied migrations were modified: {', '.join(edited)}")
    return [m for m in migrations if m.version not in applied]


async def apply_migration(
    conn: aiosqlite.Connection, migration: Migration
) -> MigrationOutcome:
    """Run one migration script and record it."""
    started = time.perf_counter()
    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed = int((time.perf_counter() - started) * 1000)
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", migration=migration.label, error=str(e))
        return MigrationOutcome(
            migration=migration,
            success=False,
            execution_time_ms=int((time.perf_counter() - started) * 1000),
            error=str(e),
        )

    logger.info("migration_applied", migration=migration.label, execution_time_ms=elapsed)
    return MigrationOutcome(migration=migration, success=True, execution_time_ms=elapsed)


async def create_backup(db_path: Path) -> Path:
    """Snapshot the database next to itself."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    async with aiosqlite.connect(db_path) as source, aiosqlite.connect(backup_path) as target:
        await source.backup(target)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def restore_backup(db_path: Path, backup_path: Path) -> None:
    """Overwrite the database with a snapshot taken by create_backup."""
    async with aiosqlite.connect(backup_path) as source, aiosqlite.connect(db_path) as target:
        await source.backup(target)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    migrations_dir: Path | None = None,
) -> list[MigrationOutcome]:
    """
    Bring the database up to the latest schema version.

    Returns the outcome of every migration attempted. The run stops at
    the first failure; an existing database is then restored from its
    snapshot.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    migrations = discover_migrations(migrations_dir)
    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = await create_backup(db_path)

    outcomes: list[MigrationOutcome] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.execute(_SCHEMA_MIGRATIONS_DDL)
        await conn.commit()

        for migration in pending_migrations(migrations, await applied_checksums(conn)):
            outcome = await apply_migration(conn, migration)
            outcomes.append(outcome)
            if not outcome.success:
                break

    failed = any(not o.success for o in outcomes)
    if backup_path is not None:
        if failed:
            await restore_backup(db_path, backup_path)
        else:
            backup_path.unlink()

    logger.info(
        "database_initialized",
        db_path=str(db_path),
        applied=[o.migration.label for o in outcomes if o.success],
        failed=failed,
    )
    return outcomes


async def get_migration_status(
    db_path: Path | None = None, migrations_dir: Path | None = None
) -> MigrationStatus:
    db_path = db_path or get_settings().storage.db_path
    if not db_path.exists():
        return MigrationStatus(exists=False)

    async with aiosqlite.connect(db_path) as conn:
        applied = await applied_checksums(conn)

    return MigrationStatus(
        exists=True,
        current_version=max(applied, key=int) if applied else None,
        applied=sorted(applied, key=int),
        pending=[
            m.version
            for m in discover_migrations(migrations_dir)
            if m.version not in applied
        ],
    )


async def verify_schema_integrity(db_path: Path | None = None) -> list[SchemaCheck]:
    """Page integrity, foreign keys and the presence of required objects."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = len(await cursor.fetchall())

        cursor = await conn.execute("SELECT type, name FROM sqlite_master")
        objects = {(row[0], row[1]) for row in await cursor.fetchall()}

    missing_tables = [t for t in REQUIRED_TABLES if ("table", t) not in objects]
    missing_triggers = [t for t in REQUIRED_TRIGGERS if ("trigger", t) not in objects]

    return [
        SchemaCheck("integrity", integrity == "ok", integrity),
        SchemaCheck("foreign_keys", fk_violations == 0, f"{fk_violations} violations"),
        SchemaCheck("required_tables", not missing_tables, ", ".join(missing_tables)),
        SchemaCheck("required_triggers", not missing_triggers, ", ".join(missing_triggers)),
    ]


def main() -> None:
    """Entry point of the ``chandlery-migrate`` command."""
    import argparse

    parser = argparse.ArgumentParser(description="Chandlery database migrations")
    parser.add_argument("--db-path", type=Path, help="Database file (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show applied and pending versions")
    mode.add_argument("--verify", action="store_true", help="Check schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration snapshot")
    args = parser.parse_args()
    configure_logging()

    async def run() -> int:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"exists:  {status.exists}")
            print(f"current: {status.current_version or '-'}")
            print(f"pending: {', '.join(status.pending) or '-'}")
            return 0

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                mark = "ok" if check.passed else "FAIL"
                print(f"[{mark}] {check.name} {check.detail}".rstrip())
            return 0 if all(c.passed for c in checks) else 1

        outcomes = await initialize_database(
            args.db_path, create_backup_before=not args.no_backup
        )
        for outcome in outcomes:
            mark = "ok" if outcome.success else "FAIL"
            print(f"[{mark}] {outcome.migration.label} ({outcome.execution_time_ms}ms)")
            if outcome.error:
                print(f"       {outcome.error}")
        return 0 if all(o.success for o in outcomes) else 1

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
