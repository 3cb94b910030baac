"""Database migrations module."""

from chandlery.infrastructure.storage.sqlite.migrations.migrator import (
    Migration,
    MigrationError,
    MigrationOutcome,
    MigrationStatus,
    SchemaCheck,
    create_backup,
    discover_migrations,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)

__all__ = [
    "Migration",
    "MigrationError",
    "MigrationOutcome",
    "MigrationStatus",
    "SchemaCheck",
    "create_backup",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "restore_backup",
    "verify_schema_integrity",
]
