"""Schema migration helpers.

Migrations are plain ``.sql`` files applied in filename order. Applied files
are recorded in ``schema_migrations`` so each runs at most once.
"""

from pathlib import Path
from typing import List, Set
from logger import get_logger

logger = get_logger()


def init_schema_migrations_table(conn):
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()


def get_applied_migrations(conn) -> Set[str]:
    cursor = conn.execute(
        "SELECT migration_file FROM schema_migrations ORDER BY migration_file"
    )
    return {row[0] for row in cursor.fetchall()}


def get_available_migrations(migrations_dir: Path) -> List[str]:
    if not migrations_dir.exists():
        return []

    return sorted(file_path.name for file_path in migrations_dir.glob("*.sql"))


def get_pending_migrations(conn, migrations_dir: Path) -> List[str]:
    """List migrations that exist on disk but are not yet recorded."""
    init_schema_migrations_table(conn)
    applied = get_applied_migrations(conn)
    return [m for m in get_available_migrations(migrations_dir) if m not in applied]


def apply_migration(conn, migrations_dir: Path, migration_file: str):
    migration_path = migrations_dir / migration_file

    with open(migration_path, "r") as f:
        sql = f.read()

    try:
        conn.executescript(sql)
        conn.execute(
            "INSERT INTO schema_migrations (migration_file) VALUES (?)",
            (migration_file,),
        )
        conn.commit()
        logger.info(f"Applied migration: {migration_file}")
    except Exception as e:
        conn.rollback()
        logger.error(f"Error applying migration {migration_file}: {e}")
        raise


def apply_pending_migrations(conn, migrations_dir: Path) -> List[str]:
    """Apply every pending migration in order.

    Args:
        conn: Open SQLite connection.
        migrations_dir: Directory containing the ``.sql`` files.

    Returns:
        Names of the migrations that were applied (empty if none were pending).
    """
    pending = get_pending_migrations(conn, migrations_dir)

    for migration in pending:
        apply_migration(conn, migrations_dir, migration)

    return pending
