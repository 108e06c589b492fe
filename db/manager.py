"""Database manager for SQLite connections, schema setup and seeding."""

import sqlite3
import threading
from contextlib import contextmanager
from config import Config, get_migrations_dir
from db.schema import apply_pending_migrations
from db.seeding import load_default_categories, seed_default_categories
from errors import ConstraintKind, ConstraintViolation, StorageError
from logger import get_logger

logger = get_logger()

# Extended result codes reported on sqlite3.IntegrityError.sqlite_errorcode
_CONSTRAINT_KINDS = {
    sqlite3.SQLITE_CONSTRAINT_UNIQUE: ConstraintKind.UNIQUE,
    sqlite3.SQLITE_CONSTRAINT_PRIMARYKEY: ConstraintKind.PRIMARY_KEY,
    sqlite3.SQLITE_CONSTRAINT_FOREIGNKEY: ConstraintKind.FOREIGN_KEY,
    sqlite3.SQLITE_CONSTRAINT_NOTNULL: ConstraintKind.NOT_NULL,
    sqlite3.SQLITE_CONSTRAINT_CHECK: ConstraintKind.CHECK,
}


def classify_integrity_error(error: sqlite3.IntegrityError) -> ConstraintKind:
    """Map an IntegrityError to the kind of constraint that rejected the write."""
    code = getattr(error, "sqlite_errorcode", None)
    return _CONSTRAINT_KINDS.get(code, ConstraintKind.OTHER)


class DatabaseManager:
    """Owns the SQLite store for the lifetime of the process.

    One instance is created by the composition root and shared by every
    service. The schema and default categories are set up on first use;
    every ``connect()`` block is a single atomic unit of work, and units of
    work are serialized across threads.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the database manager.

        Args:
            config: Config object containing database configuration.
        """
        self.config = config
        self._lock = threading.RLock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _open(self) -> sqlite3.Connection:
        db_path = self.config.db_path
        conn = None
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(db_path, timeout=self.config.db_timeout)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
        except (OSError, sqlite3.Error) as e:
            if conn is not None:
                conn.close()
            logger.error(f"Unable to open database at {db_path}: {e}")
            raise StorageError(f"Unable to open database at {db_path}") from e

        return conn

    def initialize(self) -> "DatabaseManager":
        """Apply pending migrations and seed default categories once.

        Safe to call any number of times from any thread; only the first
        call does work.

        Returns:
            This manager, ready for use.

        Raises:
            StorageError: If the schema or seed data could not be applied.
        """
        with self._lock:
            if self._initialized:
                return self

            conn = self._open()
            try:
                applied = apply_pending_migrations(conn, self.get_migrations_dir())
                if applied:
                    logger.debug(f"Schema migrations applied: {', '.join(applied)}")
                seed_default_categories(conn, load_default_categories())
                conn.commit()
            except Exception as e:
                conn.rollback()
                logger.error(f"Database initialization failed: {e}")
                raise StorageError(f"Database initialization failed: {e}") from e
            finally:
                conn.close()

            self._initialized = True
            logger.debug(f"Database ready at {self.config.db_path}")
            return self

    @contextmanager
    def connect(self, initialize: bool = True):
        """Get a database connection scoped to one unit of work.

        The block is committed if it exits normally and rolled back if it
        raises. Integrity errors are re-raised as ConstraintViolation.

        Args:
            initialize: Set up the schema first if needed. Migration tooling
                        passes False to inspect the store as it is.

        Yields:
            sqlite3.Connection: Database connection.
        """
        with self._lock:
            if initialize:
                self.initialize()
            conn = self._open()
            try:
                yield conn
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                kind = classify_integrity_error(e)
                logger.debug(f"Constraint violation ({kind.value}): {e}")
                raise ConstraintViolation(str(e), kind) from e
            except BaseException:
                conn.rollback()
                raise
            finally:
                conn.close()

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path.

        Returns:
            Path: Path to the migrations directory.
        """
        return get_migrations_dir()
