import sqlite3
import threading

import pytest

from db.manager import DatabaseManager, classify_integrity_error
from db.schema import get_applied_migrations, get_available_migrations
from db.seeding import load_default_categories
from errors import ConstraintKind, ConstraintViolation, StorageError


def _category_count(db_manager):
    with db_manager.connect() as conn:
        return conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]


class TestDatabaseManager:
    """Tests for DatabaseManager."""

    def test_initialize_creates_schema_and_seeds(self, db_manager):
        """Test first initialization applies migrations and seeds categories."""
        db_manager.initialize()

        assert db_manager.initialized
        assert db_manager.get_db_path().exists()
        assert _category_count(db_manager) == 10

        with db_manager.connect() as conn:
            applied = get_applied_migrations(conn)
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
            indexes = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'")
            }

        assert applied == set(get_available_migrations(db_manager.get_migrations_dir()))
        assert {"categories", "transactions", "schema_migrations"} <= tables
        assert {"idx_transactions_occurred_on", "idx_transactions_category"} <= indexes

    def test_initialize_is_idempotent(self, db_manager):
        """Test that repeated initialization returns the same manager."""
        assert db_manager.initialize() is db_manager
        assert db_manager.initialize() is db_manager

        assert _category_count(db_manager) == 10

    def test_reopening_existing_database_does_not_reseed(self, test_config, db_manager):
        """Test that a second manager over the same file keeps existing data."""
        db_manager.initialize()
        with db_manager.connect() as conn:
            conn.execute("UPDATE categories SET color = '#000000' WHERE name = 'Salary'")

        reopened = DatabaseManager(test_config).initialize()

        assert _category_count(reopened) == 10
        with reopened.connect() as conn:
            color = conn.execute(
                "SELECT color FROM categories WHERE name = 'Salary'"
            ).fetchone()[0]
        assert color == "#000000"

    def test_concurrent_first_initialization_seeds_once(self, db_manager):
        """Test that racing first calls do not double-apply or double-seed."""
        errors = []
        barrier = threading.Barrier(8)

        def worker():
            try:
                barrier.wait()
                db_manager.initialize()
            except Exception as e:  # pragma: no cover - surfaced via assert below
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert _category_count(db_manager) == 10

    def test_connect_initializes_lazily(self, db_manager):
        """Test that the first unit of work sets the store up."""
        assert not db_manager.initialized

        assert _category_count(db_manager) == 10
        assert db_manager.initialized

    def test_connect_rolls_back_on_error(self, db_manager):
        """Test that a failing unit of work leaves no partial writes."""
        with pytest.raises(RuntimeError):
            with db_manager.connect() as conn:
                conn.execute(
                    "INSERT INTO categories (name, type, color) VALUES ('Half', 'expense', '#fff')"
                )
                raise RuntimeError("boom")

        with db_manager.connect() as conn:
            row = conn.execute("SELECT id FROM categories WHERE name = 'Half'").fetchone()
        assert row is None

    def test_unique_violation_is_typed(self, db_manager):
        """Test that a duplicate name surfaces as a UNIQUE ConstraintViolation."""
        with pytest.raises(ConstraintViolation) as exc_info:
            with db_manager.connect() as conn:
                conn.execute(
                    "INSERT INTO categories (name, type, color) VALUES ('Salary', 'income', '#fff')"
                )

        assert exc_info.value.kind == ConstraintKind.UNIQUE
        assert isinstance(exc_info.value, StorageError)
        assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)

    def test_check_violation_is_typed(self, db_manager):
        """Test that an invalid category type is reported as a CHECK violation."""
        with pytest.raises(ConstraintViolation) as exc_info:
            with db_manager.connect() as conn:
                conn.execute(
                    "INSERT INTO categories (name, type, color) VALUES ('Odd', 'transfer', '#fff')"
                )

        assert exc_info.value.kind == ConstraintKind.CHECK

    def test_foreign_keys_are_enforced(self, db_manager):
        """Test that transactions cannot point at missing categories."""
        with pytest.raises(ConstraintViolation) as exc_info:
            with db_manager.connect() as conn:
                conn.execute(
                    """
                    INSERT INTO transactions (description, amount, occurred_on, category_id)
                    VALUES ('x', 1, '2024-01-01', 9999)
                    """
                )

        assert exc_info.value.kind == ConstraintKind.FOREIGN_KEY

    def test_unopenable_database_raises_storage_error(self, test_config, tmp_path):
        """Test that a database path that cannot be created raises StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        test_config.db_data_dir = blocker / "db"

        with pytest.raises(StorageError):
            DatabaseManager(test_config).initialize()

    def test_failed_connection_setup_closes_connection(self, test_config, monkeypatch):
        """Test that a failing pragma closes the connection and raises StorageError."""

        class FailingConnection:
            closed = False

            def execute(self, sql, *params):
                raise sqlite3.OperationalError("disk I/O error")

            def close(self):
                self.closed = True

        conn = FailingConnection()
        monkeypatch.setattr(sqlite3, "connect", lambda *args, **kwargs: conn)

        with pytest.raises(StorageError):
            DatabaseManager(test_config).initialize()

        assert conn.closed


def test_classify_unknown_error_is_other():
    """Test that an IntegrityError without a known code maps to OTHER."""
    assert classify_integrity_error(sqlite3.IntegrityError("mystery")) == ConstraintKind.OTHER


def test_default_seed_file_lists_ten_categories():
    """Test the shipped seed file."""
    categories = load_default_categories()

    assert len(categories) == 10
    assert {c["type"] for c in categories} == {"income", "expense"}
    assert all(c["color"].startswith("#") for c in categories)
