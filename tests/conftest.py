"""Shared pytest fixtures for all tests."""

import logging
import pytest

from config import Config
from db.manager import DatabaseManager
from services.base import Services


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "sumly",
        db_data_dir=tmp_path / "sumly" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "sumly" / "logs",
        db_timeout=5.0,
    )


@pytest.fixture
def db_manager(test_config):
    """Create a DatabaseManager over a fresh temporary database file.

    The schema is applied on first use, like in the application.

    Returns:
        DatabaseManager: Database manager for the test database.
    """
    return DatabaseManager(test_config)


@pytest.fixture
def services(test_config, db_manager):
    """Create a Services container with test database.

    This fixture provides access to all services with a clean test database
    holding only the default categories.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager).initialize()


@pytest.fixture
def caplog_sumly(caplog):
    """Capture INFO records from the application logger (CLI output)."""
    caplog.set_level(logging.INFO, logger="sumly")
    return caplog
