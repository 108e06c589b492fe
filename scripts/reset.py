#!/usr/bin/env python3
"""Reset script for Sumly.

This script will:
1. Delete the data directory (including database and logs)
2. Recreate the database with the schema and default categories
"""

import shutil
import sys

from config import Config, load_config
from db.manager import DatabaseManager


def reset_data(config: Config) -> DatabaseManager:
    """Delete all stored data and return a freshly initialized store.

    Args:
        config: Configuration naming the data directory to wipe.

    Returns:
        The initialized DatabaseManager for the new database.
    """
    if config.base_dir.exists():
        shutil.rmtree(config.base_dir)

    return DatabaseManager(config).initialize()


def reset():
    """Reset the application state."""
    print("Sumly Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print("To enable reset, set enable_reset=true in ~/.config/sumly.toml")
        sys.exit(1)

    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")

    response = input("\nThis will delete ALL data. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    reset_data(config)

    print("\n" + "=" * 50)
    print("Reset complete! Database has been recreated.")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
