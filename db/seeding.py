"""Default category seeding."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from config import get_seed_dir
from tools.dates import utc_timestamp
from logger import get_logger

logger = get_logger()


def load_default_categories(seed_file: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Load the default category definitions from YAML.

    Args:
        seed_file: Optional override of the seed file. Defaults to
                   db/seed/categories.yaml.

    Returns:
        List of dictionaries with ``name``, ``type`` and ``color`` keys.

    Raises:
        FileNotFoundError: If the seed file doesn't exist.
        yaml.YAMLError: If the YAML is invalid.
    """
    seed_file = seed_file or get_seed_dir() / "categories.yaml"

    with open(seed_file, "r") as f:
        return yaml.safe_load(f) or []


def seed_default_categories(conn, categories: List[Dict[str, Any]]) -> int:
    """Insert default categories that are not present yet.

    Existing categories with the same name are left untouched.

    Returns:
        Number of categories inserted.
    """
    created_at = utc_timestamp()
    inserted = 0

    for category in categories:
        cursor = conn.execute(
            """
            INSERT OR IGNORE INTO categories (name, type, color, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (category["name"], category["type"], category["color"], created_at),
        )
        inserted += cursor.rowcount

    if inserted:
        logger.info(f"Seeded {inserted} default categories")
    return inserted
