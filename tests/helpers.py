"""Helper utilities for tests."""

from typing import Optional


def insert_transaction_row(
    db_manager,
    description: str,
    amount: float,
    occurred_on: str,
    category_id: Optional[int] = None,
    created_at: str = "2024-01-01T00:00:00.000000+00:00",
) -> int:
    """Insert a transaction row directly, bypassing sign normalization.

    Useful to control ``created_at`` for ordering tests, or to start from a
    row whose sign disagrees with its category.

    Returns:
        The new row's id.
    """
    with db_manager.connect() as conn:
        cursor = conn.execute(
            """
            INSERT INTO transactions (description, amount, occurred_on, category_id, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (description, amount, occurred_on, category_id, created_at),
        )
        return cursor.lastrowid


def stored_amount(db_manager, transaction_id: int) -> Optional[float]:
    """Read the raw stored amount for a transaction."""
    with db_manager.connect() as conn:
        row = conn.execute(
            "SELECT amount FROM transactions WHERE id = ?", (transaction_id,)
        ).fetchone()
        return row["amount"] if row else None
