"""Transaction service for database operations."""

from typing import List, Optional, Tuple
from decimal import Decimal
from errors import NotFoundError, ValidationError
from models.category import CategoryType
from models.transaction import Transaction, TransactionInput, normalize_amount
from tools.dates import DateLike, to_date_string, today, utc_timestamp
from logger import get_logger

logger = get_logger()

DEFAULT_LIST_LIMIT = 50

# SQL Query Constants
_TRANSACTION_SELECT = """
    SELECT t.id, t.description, t.amount, t.occurred_on, t.category_id, t.created_at,
           c.name AS category_name, c.type AS category_type
    FROM transactions t
    LEFT JOIN categories c ON c.id = t.category_id
"""

_TRANSACTION_ORDER = "ORDER BY t.occurred_on DESC, t.created_at DESC, t.id DESC"


class TransactionService:
    """Service for managing transactions.

    Amounts are signed on the way in: the category's type decides the sign
    when ``category_id`` points at an existing category, otherwise the type
    given in the input does.
    """

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_recent(self, limit: int = DEFAULT_LIST_LIMIT) -> List[Transaction]:
        """Get the most recent transactions.

        Args:
            limit: Maximum number of transactions to return (default 50).

        Returns:
            List of Transaction objects, newest occurrence date first, ties
            broken by creation time (newest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"{_TRANSACTION_SELECT} {_TRANSACTION_ORDER} LIMIT ?",
                (limit,),
            )
            return [Transaction.from_row(row) for row in cursor.fetchall()]

    def find_for_range(self, start_date: DateLike, end_date: DateLike) -> List[Transaction]:
        """Get transactions within a date range.

        Args:
            start_date: Start date (inclusive), a date or YYYY-MM-DD string.
            end_date: End date (inclusive), a date or YYYY-MM-DD string.

        Returns:
            List of Transaction objects ordered like ``find_recent``, unbounded.

        Raises:
            ValidationError: If either bound is not a valid date.
        """
        start = _range_bound(start_date)
        end = _range_bound(end_date)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                {_TRANSACTION_SELECT}
                WHERE t.occurred_on BETWEEN ? AND ?
                {_TRANSACTION_ORDER}
                """,
                (start, end),
            )
            return [Transaction.from_row(row) for row in cursor.fetchall()]

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return self._find(conn, transaction_id)

    def create(self, data: TransactionInput) -> Transaction:
        """Create a transaction.

        Args:
            data: Transaction fields. ``occurred_on`` defaults to today.

        Returns:
            The stored Transaction, joined with its category.

        Raises:
            ValidationError: If the description is empty or the date is invalid.
        """
        description = _validated_description(data)
        occurred_on = _validated_date(data)

        with self.db_manager.connect() as conn:
            category_id, effective_type, amount = self._resolve(conn, data)
            cursor = conn.execute(
                """
                INSERT INTO transactions (description, amount, occurred_on, category_id, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (description, float(amount), occurred_on, category_id, utc_timestamp()),
            )
            transaction = self._find(conn, cursor.lastrowid)

        transaction.category_type = effective_type
        logger.info(
            f"Created transaction {transaction.id} '{description}' "
            f"{transaction.amount} on {occurred_on}"
        )
        return transaction

    def update(self, transaction_id: int, data: TransactionInput) -> Transaction:
        """Update an existing transaction.

        Args:
            transaction_id: The transaction ID to update.
            data: New transaction fields, signed the same way as ``create``.

        Returns:
            The updated Transaction, joined with its category.

        Raises:
            ValidationError: If the description is empty or the date is invalid.
            NotFoundError: If the transaction doesn't exist.
        """
        description = _validated_description(data)
        occurred_on = _validated_date(data)

        with self.db_manager.connect() as conn:
            category_id, effective_type, amount = self._resolve(conn, data)
            cursor = conn.execute(
                """
                UPDATE transactions
                SET description = ?, amount = ?, occurred_on = ?, category_id = ?
                WHERE id = ?
                """,
                (description, float(amount), occurred_on, category_id, transaction_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Transaction not found.")

            transaction = self._find(conn, transaction_id)

        transaction.category_type = effective_type
        logger.info(f"Updated transaction {transaction_id}")
        return transaction

    def delete(self, transaction_id: int) -> bool:
        """Delete a transaction by ID. Deleting a missing ID is not an error.

        Returns:
            True if a transaction was deleted, False if none matched.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted transaction {transaction_id}")
        return deleted

    def _resolve(
        self, conn, data: TransactionInput
    ) -> Tuple[Optional[int], CategoryType, Decimal]:
        """Work out the category link, effective type and signed amount for an input.

        A category_id that does not resolve is dropped and ``data.type`` is used.
        """
        category_id = data.category_id
        effective_type = data.type
        if category_id is not None:
            row = conn.execute(
                "SELECT type FROM categories WHERE id = ?", (data.category_id,)
            ).fetchone()
            if row:
                effective_type = CategoryType(row["type"])
            else:
                logger.warning(
                    f"Category {category_id} not found; storing as uncategorized "
                    f"'{data.type.value}'"
                )
                category_id = None
        return category_id, effective_type, normalize_amount(data.amount, effective_type)

    def _find(self, conn, transaction_id: int) -> Optional[Transaction]:
        row = conn.execute(
            f"{_TRANSACTION_SELECT} WHERE t.id = ?", (transaction_id,)
        ).fetchone()
        return Transaction.from_row(row) if row else None


def _validated_description(data: TransactionInput) -> str:
    description = (data.description or "").strip()
    if not description:
        raise ValidationError("Description is required")
    return description


def _validated_date(data: TransactionInput) -> str:
    if not data.occurred_on:
        return today()
    try:
        return to_date_string(data.occurred_on)
    except ValueError as e:
        raise ValidationError(f"Date must be YYYY-MM-DD, got {data.occurred_on!r}") from e


def _range_bound(value: DateLike) -> str:
    if value is None:
        raise ValidationError("Date range needs both a start and an end")
    try:
        return to_date_string(value)
    except ValueError as e:
        raise ValidationError(f"Date must be YYYY-MM-DD, got {value!r}") from e
