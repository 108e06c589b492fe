"""Category service for database operations."""

from typing import List, Optional
from errors import (
    ConstraintKind,
    ConstraintViolation,
    DuplicateNameError,
    NotFoundError,
    ValidationError,
)
from models.category import Category, CategoryInput
from tools.dates import utc_timestamp
from logger import get_logger

logger = get_logger()

_CATEGORY_SELECT_FIELDS = "id, name, type, color, created_at"

DUPLICATE_NAME_MESSAGE = "A category with that name already exists."


def _validated_name(data: CategoryInput) -> str:
    name = (data.name or "").strip()
    if not name:
        raise ValidationError("Category name is required")
    return name


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects ordered by type descending ("income"
            before "expense"), then by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY type DESC, name ASC"
            )
            return [Category.from_row(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return self._find(conn, category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name (case-sensitive).

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            row = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE name = ?",
                (name,),
            ).fetchone()
            return Category.from_row(row) if row else None

    def create(self, data: CategoryInput) -> Category:
        """Create a new category.

        Args:
            data: Name, type and optional color. The name is trimmed; a blank
                  color falls back to the type's default.

        Returns:
            The created Category with id and created_at populated.

        Raises:
            ValidationError: If the name is empty after trimming.
            DuplicateNameError: If a category with that name already exists.
        """
        name = _validated_name(data)
        color = data.resolved_color()

        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "INSERT INTO categories (name, type, color, created_at) VALUES (?, ?, ?, ?)",
                    (name, data.type.value, color, utc_timestamp()),
                )
                category = self._find(conn, cursor.lastrowid)
        except ConstraintViolation as e:
            if e.kind == ConstraintKind.UNIQUE:
                raise DuplicateNameError(DUPLICATE_NAME_MESSAGE) from e
            raise

        logger.info(f"Created category '{category.name}' ({category.type.value})")
        return category

    def update(self, category_id: int, data: CategoryInput) -> Category:
        """Update an existing category.

        Changing the type re-signs every transaction linked to the category
        (expense: negative, income: positive). The category change and the
        re-signing are committed together or not at all.

        Args:
            category_id: The category ID to update.
            data: New name, type and optional color.

        Returns:
            The updated Category object.

        Raises:
            ValidationError: If the name is empty after trimming.
            NotFoundError: If the category doesn't exist.
            DuplicateNameError: If another category already has that name.
        """
        name = _validated_name(data)
        color = data.resolved_color()

        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "UPDATE categories SET name = ?, type = ?, color = ? WHERE id = ?",
                    (name, data.type.value, color, category_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError("Category not found.")

                resigned = conn.execute(
                    """
                    UPDATE transactions
                    SET amount = CASE WHEN ? = 'expense' THEN -ABS(amount) ELSE ABS(amount) END
                    WHERE category_id = ?
                    """,
                    (data.type.value, category_id),
                ).rowcount

                category = self._find(conn, category_id)
        except ConstraintViolation as e:
            if e.kind == ConstraintKind.UNIQUE:
                raise DuplicateNameError(DUPLICATE_NAME_MESSAGE) from e
            raise

        logger.info(
            f"Updated category {category_id} '{category.name}' "
            f"({category.type.value}, {resigned} transactions re-signed)"
        )
        return category

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Linked transactions are kept; their category_id becomes NULL.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted category {category_id}")
        return deleted

    def _find(self, conn, category_id: int) -> Optional[Category]:
        row = conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
            (category_id,),
        ).fetchone()
        return Category.from_row(row) if row else None

