"""Category model for transaction classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import ValidationError


class CategoryType(str, Enum):
    """Direction of money for a category."""

    INCOME = "income"
    EXPENSE = "expense"


def parse_category_type(value) -> CategoryType:
    """Coerce a string or CategoryType, rejecting unknown types."""
    try:
        return CategoryType(value)
    except ValueError as e:
        raise ValidationError(f"Unknown category type: {value!r}") from e


# Fallback colors when a category is saved without one
DEFAULT_COLORS = {
    CategoryType.INCOME: "#2e7d32",
    CategoryType.EXPENSE: "#c62828",
}


@dataclass
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique, case-sensitive).
        type: Whether the category records income or expenses.
        color: Display color as a hex code, e.g. "#c62828".
        created_at: ISO timestamp of creation.
    """

    id: int
    name: str
    type: CategoryType
    color: str
    created_at: str

    @classmethod
    def from_row(cls, row) -> "Category":
        """Create a Category from a ``categories`` row."""
        return cls(
            id=row["id"],
            name=row["name"],
            type=CategoryType(row["type"]),
            color=row["color"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict:
        """Convert category to a plain dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "color": self.color,
            "created_at": self.created_at,
        }


@dataclass
class CategoryInput:
    """Fields accepted when creating or updating a category."""

    name: str
    type: CategoryType
    color: Optional[str] = None

    def __post_init__(self):
        self.type = parse_category_type(self.type)

    def resolved_color(self) -> str:
        """The given color, or the type's fallback when blank or missing."""
        color = (self.color or "").strip()
        return color or DEFAULT_COLORS[self.type]
