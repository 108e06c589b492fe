from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from errors import ValidationError
from models.category import CategoryType, parse_category_type


def normalize_amount(amount: Union[Decimal, float, int, str], type: CategoryType) -> Decimal:
    """Sign an amount for its effective type.

    Expenses are stored negative and income non-negative, whatever sign the
    caller supplied.
    """
    try:
        magnitude = abs(Decimal(str(amount)))
    except InvalidOperation as e:
        raise ValidationError(f"Amount must be a number, got {amount!r}") from e
    if not magnitude.is_finite():
        raise ValidationError(f"Amount must be a finite number, got {amount!r}")
    if CategoryType(type) == CategoryType.EXPENSE:
        return -magnitude
    return magnitude


@dataclass
class Transaction:
    """A stored transaction joined with its category.

    ``category_name`` and ``category_type`` are None when the transaction is
    uncategorized or its category no longer exists.
    """

    id: int
    description: str
    amount: Decimal  # negative for expenses
    occurred_on: str  # YYYY-MM-DD
    category_id: Optional[int]
    created_at: str
    category_name: Optional[str] = None
    category_type: Optional[CategoryType] = None

    @classmethod
    def from_row(cls, row) -> "Transaction":
        """Create a Transaction from a joined ``transactions`` row."""
        category_type = row["category_type"]
        return cls(
            id=row["id"],
            description=row["description"],
            amount=Decimal(str(row["amount"])),
            occurred_on=row["occurred_on"],
            category_id=row["category_id"],
            created_at=row["created_at"],
            category_name=row["category_name"],
            category_type=CategoryType(category_type) if category_type else None,
        )

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict:
        """Convert transaction to a plain dictionary."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": str(self.amount),
            "occurred_on": self.occurred_on,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "category_type": self.category_type.value if self.category_type else None,
            "created_at": self.created_at,
        }


@dataclass
class TransactionInput:
    """Fields accepted when creating or updating a transaction.

    Attributes:
        description: What the money was for (required).
        amount: Amount in either sign; the stored sign follows the effective type.
        occurred_on: Date of the transaction. Defaults to today when empty.
        category_id: Optional category; its type wins over ``type`` when it exists.
        type: Type used when there is no (resolvable) category.
    """

    description: str
    amount: Union[Decimal, float, int, str]
    occurred_on: Optional[Union[date, str]] = None
    category_id: Optional[int] = None
    type: CategoryType = CategoryType.EXPENSE

    def __post_init__(self):
        self.type = parse_category_type(self.type)
