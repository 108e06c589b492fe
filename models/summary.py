"""Derived monthly summaries. Nothing here is persisted."""

from dataclasses import dataclass, field
from decimal import Decimal

from models.category import CategoryType


@dataclass
class MonthlyTotals:
    """Income, expenses and balance for one month window.

    Attributes:
        income: Sum of non-negative amounts.
        expenses: Magnitude of the sum of negative amounts.
        balance: income - expenses.
    """

    income: Decimal = field(default_factory=Decimal)
    expenses: Decimal = field(default_factory=Decimal)

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses

    def to_dict(self) -> dict:
        return {
            "income": self.income,
            "expenses": self.expenses,
            "balance": self.balance,
        }


@dataclass
class CategoryMonthlyTotal:
    """Summed amount for one category within a month window."""

    category_id: int
    category_name: str
    category_type: CategoryType
    total: Decimal
