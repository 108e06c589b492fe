"""Monthly aggregation over stored transactions."""

from decimal import Decimal
from typing import Dict, List, Optional
from errors import ValidationError
from models.summary import CategoryMonthlyTotal, MonthlyTotals
from models.category import CategoryType
from tools.dates import DateLike, MonthBounds, month_bounds


class ReportService:
    """Computes month-window totals from the transaction service's data.

    Sums are taken over ``Decimal`` amounts so cents add up exactly.
    """

    def __init__(self, transactions):
        """Initialize the report service.

        Args:
            transactions: TransactionService used to read the month window.
        """
        self.transactions = transactions

    def month_window(self, target: Optional[DateLike] = None) -> MonthBounds:
        """Get the first and last day of the month containing ``target``.

        Raises:
            ValidationError: If ``target`` is not a valid date.
        """
        try:
            return month_bounds(target)
        except ValueError as e:
            raise ValidationError(f"Date must be YYYY-MM-DD, got {target!r}") from e

    def monthly_totals(self, target: Optional[DateLike] = None) -> MonthlyTotals:
        """Get income, expenses and balance for a month.

        Args:
            target: Any day in the month to summarize. Defaults to today.

        Returns:
            MonthlyTotals; all zeros when the month has no transactions.

        Raises:
            ValidationError: If ``target`` is not a valid date.
        """
        start, end = self.month_window(target)
        totals = MonthlyTotals()

        for transaction in self.transactions.find_for_range(start, end):
            if transaction.amount >= 0:
                totals.income += transaction.amount
            else:
                totals.expenses += -transaction.amount

        return totals

    def monthly_totals_by_category(
        self, target: Optional[DateLike] = None
    ) -> List[CategoryMonthlyTotal]:
        """Get the summed amount per category for a month.

        Uncategorized transactions are left out. Rows are ordered by category
        type descending, then by the stored sum descending. Expense totals
        are reported with their sign flipped, so an expense category that
        spent 250 reports ``Decimal("250")``.

        Args:
            target: Any day in the month to summarize. Defaults to today.

        Returns:
            List of CategoryMonthlyTotal, one per category with activity.

        Raises:
            ValidationError: If ``target`` is not a valid date.
        """
        start, end = self.month_window(target)
        sums: Dict[int, CategoryMonthlyTotal] = {}

        for transaction in self.transactions.find_for_range(start, end):
            # category_name is NULL when the link is missing or dangling
            if transaction.category_id is None or transaction.category_name is None:
                continue

            if transaction.category_id not in sums:
                sums[transaction.category_id] = CategoryMonthlyTotal(
                    category_id=transaction.category_id,
                    category_name=transaction.category_name,
                    category_type=transaction.category_type,
                    total=Decimal("0"),
                )
            sums[transaction.category_id].total += transaction.amount

        ordered = sorted(
            sums.values(),
            key=lambda row: (row.category_type.value, row.total),
            reverse=True,
        )

        for row in ordered:
            if row.category_type == CategoryType.EXPENSE:
                row.total = -row.total

        return ordered
