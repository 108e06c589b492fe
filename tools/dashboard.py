"""Dashboard snapshot: everything the home screen shows, in one call."""

from dataclasses import dataclass, field
from typing import List, Optional

from models.category import Category
from models.summary import CategoryMonthlyTotal, MonthlyTotals
from models.transaction import Transaction
from tools.dates import DateLike, MonthBounds


@dataclass
class Dashboard:
    """Categories, recent transactions and the month's totals."""

    month: MonthBounds
    categories: List[Category] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    totals: MonthlyTotals = field(default_factory=MonthlyTotals)
    category_totals: List[CategoryMonthlyTotal] = field(default_factory=list)


def get_dashboard(
    services, target: Optional[DateLike] = None, limit: Optional[int] = None
) -> Dashboard:
    """Load a dashboard snapshot.

    Args:
        services: Services container.
        target: Any day in the month to summarize. Defaults to today.
        limit: Number of recent transactions. Defaults to the configured
               ``recent_limit``.

    Returns:
        Dashboard with all four views filled in.

    Raises:
        ValidationError: If ``target`` is not a valid date.
    """
    limit = limit if limit is not None else services.config.recent_limit
    services.initialize()

    return Dashboard(
        month=services.reports.month_window(target),
        categories=services.categories.find_all(),
        transactions=services.transactions.find_recent(limit),
        totals=services.reports.monthly_totals(target),
        category_totals=services.reports.monthly_totals_by_category(target),
    )
