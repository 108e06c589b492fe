#!/usr/bin/env python3

from tools.currency import format_currency
from tools.dashboard import get_dashboard
from logger import get_logger

logger = get_logger()


def cmd_month(args, services):
    """Show totals and the per-category breakdown for a month."""
    dashboard = get_dashboard(services, args.date, limit=0)
    symbol = services.config.currency_symbol
    totals = dashboard.totals

    logger.info(f"\nSummary for {dashboard.month.start} to {dashboard.month.end}")
    logger.info("=" * 80)
    logger.info(f"Income:   {format_currency(totals.income, symbol):>14}")
    logger.info(f"Expenses: {format_currency(totals.expenses, symbol):>14}")
    logger.info(f"Balance:  {format_currency(totals.balance, symbol):>14}")

    if not dashboard.category_totals:
        logger.info("\nNo categorized transactions this month.")
        return

    logger.info("\nBy category:")
    logger.info("-" * 80)
    for row in dashboard.category_totals:
        logger.info(
            f"{row.category_name:<30} {row.category_type.value:<8} "
            f"{format_currency(row.total, symbol):>14}"
        )


def setup_parser(subparsers):
    """Setup summary subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "summary",
        help="Monthly summaries",
        description="Month-to-date income, expenses and category totals",
    )

    summary_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available summary commands",
        dest="subcommand",
        required=True,
    )

    # summary month
    month_parser = summary_subparsers.add_parser(
        "month", help="Show totals for a month"
    )
    month_parser.add_argument(
        "--date", help="Any day in the month, YYYY-MM-DD (default: today)"
    )
    month_parser.set_defaults(func=cmd_month)
