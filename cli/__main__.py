#!/usr/bin/env python3
"""
Sumly CLI - Command-line interface for the budget ledger.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage categories
    transactions Record and manage transactions
    summary      Monthly totals and category breakdown
    migrate      Database migrations

Examples:
    python -m cli categories list
    python -m cli categories create "Pets" --type expense
    python -m cli transactions add "Coffee" 4.50 --category-id 4
    python -m cli summary month --date 2024-02-10
    python -m cli migrate status
"""

import sys
import argparse
from cli import categories, migrate, summary, transactions
from config import load_config
from errors import SumlyError
from services.base import Services
from logger import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Sumly - Personal budget ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    summary.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    return parser


def run(args, services: Services) -> int:
    """Dispatch parsed arguments to their handler.

    Returns:
        Process exit code.
    """
    try:
        # Migrate commands need db_manager for raw database operations
        if args.command == "migrate":
            args.func(args, services.db_manager)
        else:
            args.func(args, services)
    except SumlyError as e:
        get_logger().error(f"Error: {e}")
        return 1
    return 0


def main():
    """Main CLI entry point with subcommands."""
    args = build_parser().parse_args()

    config = load_config()
    setup_logging(config)

    services = Services(config)
    sys.exit(run(args, services))


if __name__ == "__main__":
    main()
