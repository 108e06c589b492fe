#!/usr/bin/env python3

from models.category import CategoryType
from models.transaction import TransactionInput
from tools.currency import format_currency
from logger import get_logger

logger = get_logger()

_TYPE_CHOICES = [t.value for t in CategoryType]


def _print_transactions(transactions, symbol):
    if not transactions:
        logger.info("No transactions found.")
        return

    for t in transactions:
        category = t.category_name or "Uncategorized"
        logger.info(
            f"{t.id:>5}  {t.occurred_on}  {t.description:<30} "
            f"{format_currency(t.amount, symbol):>14}  {category}"
        )
    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_list(args, services):
    """List the most recent transactions."""
    limit = args.limit if args.limit is not None else services.config.recent_limit
    transactions = services.transactions.find_recent(limit)
    _print_transactions(transactions, services.config.currency_symbol)


def cmd_range(args, services):
    """List transactions between two dates (inclusive)."""
    transactions = services.transactions.find_for_range(args.start, args.end)
    logger.info(f"Transactions from {args.start} to {args.end}:")
    _print_transactions(transactions, services.config.currency_symbol)


def _input_from_args(args) -> TransactionInput:
    return TransactionInput(
        description=args.description,
        amount=args.amount,
        occurred_on=args.date,
        category_id=args.category_id,
        type=args.type,
    )


def cmd_add(args, services):
    """Record a new transaction."""
    transaction = services.transactions.create(_input_from_args(args))
    logger.info(
        f"✓ Transaction {transaction.id} recorded: {transaction.description} "
        f"{format_currency(transaction.amount, services.config.currency_symbol)} "
        f"on {transaction.occurred_on}"
    )


def cmd_edit(args, services):
    """Replace the fields of an existing transaction."""
    transaction = services.transactions.update(args.transaction_id, _input_from_args(args))
    logger.info(
        f"✓ Transaction {transaction.id} updated: {transaction.description} "
        f"{format_currency(transaction.amount, services.config.currency_symbol)} "
        f"on {transaction.occurred_on}"
    )


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    if services.transactions.delete(args.transaction_id):
        logger.info(f"✓ Transaction {args.transaction_id} deleted.")
    else:
        logger.info(f"Transaction {args.transaction_id} did not exist.")


def _add_input_arguments(parser):
    parser.add_argument("description", help="What the money was for")
    parser.add_argument("amount", help="Amount; the sign is set from the type")
    parser.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    parser.add_argument("--category-id", type=int, help="Category ID")
    parser.add_argument(
        "--type",
        choices=_TYPE_CHOICES,
        default="expense",
        help="Type used when no category is given (default: expense)",
    )


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Manage transactions",
        description="Record, list, edit and delete transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List the most recent transactions"
    )
    list_parser.add_argument("--limit", type=int, help="Maximum rows to show")
    list_parser.set_defaults(func=cmd_list)

    # transactions range
    range_parser = transactions_subparsers.add_parser(
        "range", help="List transactions between two dates"
    )
    range_parser.add_argument("start", help="Start date (YYYY-MM-DD)")
    range_parser.add_argument("end", help="End date (YYYY-MM-DD)")
    range_parser.set_defaults(func=cmd_range)

    # transactions add
    add_parser = transactions_subparsers.add_parser("add", help="Record a transaction")
    _add_input_arguments(add_parser)
    add_parser.set_defaults(func=cmd_add)

    # transactions edit
    edit_parser = transactions_subparsers.add_parser("edit", help="Edit a transaction")
    edit_parser.add_argument("transaction_id", type=int, help="ID of the transaction")
    _add_input_arguments(edit_parser)
    edit_parser.set_defaults(func=cmd_edit)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument("transaction_id", type=int, help="ID of the transaction")
    delete_parser.set_defaults(func=cmd_delete)
