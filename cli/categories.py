#!/usr/bin/env python3

from errors import NotFoundError
from models.category import CategoryInput, CategoryType
from logger import get_logger

logger = get_logger()

_TYPE_CHOICES = [t.value for t in CategoryType]


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(
            f"{category.id:>4}  {category.name:<30} {category.type.value:<8} {category.color}"
        )

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    category = services.categories.create(
        CategoryInput(name=args.name, type=args.type, color=args.color)
    )

    logger.info(f"✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Type: {category.type.value}")
    logger.info(f"  Color: {category.color}")


def cmd_update(args, services):
    """Update a category's name, type and color."""
    existing = services.categories.find(args.category_id)
    if existing is None:
        raise NotFoundError(f"Category with ID {args.category_id} not found.")

    name = args.name if args.name is not None else existing.name
    type_ = args.type or existing.type
    color = args.color if args.color is not None else existing.color

    category = services.categories.update(
        args.category_id, CategoryInput(name=name, type=type_, color=color)
    )

    logger.info(f"✓ Category {category.id} updated")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Type: {category.type.value}")
    logger.info(f"  Color: {category.color}")


def cmd_delete(args, services):
    """Delete a category by ID. Its transactions become uncategorized."""
    category = services.categories.find(args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        return

    if not args.yes:
        confirm = (
            input(f"Delete category '{category.name}'? (yes/no): ").strip().lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    if services.categories.delete(args.category_id):
        logger.info(f"✓ Category '{category.name}' deleted successfully.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, update and delete transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name (must be unique)")
    create_parser.add_argument("--type", choices=_TYPE_CHOICES, default="expense")
    create_parser.add_argument("--color", help="Hex color, e.g. #1565c0")
    create_parser.set_defaults(func=cmd_create)

    # categories update
    update_parser = categories_subparsers.add_parser(
        "update", help="Update a category (changing type re-signs its transactions)"
    )
    update_parser.add_argument("category_id", type=int, help="ID of the category")
    update_parser.add_argument("--name", help="New name")
    update_parser.add_argument("--type", choices=_TYPE_CHOICES, help="New type")
    update_parser.add_argument("--color", help="New hex color")
    update_parser.set_defaults(func=cmd_update)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.add_argument(
        "-y", "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)
