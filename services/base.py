"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This is the composition root: it owns the single DatabaseManager for
    the process and hands it to every service. Tests inject their own
    manager.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is
                    only used for display settings.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.transactions import TransactionService
        from services.reports import ReportService

        self.categories = CategoryService(self.db_manager)
        self.transactions = TransactionService(self.db_manager)
        self.reports = ReportService(self.transactions)

    def initialize(self) -> "Services":
        """Open the store and apply schema and seed data if not done yet."""
        self.db_manager.initialize()
        return self
