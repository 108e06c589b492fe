"""Tests for the dashboard snapshot."""

from datetime import date
from decimal import Decimal

from models.transaction import TransactionInput
from tools.dashboard import get_dashboard


class TestGetDashboard:
    """Tests for get_dashboard."""

    def test_collects_all_views(self, services):
        """Test that the snapshot combines categories, transactions and totals."""
        salary = services.categories.find_by_name("Salary")
        health = services.categories.find_by_name("Health")
        services.transactions.create(
            TransactionInput(description="Pay", amount="500", occurred_on="2024-07-01", category_id=salary.id)
        )
        services.transactions.create(
            TransactionInput(description="Pharmacy", amount="20", occurred_on="2024-07-02", category_id=health.id)
        )
        services.transactions.create(
            TransactionInput(description="Old", amount="20", occurred_on="2024-06-30", category_id=health.id)
        )

        dashboard = get_dashboard(services, date(2024, 7, 15))

        assert dashboard.month.start == "2024-07-01"
        assert dashboard.month.end == "2024-07-31"
        assert len(dashboard.categories) == 10
        assert [t.description for t in dashboard.transactions] == ["Pharmacy", "Pay", "Old"]
        assert dashboard.totals.income == Decimal("500")
        assert dashboard.totals.expenses == Decimal("20")
        assert [r.category_name for r in dashboard.category_totals] == ["Salary", "Health"]

    def test_limit_defaults_to_config(self, services):
        """Test that the recent list follows Config.recent_limit."""
        services.config.recent_limit = 2
        for day in range(1, 5):
            services.transactions.create(
                TransactionInput(description=f"tx {day}", amount="1", occurred_on=f"2024-07-{day:02d}")
            )

        dashboard = get_dashboard(services, date(2024, 7, 1))

        assert len(dashboard.transactions) == 2
