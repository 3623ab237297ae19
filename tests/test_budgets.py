"""
Tests for budget spending roll-up
"""

import pytest
from datetime import datetime
from decimal import Decimal

from finance_engine.aggregation import apply_spending, budget_overview, spent_by_category
from finance_engine.models import Budget

from tests.conftest import make_transaction


class TestSpentByCategory:
    """Tests for expense totals per raw label."""

    def test_matches_labels_case_insensitively(self):
        """Test that label case and whitespace are ignored."""
        transactions = [
            make_transaction("Lunch", "-50", datetime(2025, 1, 2), category="food"),
            make_transaction("Dinner", "-25", datetime(2025, 1, 3), category="FOOD "),
            make_transaction("Refund", "30", datetime(2025, 1, 4), category="food"),
        ]
        assert spent_by_category(transactions) == {"food": Decimal("75")}


class TestApplySpending:
    """Tests for recomputing budget spending."""

    def test_updates_copies(self, budgets):
        """Test that spent is recomputed on copies in input order."""
        transactions = [
            make_transaction("Lunch", "-120", datetime(2025, 1, 2), category="food"),
        ]
        updated = apply_spending(budgets, transactions)

        assert [b.category for b in updated] == ["Food", "Transport"]
        assert updated[0].spent == Decimal("120")
        assert updated[0].remaining == Decimal("180")
        assert updated[1].spent == Decimal("0")
        assert budgets[0].spent == Decimal("0")

    def test_period_filter(self, budgets):
        """Test that only transactions inside the period count."""
        transactions = [
            make_transaction("Lunch", "-20", datetime(2025, 1, 31, 23), category="food"),
            make_transaction("Lunch", "-40", datetime(2025, 2, 1), category="food"),
        ]
        updated = apply_spending(
            budgets,
            transactions,
            datetime(2025, 2, 1),
            datetime(2025, 3, 1),
        )
        assert updated[0].spent == Decimal("40")

    def test_requires_both_bounds(self, budgets):
        """Test that a single bound raises."""
        with pytest.raises(ValueError):
            apply_spending(budgets, [], period_start=datetime(2025, 2, 1))


class TestBudgetModel:
    """Tests for derived budget values."""

    def test_overspent_budget(self):
        """Test remaining floor and progress cap."""
        budget = Budget(category="Fun", limit=Decimal("100"), spent=Decimal("150"))
        assert budget.remaining == Decimal("0")
        assert budget.progress == Decimal("1")
        assert budget.is_over_budget

    def test_zero_limit(self):
        """Test that a zero limit has zero progress."""
        budget = Budget(category="Fun", limit=Decimal("0"), spent=Decimal("10"))
        assert budget.progress == Decimal("0")


class TestBudgetOverview:
    """Tests for totals across budgets."""

    def test_totals(self):
        """Test totals and the over-budget list."""
        overview = budget_overview([
            Budget(category="Food", limit=Decimal("300"), spent=Decimal("150")),
            Budget(category="Fun", limit=Decimal("100"), spent=Decimal("250")),
        ])
        assert overview.total_budgeted == Decimal("400")
        assert overview.total_spent == Decimal("400")
        assert overview.overall_progress == Decimal("1")
        assert overview.over_budget_categories == ["Fun"]

    def test_empty(self):
        """Test that no budgets give zero progress."""
        overview = budget_overview([])
        assert overview.total_budgeted == Decimal("0")
        assert overview.overall_progress == Decimal("0")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
