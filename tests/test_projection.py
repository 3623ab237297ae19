"""
Tests for income projection
"""

import pytest
from decimal import Decimal

from finance_engine.models import ExpenseBreakdown, TimeRange, WorkSchedule
from finance_engine.projection import (
    IncomeProjectionCalculator,
    income_chain,
    scale_amount,
    scale_breakdown,
)
from finance_engine.utils import strip_trailing_zeros


@pytest.fixture
def calculator():
    return IncomeProjectionCalculator()


@pytest.fixture
def monthly_expenses():
    return ExpenseBreakdown(
        housing=Decimal("1200"),
        food=Decimal("500"),
        transportation=Decimal("200"),
        other=Decimal("100"),
    )


class TestWorkSchedule:
    """Tests for hours per week."""

    def test_hours(self):
        """Test the fixed weekly hours of each schedule."""
        assert WorkSchedule.FULL_TIME.hours_per_week == Decimal("40")
        assert WorkSchedule.PART_TIME.hours_per_week == Decimal("20")
        assert WorkSchedule.FREELANCE.hours_per_week == Decimal("30")
        assert WorkSchedule.CONTRACT.hours_per_week == Decimal("35")


class TestIncomeChain:
    """Tests for the derivation chain."""

    @pytest.mark.parametrize("schedule", list(WorkSchedule))
    @pytest.mark.parametrize("rate", ["17.35", "25", "0", "1234.5678"])
    def test_weekly_is_seven_days(self, schedule, rate):
        """Test that weekly income is exactly seven daily incomes."""
        chain = income_chain(Decimal(rate), schedule)
        assert chain.weekly == chain.daily * 7
        assert chain.yearly == chain.weekly * 52
        assert chain.monthly == chain.weekly * 52 / 12

    def test_part_time_figures(self):
        """Test concrete values for 20 hours at 21/hour."""
        chain = income_chain(Decimal("21"), WorkSchedule.PART_TIME)
        assert chain.daily == Decimal("60")
        assert chain.weekly == Decimal("420")
        assert chain.monthly == Decimal("1820")
        assert chain.yearly == Decimal("21840")

    def test_figures_have_no_trailing_zeros(self):
        """Test that derived figures print without division noise."""
        chain = income_chain(Decimal("25"), WorkSchedule.FULL_TIME)
        assert str(chain.weekly) == "1000"
        assert str(chain.yearly) == "52000"
        assert str(income_chain(Decimal("21"), WorkSchedule.PART_TIME).monthly) == "1820"
        assert str(income_chain(Decimal("17.5"), WorkSchedule.PART_TIME).daily) == "50"


class TestProject:
    """Tests for IncomeProjectionCalculator.project."""

    def test_available_income(self, calculator, monthly_expenses):
        """Test that expenses and loans are subtracted from monthly income."""
        result = calculator.project(
            WorkSchedule.CONTRACT,
            Decimal("24"),
            monthly_expenses,
            Decimal("300"),
        )
        assert result.monthly_income == Decimal("3640")
        assert result.available_income == Decimal("1340")
        assert result.projected_available_income == result.available_income

    def test_negative_available_is_preserved(self, calculator, monthly_expenses):
        """Test that overspending is not clamped."""
        result = calculator.project(
            WorkSchedule.PART_TIME,
            Decimal("21"),
            monthly_expenses,
            Decimal("500"),
        )
        assert result.available_income == Decimal("-680")

    def test_projected_income(self, calculator, monthly_expenses):
        """Test that a supplied projected income drives the projected figure."""
        result = calculator.project(
            WorkSchedule.PART_TIME,
            Decimal("21"),
            monthly_expenses,
            Decimal("500"),
            projected_income=Decimal("3000"),
        )
        assert result.projected_available_income == Decimal("500")
        assert result.available_income == Decimal("-680")

    def test_income_for(self, calculator):
        """Test income per time range."""
        assert calculator.income_for(Decimal("21"), WorkSchedule.PART_TIME, TimeRange.HOURLY) == Decimal("21")
        assert calculator.income_for(Decimal("21"), WorkSchedule.PART_TIME, TimeRange.WEEKLY) == Decimal("420")


class TestScaling:
    """Tests for expressing monthly amounts in other ranges."""

    def test_scale_amount(self):
        """Test the monthly to weekly and yearly conversions."""
        assert scale_amount(Decimal("1300"), TimeRange.WEEKLY) == Decimal("300")
        assert scale_amount(Decimal("1300"), TimeRange.YEARLY) == Decimal("15600")
        assert scale_amount(Decimal("1300"), TimeRange.MONTHLY) == Decimal("1300")

    def test_scaled_amounts_are_normalised(self):
        """Test that scaled amounts print as plain figures."""
        assert str(scale_amount(Decimal("1300"), TimeRange.YEARLY)) == "15600"
        assert str(scale_amount(Decimal("1300"), TimeRange.WEEKLY)) == "300"

    @pytest.mark.parametrize("raw, expected", [
        ("1000.000", "1000"),
        ("1E+3", "1000"),
        ("0.50", "0.5"),
        ("-12.3400", "-12.34"),
        ("0.000", "0"),
    ])
    def test_strip_trailing_zeros(self, raw, expected):
        """Test that the value is kept and the exponent never goes positive."""
        stripped = strip_trailing_zeros(Decimal(raw))
        assert str(stripped) == expected
        assert stripped == Decimal(raw)

    def test_strip_trailing_zeros_keeps_non_finite(self):
        """Test that NaN and infinity pass through."""
        assert strip_trailing_zeros(Decimal("NaN")).is_nan()
        assert strip_trailing_zeros(Decimal("Infinity")) == Decimal("Infinity")

    def test_scale_breakdown(self, monthly_expenses):
        """Test that every bucket is scaled."""
        yearly = scale_breakdown(monthly_expenses, TimeRange.YEARLY)
        assert yearly.housing == Decimal("14400")
        assert yearly.total_expenses == Decimal("24000")

    def test_project_all_ranges(self, calculator, monthly_expenses):
        """Test one entry per range, consistent with project()."""
        projections = calculator.project_all_ranges(
            Decimal("24"),
            Decimal("30"),
            WorkSchedule.CONTRACT,
            monthly_expenses,
            Decimal("300"),
        )
        assert [p.time_range for p in projections] == list(TimeRange)

        monthly = projections[3]
        assert monthly.time_range is TimeRange.MONTHLY
        assert monthly.available_income == Decimal("1340")
        assert monthly.projected_income == Decimal("4550")
        assert monthly.projected_available_income == Decimal("2250")

        hourly = projections[0]
        assert hourly.current_income == Decimal("24")

    def test_required_hourly_rate(self, calculator, monthly_expenses):
        """Test the break-even rate and that projecting it leaves nothing."""
        rate = calculator.required_hourly_rate(
            monthly_expenses,
            Decimal("1640"),
            WorkSchedule.CONTRACT,
        )
        assert rate == Decimal("24")

        result = calculator.project(WorkSchedule.CONTRACT, rate, monthly_expenses, Decimal("1640"))
        assert result.available_income == Decimal("0")


class TestExpenseBreakdown:
    """Tests for breakdown percentages."""

    def test_percentages(self, monthly_expenses):
        """Test bucket shares."""
        percentages = monthly_expenses.percentages()
        assert percentages["housing"] == Decimal("60")
        assert percentages["loans"] == Decimal("0")

    def test_zero_total(self):
        """Test that an empty breakdown has zero shares."""
        assert all(value == 0 for value in ExpenseBreakdown().percentages().values())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
