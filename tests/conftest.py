"""Shared fixtures; every component is built with explicit arguments."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from finance_engine.aggregation import PeriodAggregator
from finance_engine.categories import CategoryResolver
from finance_engine.export import ExportPipeline
from finance_engine.loans import LoanStatusEngine
from finance_engine.models import Budget, Loan, Transaction


def make_transaction(title, amount, date, category="other", **kwargs) -> Transaction:
    return Transaction(
        title=title,
        amount=Decimal(amount),
        date=date,
        category=category,
        **kwargs,
    )


def make_loan(remaining="500", principal="1000", due_date=None, **kwargs) -> Loan:
    return Loan(
        name=kwargs.pop("name", "Car loan"),
        principal_amount=Decimal(principal),
        remaining_amount=Decimal(remaining),
        due_date=due_date or datetime(2025, 3, 1),
        **kwargs,
    )


@pytest.fixture
def resolver():
    return CategoryResolver()


@pytest.fixture
def status_engine():
    return LoanStatusEngine(grace_period=timedelta(days=2))


@pytest.fixture
def aggregator(resolver):
    return PeriodAggregator(resolver=resolver)


@pytest.fixture
def pipeline(status_engine):
    return ExportPipeline(status_engine=status_engine, file_prefix="Finance")


@pytest.fixture
def winter_transactions():
    """Salary and a dinner in January, coffee on the first of February."""
    return [
        make_transaction("Salary", "2500", datetime(2025, 1, 5), category="income"),
        make_transaction("Dinner", "-87.45", datetime(2025, 1, 6), category="Food & Dining"),
        make_transaction("Coffee", "-4.50", datetime(2025, 2, 1), category="food"),
    ]


@pytest.fixture
def budgets():
    return [
        Budget(category="Food", limit=Decimal("300")),
        Budget(category="Transport", limit=Decimal("100")),
    ]
