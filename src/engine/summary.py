"""Portfolio-level debt figures: totals, weighted rate, debt-to-income rating."""

from __future__ import annotations

from typing import Iterable

from src.engine.amortization import monthly_rate
from src.engine.models import (
    DebtAccount,
    DebtSummary,
    DebtToIncome,
    DebtToIncomeRating,
    open_accounts,
)

# Upper bound (percent of income) for each rating, checked in order
DTI_BENCHMARKS = (
    (10.0, DebtToIncomeRating.EXCELLENT),
    (20.0, DebtToIncomeRating.GOOD),
    (36.0, DebtToIncomeRating.FAIR),
    (50.0, DebtToIncomeRating.POOR),
)


def compute_weighted_avg_rate(accounts: list[DebtAccount]) -> float:
    """Balance-weighted average annual rate across accounts.

    Returns 0 if total balance is 0 (all paid off).
    """
    total_balance = sum(a.balance for a in accounts)
    if total_balance <= 0:
        return 0.0
    return sum(a.annual_interest_rate * a.balance for a in accounts) / total_balance


def summarize_debts(accounts: Iterable[DebtAccount]) -> DebtSummary:
    """Headline numbers for the open accounts; all zeros if there are none."""
    active = open_accounts(accounts)
    if not active:
        return DebtSummary(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    return DebtSummary(
        account_count=len(active),
        total_debt=sum(a.balance for a in active),
        total_minimum_payments=sum(a.minimum_payment for a in active),
        average_interest_rate=compute_weighted_avg_rate(active),
        highest_interest_rate=max(a.annual_interest_rate for a in active),
        highest_balance=max(a.balance for a in active),
        monthly_interest_cost=sum(
            a.balance * monthly_rate(a.annual_interest_rate) for a in active
        ),
    )


def rate_debt_to_income(ratio: float) -> DebtToIncomeRating:
    for ceiling, rating in DTI_BENCHMARKS:
        if ratio <= ceiling:
            return rating
    return DebtToIncomeRating.DANGEROUS


def debt_to_income(accounts: Iterable[DebtAccount], monthly_income: float) -> DebtToIncome:
    """Minimum payments as a percentage of monthly income, with a rating.

    Raises:
        ValueError: ``monthly_income`` is not positive.
    """
    if monthly_income <= 0:
        raise ValueError(f"monthly_income must be > 0, got {monthly_income!r}")

    payments = sum(a.minimum_payment for a in open_accounts(accounts))
    ratio = payments / monthly_income * 100.0
    return DebtToIncome(
        monthly_debt_payments=payments,
        monthly_income=monthly_income,
        ratio=ratio,
        rating=rate_debt_to_income(ratio),
    )
