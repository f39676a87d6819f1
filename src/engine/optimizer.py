"""Status-quo interest projection and one-shot extra-payment allocation.

Both operations look at each account on its own: no cascading between
accounts, unlike the simulator.
"""

from __future__ import annotations

from itertools import islice
from typing import Iterable

from src.engine.amortization import amortization_schedule, months_to_payoff, total_interest
from src.engine.errors import InvalidPayment, NoDebtAccounts
from src.engine.models import (
    AccountProjection,
    AllocationRationale,
    AllocationRecommendation,
    DebtAccount,
    ProjectionRow,
    open_accounts,
)
from src.strategies import AvalancheStrategy


def project_interest_cost(
    accounts: Iterable[DebtAccount], horizon_months: int
) -> list[AccountProjection]:
    """Project each account forward at its minimum payment.

    Each projection stops at ``horizon_months`` or at payoff, whichever
    comes first.

    Raises:
        ValueError: ``horizon_months`` < 1.
        NoDebtAccounts: no account has a positive balance.
        PaymentInsufficient: an account's minimum does not cover its interest.
    """
    if horizon_months < 1:
        raise ValueError(f"horizon_months must be ≥ 1, got {horizon_months!r}")

    active = open_accounts(accounts)
    if not active:
        raise NoDebtAccounts()

    projections = []
    for account in active:
        schedule = amortization_schedule(
            account.balance, account.minimum_payment, account.annual_interest_rate
        )
        rows = []
        cumulative = 0.0
        for row in islice(schedule, horizon_months):
            cumulative += row.interest_portion
            rows.append(
                ProjectionRow(
                    month=row.month,
                    balance=row.ending_balance,
                    interest_paid=row.interest_portion,
                    principal_paid=row.principal_portion,
                    cumulative_interest=cumulative,
                )
            )
        projections.append(
            AccountProjection(
                account_id=account.id,
                account_name=account.name,
                current_balance=account.balance,
                rows=tuple(rows),
            )
        )
    return projections


def optimize_allocation(
    accounts: Iterable[DebtAccount], extra_payment: float
) -> list[AllocationRecommendation]:
    """Recommend where next month's extra payment should go.

    The whole extra goes to the highest-rate account (avalanche priority);
    every other account stays on its minimum. Impacts compare paying the
    minimum against paying the recommendation on that account alone.

    Returns:
        One recommendation per open account, highest rate first.

    Raises:
        NoDebtAccounts: no account has a positive balance.
        InvalidPayment: negative extra payment or non-positive minimum.
        PaymentInsufficient: a payment does not cover its account's interest.
    """
    if extra_payment < 0:
        raise InvalidPayment(extra_payment, what="extra payment")

    ranked = AvalancheStrategy().order(accounts)
    if not ranked:
        raise NoDebtAccounts()

    recommendations = []
    for index, account in enumerate(ranked):
        is_top = index == 0
        extra_portion = extra_payment if is_top else 0.0
        recommended = account.minimum_payment + extra_portion

        balance, rate = account.balance, account.annual_interest_rate
        months_at_minimum = months_to_payoff(balance, account.minimum_payment, rate)
        months_recommended = months_to_payoff(balance, recommended, rate)
        interest_at_minimum = total_interest(balance, account.minimum_payment, rate)
        interest_recommended = total_interest(balance, recommended, rate)

        recommendations.append(
            AllocationRecommendation(
                account_id=account.id,
                account_name=account.name,
                minimum_payment=account.minimum_payment,
                recommended_payment=recommended,
                extra_portion=extra_portion,
                rationale=(
                    AllocationRationale.HIGHEST_INTEREST_RATE
                    if is_top
                    else AllocationRationale.MINIMUM_ONLY
                ),
                impact_on_payoff_time=max(0, months_at_minimum - months_recommended),
                impact_on_interest=max(0.0, interest_at_minimum - interest_recommended),
            )
        )
    return recommendations
