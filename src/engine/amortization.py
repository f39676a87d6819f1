"""Amortization math for a single account under a fixed monthly payment.

Implements:
- APR (percent) → monthly periodic rate conversion
- Closed-form months-to-payoff and total interest
- Month-by-month amortization schedule
- The single-month accrual step shared with the multi-account simulator
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from src.engine.errors import InvalidPayment, PaymentInsufficient
from src.engine.models import AmortizationRow

# Balances below half a cent are treated as paid off
PAID_OFF_EPSILON = 0.005


def monthly_rate(annual_rate_pct: float) -> float:
    """Annual percentage rate ÷ 12 ÷ 100, e.g. 18.0 → 0.015."""
    return annual_rate_pct / 12.0 / 100.0


def check_payment_covers_interest(balance: float, monthly_payment: float, rate: float) -> None:
    """Raise unless ``monthly_payment`` amortizes ``balance`` at monthly ``rate``.

    Raises:
        InvalidPayment: payment is not positive.
        PaymentInsufficient: payment does not exceed the first month's interest.
    """
    if monthly_payment <= 0:
        raise InvalidPayment(monthly_payment)
    interest = balance * rate
    if rate > 0 and monthly_payment <= interest:
        raise PaymentInsufficient(balance, monthly_payment, interest)


def months_to_payoff(balance: float, monthly_payment: float, annual_rate_pct: float) -> int:
    """Number of monthly payments needed to retire ``balance``.

    Formula: n = −ln(1 − B·r / P) / ln(1 + r), rounded up, at least 1.
    With r = 0 this reduces to ceil(B / P).

    Returns:
        Months to payoff (0 if there is nothing to pay).

    Raises:
        InvalidPayment: payment ≤ 0.
        PaymentInsufficient: payment ≤ the interest accruing in month one.
    """
    if balance <= 0:
        return 0

    r = monthly_rate(annual_rate_pct)
    check_payment_covers_interest(balance, monthly_payment, r)

    if r == 0:
        return math.ceil(balance / monthly_payment)

    months = -math.log(1.0 - (balance * r) / monthly_payment) / math.log(1.0 + r)
    # Float noise on an exact annuity term must not add a month
    return math.ceil(max(1.0, round(months, 9)))


def total_interest(balance: float, monthly_payment: float, annual_rate_pct: float) -> float:
    """Interest actually paid over the life of the payoff.

    Payments made minus ``balance``, where the last of the n payments is only
    what is left to clear the account: P × (n − 1) + B(n−1) × (1 + r) − B.
    Zero whenever the rate is zero.
    """
    months = months_to_payoff(balance, monthly_payment, annual_rate_pct)
    r = monthly_rate(annual_rate_pct)
    if months == 0 or r == 0:
        return 0.0

    growth = (1.0 + r) ** (months - 1)
    balance_before_last = balance * growth - monthly_payment * (growth - 1.0) / r
    last_payment = min(monthly_payment, max(0.0, balance_before_last) * (1.0 + r))
    paid = monthly_payment * (months - 1) + last_payment
    return max(0.0, paid - balance)


def accrue_month(balance: float, payment: float, rate: float) -> tuple[float, float, float, float]:
    """Advance one account by one month.

    interest  = B × r
    principal = min(P − interest, B)      (negative if P does not cover interest)
    ending    = B − principal

    Returns:
        (interest, principal, ending_balance, unused_payment) where
        ``unused_payment`` is whatever part of ``payment`` was not needed to
        close the account.
    """
    interest = balance * rate
    available = payment - interest
    principal = min(available, balance)
    unused = max(0.0, available - balance)
    ending = balance - principal

    if 0 < ending < PAID_OFF_EPSILON:
        principal += ending
        ending = 0.0

    return interest, principal, ending, unused


@dataclass(frozen=True)
class AmortizationSchedule:
    """Lazy month-by-month schedule; every iteration starts again from month 1.

    Payment validation happens on construction, so an accepted schedule is
    always finite.
    """

    balance: float
    monthly_payment: float
    annual_rate_pct: float

    def __post_init__(self) -> None:
        if self.balance > 0:
            check_payment_covers_interest(
                self.balance, self.monthly_payment, monthly_rate(self.annual_rate_pct)
            )

    def __iter__(self) -> Iterator[AmortizationRow]:
        r = monthly_rate(self.annual_rate_pct)
        balance = self.balance
        month = 0
        while balance > 0:
            month += 1
            interest, principal, balance, _ = accrue_month(balance, self.monthly_payment, r)
            yield AmortizationRow(
                month=month,
                interest_portion=interest,
                principal_portion=principal,
                ending_balance=balance,
            )


def amortization_schedule(
    balance: float, monthly_payment: float, annual_rate_pct: float
) -> AmortizationSchedule:
    """Return the restartable amortization schedule for one account."""
    return AmortizationSchedule(balance, monthly_payment, annual_rate_pct)
