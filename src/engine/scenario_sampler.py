"""ScenarioSampler: generates varied debt portfolios for benchmarks and tests.

Produces random account lists with 1–5 accounts, rates (5%–29.99%) and
balances ($500–$15,000), each with a minimum payment that amortizes the
account on its own. Also provides named presets for reproducible runs.
"""

from __future__ import annotations

import math

import numpy as np

from src.engine.amortization import monthly_rate
from src.engine.models import DebtAccount


# Account name pools for variety
_ACCOUNT_NAMES = [
    "Visa Platinum", "Mastercard Gold", "Store Card", "Rewards Card",
    "Auto Loan", "Student Loan", "Medical Bill", "Personal Loan",
    "Cash Back Card", "Department Store", "Airline Card", "Line of Credit",
]


def covering_minimum(balance: float, annual_rate_pct: float, floor: float = 25.0,
                     principal_ratio: float = 0.01) -> float:
    """Issuer-style minimum: first month's interest + 1% of balance, at least ``floor``.

    Rounded up to the cent so it always exceeds the interest.
    """
    raw = balance * monthly_rate(annual_rate_pct) + principal_ratio * balance
    return max(floor, math.ceil(raw * 100) / 100)


class ScenarioSampler:
    """Generate randomized or preset debt portfolios."""

    def __init__(
        self,
        num_accounts_range: tuple[int, int] = (1, 5),
        rate_range: tuple[float, float] = (5.0, 29.99),
        balance_range: tuple[float, float] = (500.0, 15000.0),
        minimum_floor: float = 25.0,
        principal_ratio: float = 0.01,
    ):
        self.num_accounts_range = num_accounts_range
        self.rate_range = rate_range
        self.balance_range = balance_range
        self.minimum_floor = minimum_floor
        self.principal_ratio = principal_ratio

    def sample(self, rng: np.random.Generator | None = None) -> list[DebtAccount]:
        """Sample a random portfolio.

        Args:
            rng: Numpy random Generator for reproducibility.

        Returns:
            A list of open DebtAccounts with ids ``acct-0``, ``acct-1``, ...
        """
        if rng is None:
            rng = np.random.default_rng()

        num_accounts = int(rng.integers(self.num_accounts_range[0], self.num_accounts_range[1] + 1))

        # Pick unique account names
        name_indices = rng.choice(len(_ACCOUNT_NAMES), size=num_accounts, replace=False)

        accounts = []
        for i, name_idx in enumerate(name_indices):
            rate = round(float(rng.uniform(*self.rate_range)), 2)
            balance = round(float(rng.uniform(*self.balance_range)), 2)
            accounts.append(
                DebtAccount(
                    id=f"acct-{i}",
                    name=_ACCOUNT_NAMES[int(name_idx)],
                    balance=balance,
                    annual_interest_rate=rate,
                    minimum_payment=covering_minimum(
                        balance, rate, self.minimum_floor, self.principal_ratio
                    ),
                )
            )
        return accounts

    def sample_extra_payment(self, rng: np.random.Generator, high: float = 500.0) -> float:
        """Random monthly extra budget in whole dollars, 0..``high``."""
        return float(rng.integers(0, int(high) + 1))

    @staticmethod
    def preset(name: str) -> list[DebtAccount]:
        """Return a named preset portfolio for reproducible experiments.

        Available presets:
            - "easy_3card": Low rates, moderate balances
            - "hard_5card": High rates, high balances
            - "single_high_rate": One card at 28.9%
            - "mixed_loans": Cards and installment loans with opposed
              balance and rate orderings

        Raises:
            ValueError: If preset name is unknown.
        """
        presets = {
            "easy_3card": [
                DebtAccount("visa", "Visa Basic", 2000, 13.9, 60),
                DebtAccount("mc", "MC Standard", 1500, 15.9, 45),
                DebtAccount("store", "Store Card", 800, 19.9, 25),
            ],
            "hard_5card": [
                DebtAccount("platinum", "Platinum", 12000, 28.9, 410),
                DebtAccount("medical", "Medical", 8500, 24.9, 262),
                DebtAccount("rewards", "Rewards", 5000, 19.9, 133),
                DebtAccount("dept", "Dept Store", 3000, 26.9, 98),
                DebtAccount("gas", "Gas Card", 1500, 22.9, 44),
            ],
            "single_high_rate": [
                DebtAccount("high", "High APR Card", 10000, 28.9, 341),
            ],
            "mixed_loans": [
                DebtAccount("card", "Rewards Card", 2000, 24.99, 60),
                DebtAccount("medical", "Medical Bill", 800, 0.0, 25),
                DebtAccount("car", "Auto Loan", 6000, 6.5, 180, account_type="loan"),
                DebtAccount("store", "Store Card", 1200, 27.99, 40),
            ],
        }

        if name not in presets:
            valid = ", ".join(sorted(presets.keys()))
            raise ValueError(f"Unknown preset {name!r}. Valid: {valid}")

        return presets[name]
