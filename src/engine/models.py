"""Input and result records for the payoff engine.

Inputs are immutable for the duration of a run; results are built fresh on
every call and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Mapping

# Fallback minimum payment when the account record does not carry one
DEFAULT_MINIMUM_PAYMENT_RATIO = 0.02


@dataclass(frozen=True)
class DebtAccount:
    """A single debt-bearing account as seen by the engine."""

    id: Hashable
    name: str
    balance: float                # Outstanding principal, always a magnitude (≥ 0)
    annual_interest_rate: float   # Percent, e.g. 18.99 for 18.99%
    minimum_payment: float        # Required monthly payment
    account_type: str = "credit"  # "credit" or "loan"

    @property
    def is_open(self) -> bool:
        return self.balance > 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DebtAccount":
        """Build an account from a persistence-layer record.

        Liability balances are often stored as negative numbers; the sign is
        dropped here. A missing rate means 0%, a missing minimum payment
        defaults to 2% of the balance.
        """
        balance = abs(float(record.get("balance", 0.0) or 0.0))
        rate = record.get("annual_interest_rate", record.get("interest_rate"))
        minimum = record.get("minimum_payment")
        if minimum is None:
            minimum = balance * DEFAULT_MINIMUM_PAYMENT_RATIO

        return cls(
            id=record["id"],
            name=str(record.get("name", record["id"])),
            balance=balance,
            annual_interest_rate=float(rate or 0.0),
            minimum_payment=float(minimum),
            account_type=str(record.get("account_type", "credit")),
        )


def open_accounts(accounts) -> list[DebtAccount]:
    """Accounts with something left to pay, in input order."""
    return [a for a in accounts if a.is_open]


# ── Amortization ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AmortizationRow:
    month: int
    interest_portion: float
    principal_portion: float
    ending_balance: float


# ── Strategy simulation ──────────────────────────────────────────────────

@dataclass(frozen=True)
class PayoffPlanEntry:
    account_id: Hashable
    account_name: str
    order: int                  # 1-based priority rank under the strategy
    payoff_month: int           # 1-based month on which the balance hits 0
    total_interest_paid: float


@dataclass(frozen=True)
class MonthlySnapshot:
    """Everything applied to each open account during one simulated month."""

    month: int
    payments: Mapping[Hashable, float]     # account_id -> amount applied (interest + principal)
    interest: Mapping[Hashable, float]     # account_id -> interest accrued
    balances: Mapping[Hashable, float]     # account_id -> ending balance

    @property
    def total_payment(self) -> float:
        return sum(self.payments.values())


@dataclass(frozen=True)
class StrategyResult:
    strategy_name: str
    total_interest_paid: float
    overall_payoff_month: int
    entries: tuple[PayoffPlanEntry, ...]
    extra_payment: float = 0.0
    schedule: tuple[MonthlySnapshot, ...] = field(default=(), repr=False)

    def entry_for(self, account_id: Hashable) -> PayoffPlanEntry:
        for entry in self.entries:
            if entry.account_id == account_id:
                return entry
        raise KeyError(account_id)

    @property
    def payoff_order(self) -> list[Hashable]:
        return [e.account_id for e in sorted(self.entries, key=lambda e: e.order)]


@dataclass(frozen=True)
class StrategyComparison:
    snowball: StrategyResult
    avalanche: StrategyResult
    recommendation: str         # "snowball" or "avalanche"
    interest_saved: float       # snowball − avalanche (signed)
    time_saved_months: int      # snowball − avalanche (signed)
    extra_payment: float = 0.0

    @property
    def recommended(self) -> StrategyResult:
        return self.avalanche if self.recommendation == "avalanche" else self.snowball


# ── Projection & allocation ───────────────────────────────────────────────

@dataclass(frozen=True)
class ProjectionRow:
    month: int
    balance: float
    interest_paid: float
    principal_paid: float
    cumulative_interest: float


@dataclass(frozen=True)
class AccountProjection:
    account_id: Hashable
    account_name: str
    current_balance: float
    rows: tuple[ProjectionRow, ...]

    @property
    def total_interest_cost(self) -> float:
        return self.rows[-1].cumulative_interest if self.rows else 0.0

    @property
    def paid_off(self) -> bool:
        """Whether the balance reached zero within the projected horizon."""
        return bool(self.rows) and self.rows[-1].balance == 0.0


class AllocationRationale(str, Enum):
    HIGHEST_INTEREST_RATE = "highest_interest_rate"
    MINIMUM_ONLY = "minimum_only"


@dataclass(frozen=True)
class AllocationRecommendation:
    account_id: Hashable
    account_name: str
    minimum_payment: float
    recommended_payment: float
    extra_portion: float
    rationale: AllocationRationale
    impact_on_payoff_time: int      # Months saved versus paying the minimum
    impact_on_interest: float       # Interest saved versus paying the minimum


# ── Summaries ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DebtSummary:
    account_count: int
    total_debt: float
    total_minimum_payments: float
    average_interest_rate: float    # Balance-weighted, percent
    highest_interest_rate: float
    highest_balance: float
    monthly_interest_cost: float


class DebtToIncomeRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DANGEROUS = "dangerous"


@dataclass(frozen=True)
class DebtToIncome:
    monthly_debt_payments: float
    monthly_income: float
    ratio: float                    # Percent of income
    rating: DebtToIncomeRating
