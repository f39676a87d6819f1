"""Multi-account payoff simulation on a shared monthly clock.

Each simulated month:
  1. Every open account accrues interest and receives its minimum payment.
  2. The pool (caller's extra payment + minimums freed by accounts retired in
     earlier months + any part of this month's minimums an account did not
     need) goes to the highest-priority open account. Whatever that account
     does not need flows to the next one in priority order.
  3. Accounts whose balance reached zero close; their minimums join the pool
     from the following month.

A "simplified" cascade mode gives a quick closed-form estimate instead: each
account is costed on its own, with the extra payment on the first-ranked
account only and no cascading of freed minimums.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable

from src.engine.amortization import (
    PAID_OFF_EPSILON,
    accrue_month,
    monthly_rate,
    months_to_payoff,
    total_interest,
)
from src.engine.errors import InvalidPayment, NoDebtAccounts, Unconverging
from src.engine.models import DebtAccount, MonthlySnapshot, PayoffPlanEntry, StrategyResult
from src.strategies import PayoffStrategy, get_strategy
from src.utils.config import DEFAULT_CONFIG, EngineConfig
from src.utils.logging_config import get_logger

logger = get_logger("simulator")


@dataclass
class _AccountState:
    """Mutable per-account state, local to one simulation run."""

    account: DebtAccount
    order: int
    balance: float
    interest_paid: float = 0.0
    payoff_month: int | None = None

    @property
    def is_open(self) -> bool:
        return self.payoff_month is None


def simulate(
    accounts: Iterable[DebtAccount],
    strategy: str | PayoffStrategy,
    extra_payment: float = 0.0,
    config: EngineConfig | None = None,
) -> StrategyResult:
    """Simulate paying off ``accounts`` in the order given by ``strategy``.

    Args:
        accounts: Debt accounts; zero-balance accounts are ignored.
        strategy: A PayoffStrategy or a registered name ("snowball", "avalanche").
        extra_payment: Monthly amount on top of all minimum payments.
        config: Engine settings (month cap, cascade mode). Defaults if None.

    Returns:
        StrategyResult with one entry per open account, in priority order.

    Raises:
        NoDebtAccounts: no account has a positive balance.
        InvalidPayment: negative extra payment, or an open account with a
            non-positive minimum payment.
        Unconverging: debt remains after ``config.max_simulation_months``.
        PaymentInsufficient: (simplified mode only) an account never amortizes.
    """
    config = config or DEFAULT_CONFIG
    policy = get_strategy(strategy)
    ordered = policy.order(accounts)
    _validate(ordered, extra_payment)

    logger.debug(
        "Simulating %s over %d account(s), extra=%.2f, mode=%s",
        policy.name, len(ordered), extra_payment, config.cascade_mode,
    )

    if config.cascade_mode == "simplified":
        result = _simulate_simplified(ordered, policy.name, extra_payment, config)
    else:
        result = _simulate_monthly(ordered, policy.name, extra_payment, config)

    logger.debug(
        "%s plan: %d months, $%.2f interest",
        result.strategy_name, result.overall_payoff_month, result.total_interest_paid,
    )
    return result


def _validate(ordered: list[DebtAccount], extra_payment: float) -> None:
    if not ordered:
        raise NoDebtAccounts()
    if extra_payment < 0:
        raise InvalidPayment(extra_payment, what="extra payment")

    seen = set()
    for account in ordered:
        if account.id in seen:
            raise ValueError(f"Duplicate account id {account.id!r}")
        seen.add(account.id)
        if account.minimum_payment <= 0:
            raise InvalidPayment(
                account.minimum_payment, what=f"minimum payment for account {account.id!r}"
            )


def _simulate_monthly(
    ordered: list[DebtAccount],
    strategy_name: str,
    extra_payment: float,
    config: EngineConfig,
) -> StrategyResult:
    states = [
        _AccountState(account=a, order=i, balance=a.balance)
        for i, a in enumerate(ordered, start=1)
    ]
    freed_minimums = 0.0
    schedule: list[MonthlySnapshot] = []
    month = 0

    while any(s.is_open for s in states):
        if month >= config.max_simulation_months:
            remaining = [s for s in states if s.is_open]
            remaining_balance = sum(s.balance for s in remaining)
            logger.warning(
                "%s did not converge in %d months; $%.2f left on %d account(s)",
                strategy_name, month, remaining_balance, len(remaining),
            )
            raise Unconverging(month, remaining_balance, [s.account.id for s in remaining])

        month += 1
        active = [s for s in states if s.is_open]
        payments: dict = {}
        interests: dict = {}

        # ── 1. Interest & minimums ────────────────────────────────────────
        pool = extra_payment + freed_minimums
        for s in active:
            rate = monthly_rate(s.account.annual_interest_rate)
            interest, _, s.balance, unused = accrue_month(
                s.balance, s.account.minimum_payment, rate
            )
            s.interest_paid += interest
            interests[s.account.id] = interest
            payments[s.account.id] = s.account.minimum_payment - unused
            pool += unused

        # ── 2. Pooled extra, highest priority first ───────────────────────
        for s in active:
            if pool <= 0:
                break
            if s.balance <= 0:
                continue
            applied = min(pool, s.balance)
            s.balance -= applied
            if s.balance < PAID_OFF_EPSILON:
                s.balance = 0.0
            pool -= applied
            payments[s.account.id] += applied

        # ── 3. Retire paid-off accounts ───────────────────────────────────
        for s in active:
            if s.balance <= 0:
                s.balance = 0.0
                s.payoff_month = month
                freed_minimums += s.account.minimum_payment

        schedule.append(
            MonthlySnapshot(
                month=month,
                payments=MappingProxyType(payments),
                interest=MappingProxyType(interests),
                balances=MappingProxyType({s.account.id: s.balance for s in active}),
            )
        )

    entries = tuple(
        PayoffPlanEntry(
            account_id=s.account.id,
            account_name=s.account.name,
            order=s.order,
            payoff_month=s.payoff_month,
            total_interest_paid=s.interest_paid,
        )
        for s in states
    )
    return _build_result(strategy_name, entries, extra_payment, tuple(schedule))


def _simulate_simplified(
    ordered: list[DebtAccount],
    strategy_name: str,
    extra_payment: float,
    config: EngineConfig,
) -> StrategyResult:
    """Closed-form estimate: each account on its own, extra only on the first.

    Minimums freed by earlier accounts are not passed on, so later accounts
    are costed at their minimum payment alone.
    """
    entries = []
    for i, account in enumerate(ordered, start=1):
        payment = account.minimum_payment + (extra_payment if i == 1 else 0.0)
        entries.append(
            PayoffPlanEntry(
                account_id=account.id,
                account_name=account.name,
                order=i,
                payoff_month=months_to_payoff(
                    account.balance, payment, account.annual_interest_rate
                ),
                total_interest_paid=total_interest(
                    account.balance, payment, account.annual_interest_rate
                ),
            )
        )

    result = _build_result(strategy_name, tuple(entries), extra_payment, ())
    if result.overall_payoff_month > config.max_simulation_months:
        late = [e for e in entries if e.payoff_month > config.max_simulation_months]
        raise Unconverging(
            config.max_simulation_months,
            sum(a.balance for a in ordered if a.id in {e.account_id for e in late}),
            [e.account_id for e in late],
        )
    return result


def _build_result(
    strategy_name: str,
    entries: tuple[PayoffPlanEntry, ...],
    extra_payment: float,
    schedule: tuple[MonthlySnapshot, ...],
) -> StrategyResult:
    return StrategyResult(
        strategy_name=strategy_name,
        total_interest_paid=sum(e.total_interest_paid for e in entries),
        overall_payoff_month=max(e.payoff_month for e in entries),
        entries=entries,
        extra_payment=extra_payment,
        schedule=schedule,
    )
