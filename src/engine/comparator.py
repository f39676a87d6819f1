"""Snowball vs avalanche comparison and recommendation."""

from __future__ import annotations

from typing import Iterable

from src.engine.models import DebtAccount, StrategyComparison
from src.engine.simulator import simulate
from src.strategies import AvalancheStrategy, SnowballStrategy
from src.utils.config import DEFAULT_CONFIG, EngineConfig
from src.utils.logging_config import get_logger

logger = get_logger("comparator")


def recommend(interest_saved: float, time_saved_months: int, config: EngineConfig) -> str:
    """Pick "avalanche" only when its savings clear either configured threshold."""
    if (
        interest_saved > config.interest_threshold
        or time_saved_months > config.time_saved_threshold_months
    ):
        return AvalancheStrategy().name
    return SnowballStrategy().name


def compare_strategies(
    accounts: Iterable[DebtAccount],
    extra_payment: float = 0.0,
    config: EngineConfig | None = None,
) -> StrategyComparison:
    """Run both orderings and recommend one.

    Avalanche is recommended only when it saves more than
    ``config.interest_threshold`` in interest or more than
    ``config.time_saved_threshold_months`` months; otherwise snowball wins
    for its quicker early payoffs.

    Savings are reported signed (snowball − avalanche), so a negative value
    means snowball came out ahead on that measure.
    """
    config = config or DEFAULT_CONFIG
    accounts = list(accounts)

    snowball = simulate(accounts, SnowballStrategy(), extra_payment, config)
    avalanche = simulate(accounts, AvalancheStrategy(), extra_payment, config)

    interest_saved = snowball.total_interest_paid - avalanche.total_interest_paid
    time_saved = snowball.overall_payoff_month - avalanche.overall_payoff_month

    recommendation = recommend(interest_saved, time_saved, config)

    logger.debug(
        "Avalanche saves $%.2f and %d month(s); recommending %s",
        interest_saved, time_saved, recommendation,
    )

    return StrategyComparison(
        snowball=snowball,
        avalanche=avalanche,
        recommendation=recommendation,
        interest_saved=interest_saved,
        time_saved_months=time_saved,
        extra_payment=extra_payment,
    )
