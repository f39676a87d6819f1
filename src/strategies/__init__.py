"""Payoff ordering strategies for the debt simulator."""

from src.strategies.base_strategy import PayoffStrategy
from src.strategies.snowball import SnowballStrategy
from src.strategies.avalanche import AvalancheStrategy
from src.strategies.custom_order import CustomOrderStrategy

ALL_STRATEGIES = [
    SnowballStrategy,
    AvalancheStrategy,
]


def get_strategy(strategy: "str | PayoffStrategy") -> PayoffStrategy:
    """Resolve a strategy name (``"snowball"``, ``"avalanche"``) or pass an instance through."""
    if isinstance(strategy, PayoffStrategy):
        return strategy

    registry = {cls().name: cls for cls in ALL_STRATEGIES}
    if strategy not in registry:
        valid = ", ".join(sorted(registry))
        raise ValueError(f"Unknown payoff strategy {strategy!r}. Valid: {valid}")
    return registry[strategy]()


__all__ = [
    "PayoffStrategy",
    "SnowballStrategy",
    "AvalancheStrategy",
    "CustomOrderStrategy",
    "ALL_STRATEGIES",
    "get_strategy",
]
