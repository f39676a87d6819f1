"""Unit tests for payoff ordering strategies."""

import pytest

from src.engine.models import DebtAccount
from src.strategies import (
    ALL_STRATEGIES,
    AvalancheStrategy,
    CustomOrderStrategy,
    PayoffStrategy,
    SnowballStrategy,
    get_strategy,
)


@pytest.fixture
def accounts_3() -> list[DebtAccount]:
    return [
        DebtAccount("high", "High Rate", 1800, 26.9, 60),
        DebtAccount("mid", "Mid Rate", 6500, 21.9, 180),
        DebtAccount("low", "Low Rate", 3200, 16.9, 80),
    ]


def _ids(accounts):
    return [a.id for a in accounts]


class TestSnowball:

    def test_smallest_balance_first(self, accounts_3):
        assert _ids(SnowballStrategy().order(accounts_3)) == ["high", "low", "mid"]

    def test_ties_broken_by_id(self):
        accounts = [
            DebtAccount("b", "B", 1000, 10, 50),
            DebtAccount("a", "A", 1000, 20, 50),
        ]
        assert _ids(SnowballStrategy().order(accounts)) == ["a", "b"]

    def test_zero_balance_excluded(self, accounts_3):
        accounts = accounts_3 + [DebtAccount("done", "Done", 0, 29.9, 0)]
        assert "done" not in _ids(SnowballStrategy().order(accounts))

    def test_name(self):
        assert SnowballStrategy().name == "snowball"


class TestAvalanche:

    def test_highest_rate_first(self, accounts_3):
        assert _ids(AvalancheStrategy().order(accounts_3)) == ["high", "mid", "low"]

    def test_rate_ties_broken_by_balance_then_id(self):
        accounts = [
            DebtAccount("c", "C", 2000, 18, 50),
            DebtAccount("b", "B", 1000, 18, 50),
            DebtAccount("a", "A", 1000, 18, 50),
        ]
        assert _ids(AvalancheStrategy().order(accounts)) == ["a", "b", "c"]

    def test_does_not_mutate_input(self, accounts_3):
        before = list(accounts_3)
        AvalancheStrategy().order(accounts_3)
        assert accounts_3 == before

    def test_name(self):
        assert AvalancheStrategy().name == "avalanche"


class TestCustomOrder:

    def test_explicit_order(self, accounts_3):
        strategy = CustomOrderStrategy(["mid", "low", "high"])
        assert _ids(strategy.order(accounts_3)) == ["mid", "low", "high"]
        assert strategy.name == "custom"

    def test_paid_off_ids_ignored(self, accounts_3):
        strategy = CustomOrderStrategy(["gone", "low", "high", "mid"])
        assert _ids(strategy.order(accounts_3)) == ["low", "high", "mid"]

    def test_missing_account_rejected(self, accounts_3):
        with pytest.raises(ValueError, match="missing"):
            CustomOrderStrategy(["mid", "low"]).order(accounts_3)

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            CustomOrderStrategy(["a", "a"])


class TestRegistry:

    @pytest.mark.parametrize("StrategyClass", ALL_STRATEGIES)
    def test_lookup_by_name(self, StrategyClass):
        name = StrategyClass().name
        assert isinstance(get_strategy(name), StrategyClass)

    def test_instance_passthrough(self):
        strategy = CustomOrderStrategy(["x"])
        assert get_strategy(strategy) is strategy

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown payoff strategy"):
            get_strategy("blizzard")

    def test_all_are_strategies(self):
        for StrategyClass in ALL_STRATEGIES:
            assert isinstance(StrategyClass(), PayoffStrategy)
