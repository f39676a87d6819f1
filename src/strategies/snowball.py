"""Snowball strategy: smallest balance first."""

from __future__ import annotations

from typing import Any

from src.engine.models import DebtAccount
from src.strategies.base_strategy import PayoffStrategy


class SnowballStrategy(PayoffStrategy):
    """Debt snowball: retire the smallest balance first.

    Psychologically motivated strategy, quick wins by eliminating small debts.
    Ties are broken by account id.
    """

    @property
    def name(self) -> str:
        return "snowball"

    def sort_key(self, account: DebtAccount) -> tuple[Any, ...]:
        return (account.balance, str(account.id))
