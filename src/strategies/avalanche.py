"""Avalanche strategy: highest interest rate first."""

from __future__ import annotations

from typing import Any

from src.engine.models import DebtAccount
from src.strategies.base_strategy import PayoffStrategy


class AvalancheStrategy(PayoffStrategy):
    """Debt avalanche: direct the pooled extra at the highest rate first.

    Ties on rate go to the smaller balance, then to the account id.
    """

    @property
    def name(self) -> str:
        return "avalanche"

    def sort_key(self, account: DebtAccount) -> tuple[Any, ...]:
        return (-account.annual_interest_rate, account.balance, str(account.id))
