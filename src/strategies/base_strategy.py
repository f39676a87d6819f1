"""Abstract base class for payoff ordering strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from src.engine.models import DebtAccount, open_accounts


class PayoffStrategy(ABC):
    """Interface for a priority ordering over debt accounts.

    The simulator guarantees every open account its minimum payment. A
    strategy only decides which open account receives the pooled extra
    payment first, second, and so on.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in results, e.g. ``"snowball"``."""
        ...

    @abstractmethod
    def sort_key(self, account: DebtAccount) -> tuple[Any, ...]:
        """Key such that ascending sort yields highest priority first.

        Must end in a unique component (the account id) so the order is total.
        """
        ...

    def order(self, accounts: Iterable[DebtAccount]) -> list[DebtAccount]:
        """Return the open accounts, highest priority first."""
        return sorted(open_accounts(accounts), key=self.sort_key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
