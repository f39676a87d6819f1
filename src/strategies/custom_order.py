"""Custom strategy: a caller-chosen priority list of account ids."""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Sequence

from src.engine.models import DebtAccount, open_accounts
from src.strategies.base_strategy import PayoffStrategy


class CustomOrderStrategy(PayoffStrategy):
    """Pay accounts down in an explicit order supplied by the user.

    Every open account must appear in ``account_ids``; ids of accounts that
    are already paid off are ignored.
    """

    def __init__(self, account_ids: Sequence[Hashable], name: str = "custom"):
        if len(set(account_ids)) != len(account_ids):
            raise ValueError(f"Duplicate account ids in custom order: {list(account_ids)!r}")
        self._rank = {account_id: i for i, account_id in enumerate(account_ids)}
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def sort_key(self, account: DebtAccount) -> tuple[Any, ...]:
        return (self._rank[account.id],)

    def order(self, accounts: Iterable[DebtAccount]) -> list[DebtAccount]:
        active = open_accounts(accounts)
        missing = [a.id for a in active if a.id not in self._rank]
        if missing:
            raise ValueError(f"Custom order is missing account ids: {missing!r}")
        return sorted(active, key=self.sort_key)

    def __repr__(self) -> str:
        ids = sorted(self._rank, key=self._rank.get)
        return f"CustomOrderStrategy({ids!r}, name={self._name!r})"
