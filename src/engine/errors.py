"""Error taxonomy for the payoff engine.

Every failure is raised at the point of computation and carries the values
that caused it, so the caller can tell the user what to change.
"""

from __future__ import annotations


class DebtEngineError(ValueError):
    """Base class for all engine failures."""


class InvalidPayment(DebtEngineError):
    """A payment that must be positive (or non-negative, for extras) is not."""

    def __init__(self, payment: float, what: str = "payment"):
        self.payment = payment
        self.what = what
        super().__init__(f"Invalid {what}: {payment!r}")


class PaymentInsufficient(DebtEngineError):
    """The payment does not exceed the interest accruing on the balance."""

    def __init__(self, balance: float, payment: float, interest: float):
        self.balance = balance
        self.payment = payment
        self.interest = interest
        super().__init__(
            f"Payment ${payment:,.2f} does not cover monthly interest "
            f"${interest:,.2f} on balance ${balance:,.2f}"
        )


class Unconverging(DebtEngineError):
    """The multi-account simulation hit its month cap with debt remaining."""

    def __init__(self, months: int, remaining_balance: float, open_accounts: list):
        self.months = months
        self.remaining_balance = remaining_balance
        self.open_accounts = list(open_accounts)
        super().__init__(
            f"Simulation did not converge within {months} months; "
            f"${remaining_balance:,.2f} remains across {len(self.open_accounts)} account(s)"
        )


class NoDebtAccounts(DebtEngineError):
    """An operation that needs at least one open debt account got none."""

    def __init__(self, message: str = "No debt accounts with a positive balance"):
        super().__init__(message)
