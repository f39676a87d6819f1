"""Unit tests for the single-account amortization math.

Tests verify months-to-payoff, total interest and the month-by-month
schedule against hand-calculated expected values.
"""

import math

import pytest

from src.engine.amortization import (
    accrue_month,
    amortization_schedule,
    monthly_rate,
    months_to_payoff,
    total_interest,
)
from src.engine.errors import InvalidPayment, PaymentInsufficient


# ── Rate conversion ───────────────────────────────────────────────────────

class TestMonthlyRate:

    def test_percent_to_monthly(self):
        assert monthly_rate(18.0) == pytest.approx(0.015)

    def test_zero(self):
        assert monthly_rate(0.0) == 0.0


# ── Months to payoff ──────────────────────────────────────────────────────

class TestMonthsToPayoff:

    def test_closed_form(self):
        """$1000 at 12% paying $100: n = −ln(0.9)/ln(1.01) ≈ 10.59 → 11."""
        assert months_to_payoff(1000, 100, 12) == 11

    def test_closed_form_credit_card(self):
        """$5000 at 18% paying $150: n = −ln(0.5)/ln(1.015) ≈ 46.6 → 47."""
        assert months_to_payoff(5000, 150, 18) == 47

    def test_zero_balance(self):
        assert months_to_payoff(0, 100, 18) == 0

    def test_negative_balance_is_nothing_owed(self):
        assert months_to_payoff(-50, 100, 18) == 0

    def test_floor_of_one_month(self):
        """Paying more than the balance still takes one month."""
        assert months_to_payoff(100, 5000, 18) == 1

    @pytest.mark.parametrize("payment", [0.0, -25.0])
    def test_non_positive_payment(self, payment):
        with pytest.raises(InvalidPayment) as exc_info:
            months_to_payoff(1000, payment, 18)
        assert exc_info.value.payment == payment

    def test_payment_below_interest(self):
        """2%/month on $1000 is $20 of interest; $10 never amortizes."""
        with pytest.raises(PaymentInsufficient) as exc_info:
            months_to_payoff(1000, 10, 24)
        assert exc_info.value.interest == pytest.approx(20.0)
        assert exc_info.value.payment == 10

    def test_payment_equal_to_interest(self):
        with pytest.raises(PaymentInsufficient):
            months_to_payoff(1000, 20, 24)

    def test_monotone_in_payment(self):
        """Paying more never takes longer."""
        payments = [80, 100, 150, 250, 500, 1000, 5000, 6000]
        months = [months_to_payoff(5000, p, 18) for p in payments]
        assert all(a >= b for a, b in zip(months, months[1:]))
        assert months[0] > months[-1]


# ── Zero-rate exactness ──────────────────────────────────────────────────

class TestZeroRate:

    @pytest.mark.parametrize("balance, payment", [
        (1000, 300),
        (1000, 100),
        (999.99, 100),
        (50, 100),
        (1234.56, 78.9),
    ])
    def test_months_is_ceil(self, balance, payment):
        assert months_to_payoff(balance, payment, 0) == math.ceil(balance / payment)

    @pytest.mark.parametrize("balance, payment", [(1000, 300), (1000, 100), (50, 100)])
    def test_no_interest(self, balance, payment):
        assert total_interest(balance, payment, 0) == 0.0


# ── Total interest ───────────────────────────────────────────────────────

class TestTotalInterest:

    def test_final_payment_is_partial(self):
        """11 payments on $1000 at 12%: ten of $100, then $58.98 to close."""
        assert total_interest(1000, 100, 12) == pytest.approx(58.98, abs=0.01)

    @pytest.mark.parametrize("balance, payment, rate", [
        (1000, 100, 12),
        (5000, 150, 18),
        (3000, 90, 10),
        (100, 5000, 18),
    ])
    def test_matches_schedule(self, balance, payment, rate):
        rows = amortization_schedule(balance, payment, rate)
        assert total_interest(balance, payment, rate) == pytest.approx(
            sum(r.interest_portion for r in rows), abs=0.01
        )

    def test_zero_balance(self):
        assert total_interest(0, 100, 12) == 0.0

    def test_propagates_insufficient(self):
        with pytest.raises(PaymentInsufficient):
            total_interest(1000, 10, 24)

    def test_single_month_payoff(self):
        """Overpaying still costs the one month of interest, not the overpayment."""
        assert total_interest(100, 5000, 18) == pytest.approx(1.5)

    def test_never_negative(self):
        assert total_interest(0.01, 5000, 18) >= 0.0


# ── Single-month step ────────────────────────────────────────────────────

class TestAccrueMonth:

    def test_regular_month(self):
        interest, principal, ending, unused = accrue_month(1000, 100, 0.01)
        assert interest == pytest.approx(10.0)
        assert principal == pytest.approx(90.0)
        assert ending == pytest.approx(910.0)
        assert unused == 0.0

    def test_closing_month_returns_leftover(self):
        interest, principal, ending, unused = accrue_month(50, 100, 0.01)
        assert interest == pytest.approx(0.5)
        assert principal == pytest.approx(50.0)
        assert ending == 0.0
        assert unused == pytest.approx(49.5)

    def test_payment_below_interest_grows_balance(self):
        interest, principal, ending, unused = accrue_month(1000, 5, 0.01)
        assert principal == pytest.approx(-5.0)
        assert ending == pytest.approx(1005.0)
        assert unused == 0.0

    def test_sub_cent_residue_is_paid_off(self):
        _, _, ending, _ = accrue_month(100.004, 100, 0.0)
        assert ending == 0.0


# ── Schedule ─────────────────────────────────────────────────────────────

class TestAmortizationSchedule:

    def test_first_row(self):
        first = next(iter(amortization_schedule(1000, 100, 12)))
        assert first.month == 1
        assert first.interest_portion == pytest.approx(10.0)
        assert first.principal_portion == pytest.approx(90.0)
        assert first.ending_balance == pytest.approx(910.0)

    def test_terminates_at_zero(self):
        rows = list(amortization_schedule(1000, 100, 12))
        assert len(rows) == 11
        assert rows[-1].ending_balance == 0.0
        assert all(r.ending_balance > 0 for r in rows[:-1])
        assert [r.month for r in rows] == list(range(1, 12))

    def test_principal_sums_to_balance(self):
        rows = list(amortization_schedule(5000, 150, 18))
        assert sum(r.principal_portion for r in rows) == pytest.approx(5000.0, abs=0.01)

    @pytest.mark.parametrize("balance, payment, rate", [
        (1000, 100, 12),
        (5000, 150, 18),
        (1000, 300, 0),
    ])
    def test_length_matches_closed_form(self, balance, payment, rate):
        rows = list(amortization_schedule(balance, payment, rate))
        assert len(rows) == months_to_payoff(balance, payment, rate)

    def test_zero_rate_final_partial_payment(self):
        rows = list(amortization_schedule(1000, 300, 0))
        assert [r.principal_portion for r in rows] == [300, 300, 300, 100]
        assert all(r.interest_portion == 0 for r in rows)

    def test_restartable(self):
        schedule = amortization_schedule(5000, 150, 18)
        assert list(schedule) == list(schedule)

    def test_balances_decrease(self):
        rows = list(amortization_schedule(5000, 150, 18))
        for prev, cur in zip(rows, rows[1:]):
            assert cur.ending_balance < prev.ending_balance

    def test_zero_balance_is_empty(self):
        assert list(amortization_schedule(0, 0, 18)) == []

    def test_insufficient_payment_rejected_on_construction(self):
        with pytest.raises(PaymentInsufficient):
            amortization_schedule(1000, 10, 24)

    def test_invalid_payment_rejected_on_construction(self):
        with pytest.raises(InvalidPayment):
            amortization_schedule(1000, 0, 24)

    @pytest.mark.parametrize("term, rate", [(12, 12.0), (36, 18.0), (60, 6.0), (48, 24.99)])
    def test_exact_annuity_term(self, term, rate):
        """The level payment that retires the balance in exactly ``term`` months."""
        r = monthly_rate(rate)
        payment = 1000 * r / (1 - (1 + r) ** -term)
        assert months_to_payoff(1000, payment, rate) == term
        assert len(list(amortization_schedule(1000, payment, rate))) == term
