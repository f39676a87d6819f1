"""Tabular views over engine results for reports, benchmarks and plots."""

from __future__ import annotations

import numpy as np
import pandas as pd

from src.engine.models import AccountProjection, StrategyComparison, StrategyResult


def plan_to_frame(result: StrategyResult) -> pd.DataFrame:
    """One row per account: order, payoff month and interest, in priority order."""
    rows = [
        {
            "strategy": result.strategy_name,
            "order": e.order,
            "account_id": e.account_id,
            "account_name": e.account_name,
            "payoff_month": e.payoff_month,
            "total_interest_paid": e.total_interest_paid,
        }
        for e in sorted(result.entries, key=lambda e: e.order)
    ]
    return pd.DataFrame(rows)


def schedule_to_frame(result: StrategyResult) -> pd.DataFrame:
    """Long-form monthly schedule: one row per (month, open account)."""
    rows = [
        {
            "month": snap.month,
            "account_id": account_id,
            "payment": snap.payments[account_id],
            "interest": snap.interest[account_id],
            "balance": snap.balances[account_id],
        }
        for snap in result.schedule
        for account_id in snap.payments
    ]
    return pd.DataFrame(rows, columns=["month", "account_id", "payment", "interest", "balance"])


def projection_to_frame(projections: list[AccountProjection]) -> pd.DataFrame:
    """Flatten per-account projections into one table."""
    rows = [
        {
            "account_id": p.account_id,
            "account_name": p.account_name,
            "month": row.month,
            "balance": row.balance,
            "interest_paid": row.interest_paid,
            "principal_paid": row.principal_paid,
            "cumulative_interest": row.cumulative_interest,
        }
        for p in projections
        for row in p.rows
    ]
    return pd.DataFrame(rows)


def balance_trajectory(result: StrategyResult, starting_balance: float | None = None) -> np.ndarray:
    """Total outstanding balance at the end of each simulated month.

    If ``starting_balance`` is given it is prepended as month 0.
    """
    totals = [sum(snap.balances.values()) for snap in result.schedule]
    if starting_balance is not None:
        totals.insert(0, starting_balance)
    return np.asarray(totals, dtype=np.float64)


def comparison_row(comparison: StrategyComparison) -> dict:
    """Flat record of a comparison, suitable for a DataFrame row."""
    return {
        "extra_payment": comparison.extra_payment,
        "num_accounts": len(comparison.snowball.entries),
        "snowball_interest": round(comparison.snowball.total_interest_paid, 2),
        "avalanche_interest": round(comparison.avalanche.total_interest_paid, 2),
        "snowball_months": comparison.snowball.overall_payoff_month,
        "avalanche_months": comparison.avalanche.overall_payoff_month,
        "interest_saved": round(comparison.interest_saved, 2),
        "time_saved_months": comparison.time_saved_months,
        "same_order": comparison.snowball.payoff_order == comparison.avalanche.payoff_order,
        "recommendation": comparison.recommendation,
    }


def summarize_benchmark(df: pd.DataFrame) -> pd.DataFrame:
    """Aggregate per-scenario comparison rows into headline statistics."""
    saved = df["interest_saved"].to_numpy(dtype=np.float64)
    months = df["time_saved_months"].to_numpy(dtype=np.float64)
    return pd.DataFrame([
        {
            "scenarios": len(df),
            "interest_saved_mean": float(np.mean(saved)) if len(saved) else 0.0,
            "interest_saved_max": float(np.max(saved)) if len(saved) else 0.0,
            "time_saved_mean": float(np.mean(months)) if len(months) else 0.0,
            "avalanche_recommended_pct": (
                float((df["recommendation"] == "avalanche").mean() * 100) if len(df) else 0.0
            ),
            "snowball_cheaper_count": int((saved < -1e-9).sum()),
        }
    ])
