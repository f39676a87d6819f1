"""Plot total-balance trajectories of both strategies for one portfolio.

Usage:
    python scripts/plot_payoff.py
    python scripts/plot_payoff.py --preset hard_5card --extra 250 --output results/payoff.png
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt

from src.engine.comparator import compare_strategies
from src.engine.scenario_sampler import ScenarioSampler
from src.evaluation.metrics import balance_trajectory
from src.utils.config import load_accounts, load_engine_config

COLORS = {
    "snowball": "#3498db",
    "avalanche": "#9b59b6",
}


def make_trajectory_plot(comparison, starting_balance: float, output_path: str) -> None:
    """Line plot of total outstanding balance per month, one line per strategy."""
    fig, ax = plt.subplots(figsize=(12, 6))

    for result in (comparison.snowball, comparison.avalanche):
        totals = balance_trajectory(result, starting_balance)
        ax.plot(
            range(len(totals)),
            totals,
            label=f"{result.strategy_name} ({result.overall_payoff_month} mo, "
                  f"${result.total_interest_paid:,.0f} interest)",
            color=COLORS.get(result.strategy_name, "#333333"),
            linewidth=2,
        )
        for entry in result.entries:
            ax.axvline(entry.payoff_month, color=COLORS.get(result.strategy_name), alpha=0.15)

    ax.set_title(
        f"Debt Payoff Trajectory (extra ${comparison.extra_payment:,.0f}/month, "
        f"recommended: {comparison.recommendation})",
        fontsize=14, fontweight="bold",
    )
    ax.set_xlabel("Month")
    ax.set_ylabel("Total Balance ($)")
    ax.grid(alpha=0.3)
    ax.legend()

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Trajectory plot saved to {out}")


def main():
    parser = argparse.ArgumentParser(description="Plot payoff trajectories")
    parser.add_argument("--accounts", type=str, default="configs/accounts/example.yaml")
    parser.add_argument("--preset", type=str, default=None)
    parser.add_argument("--config", type=str, default="configs/engine/default.yaml")
    parser.add_argument("--extra", type=float, default=0.0)
    parser.add_argument("--output", type=str, default="results/payoff_trajectory.png")
    args = parser.parse_args()

    accounts = ScenarioSampler.preset(args.preset) if args.preset else load_accounts(args.accounts)
    comparison = compare_strategies(accounts, args.extra, load_engine_config(args.config))
    starting = sum(a.balance for a in accounts)

    make_trajectory_plot(comparison, starting, args.output)


if __name__ == "__main__":
    main()
