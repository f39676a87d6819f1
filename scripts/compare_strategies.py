"""Compare snowball and avalanche plans for a portfolio and print the result.

Usage:
    python scripts/compare_strategies.py
    python scripts/compare_strategies.py --accounts configs/accounts/example.yaml --extra 200
    python scripts/compare_strategies.py --preset hard_5card --extra 300 --allocation
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.engine.comparator import compare_strategies
from src.engine.errors import DebtEngineError
from src.engine.optimizer import optimize_allocation
from src.engine.scenario_sampler import ScenarioSampler
from src.engine.summary import summarize_debts
from src.evaluation.metrics import plan_to_frame
from src.utils.config import load_accounts, load_engine_config
from src.utils.logging_config import setup_logging


def print_plan(result) -> None:
    print(f"\n{'#'*60}")
    print(f"  {result.strategy_name.upper()}: {result.overall_payoff_month} months, "
          f"${result.total_interest_paid:,.2f} interest")
    print(f"{'#'*60}")
    print(plan_to_frame(result).drop(columns=["strategy"]).to_string(index=False))


def main():
    parser = argparse.ArgumentParser(description="Compare debt payoff strategies")
    parser.add_argument("--accounts", type=str, default="configs/accounts/example.yaml")
    parser.add_argument("--preset", type=str, default=None, help="Use a sampler preset instead")
    parser.add_argument("--config", type=str, default="configs/engine/default.yaml")
    parser.add_argument("--extra", type=float, default=0.0, help="Monthly extra payment")
    parser.add_argument("--allocation", action="store_true", help="Also show next-month allocation")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.verbose else "WARNING", verbose=args.verbose)

    config = load_engine_config(args.config)
    accounts = ScenarioSampler.preset(args.preset) if args.preset else load_accounts(args.accounts)

    summary = summarize_debts(accounts)
    print(f"Total debt: ${summary.total_debt:,.2f} across {summary.account_count} account(s), "
          f"minimums ${summary.total_minimum_payments:,.2f}/month, "
          f"weighted rate {summary.average_interest_rate:.2f}%")

    try:
        comparison = compare_strategies(accounts, args.extra, config)
    except DebtEngineError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print_plan(comparison.snowball)
    print_plan(comparison.avalanche)

    print(f"\n  Avalanche saves ${comparison.interest_saved:,.2f} "
          f"and {comparison.time_saved_months} month(s)")
    print(f"  Recommendation: {comparison.recommendation}")

    if args.allocation:
        print("\n  Next month's allocation:")
        for rec in optimize_allocation(accounts, args.extra):
            print(f"    {rec.account_name:.<25s} pay ${rec.recommended_payment:>9,.2f}  "
                  f"(extra ${rec.extra_portion:,.2f}, saves {rec.impact_on_payoff_time} months, "
                  f"${rec.impact_on_interest:,.2f})  [{rec.rationale.value}]")


if __name__ == "__main__":
    main()
