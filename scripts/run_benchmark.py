"""Compare snowball and avalanche on randomized portfolios and produce a CSV.

Usage:
    python scripts/run_benchmark.py                  # Full: 1000 scenarios × 5 seeds
    python scripts/run_benchmark.py --quick          # Dev:  50 scenarios × 1 seed
"""

import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pandas as pd

from src.engine.comparator import compare_strategies
from src.engine.errors import DebtEngineError
from src.engine.scenario_sampler import ScenarioSampler
from src.evaluation.metrics import comparison_row, summarize_benchmark
from src.utils.config import load_engine_config
from src.utils.logging_config import get_logger, setup_logging

logger = get_logger("benchmark")


def run_benchmark(
    num_scenarios: int = 1000,
    seeds: list[int] | None = None,
    output_dir: str = "results",
    config_path: str = "configs/engine/default.yaml",
) -> pd.DataFrame:
    """Compare both strategies across seeds × scenarios.

    Returns:
        DataFrame with one row per (seed, scenario).
    """
    if seeds is None:
        seeds = [42]

    config = load_engine_config(config_path)
    sampler = ScenarioSampler()
    rows: list[dict] = []
    t0 = time.time()

    for seed in seeds:
        rng = np.random.default_rng(seed)
        for idx in range(num_scenarios):
            accounts = sampler.sample(rng)
            extra = sampler.sample_extra_payment(rng)
            try:
                comparison = compare_strategies(accounts, extra, config)
            except DebtEngineError:
                logger.exception("Scenario %d (seed %d) failed", idx, seed)
                raise
            rows.append({"seed": seed, "scenario": idx, **comparison_row(comparison)})

        print(f"  seed {seed}: {num_scenarios} scenarios, {time.time() - t0:.1f}s elapsed")

    df = pd.DataFrame(rows)

    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_path = out_path / "strategy_comparison.csv"
    df.to_csv(csv_path, index=False)
    print(f"\nPer-scenario results saved to {csv_path}")

    return df


def main():
    parser = argparse.ArgumentParser(description="Benchmark snowball vs avalanche")
    parser.add_argument("--config", type=str, default="configs/engine/default.yaml")
    parser.add_argument("--quick", action="store_true", help="Quick run: 50 scenarios, 1 seed")
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    setup_logging("INFO")

    if args.quick:
        num_scenarios, seeds = 50, [42]
        print("Quick mode: 50 scenarios × 1 seed")
    else:
        num_scenarios, seeds = 1000, [42, 123, 456, 789, 1024]
        print(f"Full mode: {num_scenarios} scenarios × {len(seeds)} seeds")

    df = run_benchmark(num_scenarios, seeds, args.output, args.config)

    print("\n" + "=" * 90)
    print("  SNOWBALL vs AVALANCHE: Summary Statistics")
    print("=" * 90)
    print(summarize_benchmark(df).to_string(index=False))
    print()


if __name__ == "__main__":
    main()
