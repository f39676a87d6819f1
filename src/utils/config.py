"""YAML configuration loader and dataclasses for the payoff engine."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from src.engine.models import DebtAccount

CASCADE_MODES = ("monthly", "simplified")


def _resolve_config_path(path: str | Path) -> Path:
    """Resolve a config path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # Returned even if missing so open() gives the descriptive FileNotFoundError
            return parent / p

    return p


@dataclass(frozen=True)
class EngineConfig:
    """Tunable thresholds and limits for simulation and comparison."""

    interest_threshold: float = 1000.0       # Currency units avalanche must save to be recommended
    time_saved_threshold_months: int = 6     # ...or months it must save
    max_simulation_months: int = 1200        # 100 years
    cascade_mode: str = "monthly"            # "monthly" or "simplified"

    def __post_init__(self) -> None:
        if self.interest_threshold < 0:
            raise ValueError(f"interest_threshold must be ≥ 0, got {self.interest_threshold!r}")
        if self.time_saved_threshold_months < 0:
            raise ValueError(
                f"time_saved_threshold_months must be ≥ 0, got {self.time_saved_threshold_months!r}"
            )
        if self.max_simulation_months < 1:
            raise ValueError(
                f"max_simulation_months must be ≥ 1, got {self.max_simulation_months!r}"
            )
        if self.cascade_mode not in CASCADE_MODES:
            valid = ", ".join(CASCADE_MODES)
            raise ValueError(f"Unknown cascade_mode {self.cascade_mode!r}. Valid: {valid}")


DEFAULT_CONFIG = EngineConfig()


def engine_config_from_dict(raw: dict[str, Any] | None) -> EngineConfig:
    """Build an EngineConfig from a plain dict, rejecting unknown keys.

    YAML files may also use the camelCase key names
    (``interestThreshold``, ``timeSavedThresholdMonths``, ``maxSimulationMonths``).
    """
    aliases = {
        "interestThreshold": "interest_threshold",
        "timeSavedThresholdMonths": "time_saved_threshold_months",
        "maxSimulationMonths": "max_simulation_months",
        "cascadeMode": "cascade_mode",
    }
    known = {f.name for f in fields(EngineConfig)}

    values: dict[str, Any] = {}
    for key, value in (raw or {}).items():
        name = aliases.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown engine config key {key!r}")
        values[name] = value

    if "interest_threshold" in values:
        values["interest_threshold"] = float(values["interest_threshold"])
    for name in ("time_saved_threshold_months", "max_simulation_months"):
        if name in values:
            values[name] = int(values[name])

    return EngineConfig(**values)


def load_engine_config(path: str | Path) -> EngineConfig:
    """Load an EngineConfig from a YAML file.

    The file may hold the options at top level or under an ``engine:`` key.

    Args:
        path: Path to a YAML config file (e.g., configs/engine/default.yaml).

    Returns:
        Populated EngineConfig instance.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    return engine_config_from_dict(raw.get("engine", raw))


def load_accounts(path: str | Path) -> list[DebtAccount]:
    """Load debt accounts from a YAML file with an ``accounts:`` list.

    Each item goes through DebtAccount.from_record, so negative balances and
    missing minimum payments are normalized the same way as stored records.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    records = raw.get("accounts", [])
    return [DebtAccount.from_record(record) for record in records]
