"""Unit tests for configuration and account loading."""

import pytest

from src.engine.models import DebtAccount
from src.utils.config import (
    EngineConfig,
    engine_config_from_dict,
    load_accounts,
    load_engine_config,
)


class TestEngineConfig:

    def test_defaults(self):
        cfg = EngineConfig()
        assert cfg.interest_threshold == 1000.0
        assert cfg.time_saved_threshold_months == 6
        assert cfg.max_simulation_months == 1200
        assert cfg.cascade_mode == "monthly"

    @pytest.mark.parametrize("kwargs", [
        {"interest_threshold": -1.0},
        {"time_saved_threshold_months": -1},
        {"max_simulation_months": 0},
        {"cascade_mode": "weekly"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_from_dict_with_aliases(self):
        cfg = engine_config_from_dict({"interestThreshold": 500, "maxSimulationMonths": "240"})
        assert cfg.interest_threshold == 500.0
        assert cfg.max_simulation_months == 240

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown engine config key"):
            engine_config_from_dict({"snowball_bonus": 1})

    def test_empty_dict_is_default(self):
        assert engine_config_from_dict(None) == EngineConfig()


class TestLoadEngineConfig:

    def test_shipped_default(self):
        assert load_engine_config("configs/engine/default.yaml") == EngineConfig()

    def test_nested_under_engine_key(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("engine:\n  interest_threshold: 250\n  cascade_mode: simplified\n")
        cfg = load_engine_config(path)
        assert cfg.interest_threshold == 250.0
        assert cfg.cascade_mode == "simplified"

    def test_top_level_keys(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("timeSavedThresholdMonths: 3\n")
        assert load_engine_config(path).time_saved_threshold_months == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_engine_config(tmp_path / "nope.yaml")


class TestLoadAccounts:

    def test_example_portfolio(self):
        accounts = load_accounts("configs/accounts/example.yaml")
        by_id = {a.id: a for a in accounts}
        assert set(by_id) == {"visa", "store", "car", "medical"}
        assert by_id["visa"].balance == pytest.approx(4200.0)
        assert by_id["car"].account_type == "loan"
        assert by_id["medical"].minimum_payment == pytest.approx(24.0)

    def test_from_record_normalizes(self):
        account = DebtAccount.from_record(
            {"id": 7, "balance": -2500, "interest_rate": 19.99}
        )
        assert account.balance == 2500.0
        assert account.annual_interest_rate == 19.99
        assert account.minimum_payment == pytest.approx(50.0)
        assert account.name == "7"
        assert account.account_type == "credit"

    def test_from_record_missing_rate(self):
        account = DebtAccount.from_record({"id": "x", "balance": 100, "minimum_payment": 25})
        assert account.annual_interest_rate == 0.0
        assert account.minimum_payment == 25.0
