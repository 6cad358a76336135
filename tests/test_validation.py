"""Tests for Pydantic input validation and scenario loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fair_simulator.config import (
    FinanceConfig,
    InsurancePolicy,
    Scenario,
    SchedulerConfig,
    SimulationConfig,
    TriangularInput,
    load_scenario,
)
from fair_simulator.config.variables import VARIABLE_REGISTRY, default_inputs

from conftest import BASE_CASE_PATH


# ═══════════════════════════════════════════════════════════════════════════
# Triangular inputs
# ═══════════════════════════════════════════════════════════════════════════


class TestTriangularValidation:
    """TriangularInput ordering and range checks."""

    def test_defaults_are_valid(self):
        for value in default_inputs().values():
            lo, mode, hi = value.resolved()
            assert lo <= mode <= hi

    def test_mode_only(self):
        value = TriangularInput(mode=10)
        assert value.min is None and value.max is None
        assert value.resolved() == (5.0, 10.0, 15.0)

    def test_min_above_mode_rejected(self):
        with pytest.raises(ValidationError):
            TriangularInput(min=5, mode=3, max=10)

    def test_max_below_mode_rejected(self):
        with pytest.raises(ValidationError):
            TriangularInput(min=1, mode=5, max=4)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            TriangularInput(mode=-1)

    def test_mode_required(self):
        with pytest.raises(ValidationError):
            TriangularInput(min=1, max=2)

    def test_frozen(self):
        value = TriangularInput(mode=1)
        with pytest.raises(ValidationError):
            value.mode = 2

    def test_registry_matches_defaults(self):
        assert set(VARIABLE_REGISTRY) == set(default_inputs())


# ═══════════════════════════════════════════════════════════════════════════
# Scenario-level checks
# ═══════════════════════════════════════════════════════════════════════════


class TestScenarioValidation:
    """Controls, insurance, finance and run settings."""

    def test_defaults_are_valid(self):
        scenario = Scenario()
        assert scenario.controls == {}
        assert len(scenario.control_defs) == 9
        assert scenario.archetype is None

    def test_maturity_above_five_rejected(self):
        with pytest.raises(ValidationError):
            Scenario(controls={"mfa": 6})

    def test_negative_maturity_rejected(self):
        with pytest.raises(ValidationError):
            Scenario(controls={"mfa": -1})

    def test_negative_deductible_rejected(self):
        with pytest.raises(ValidationError):
            InsurancePolicy(deductible=-1)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            InsurancePolicy(coverage_limit=-100)

    def test_capital_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            FinanceConfig(debt_weight=0.5, equity_weight=0.7)

    def test_zero_iterations_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(iteration_count=0)

    def test_iteration_ceiling(self):
        SimulationConfig(iteration_count=50_000)
        with pytest.raises(ValidationError):
            SimulationConfig(iteration_count=50_001)

    def test_scheduler_defaults(self):
        cfg = SchedulerConfig()
        assert cfg.sync_max_iterations == 3_000
        assert cfg.sensitivity_min_iterations == 10_000
        assert cfg.raw_input_min_iterations == 5_000
        assert cfg.debounce_seconds == 0.5
        assert cfg.fallback_max_iterations == 5_000
        assert cfg.start_method == "spawn"


# ═══════════════════════════════════════════════════════════════════════════
# YAML loading
# ═══════════════════════════════════════════════════════════════════════════


class TestLoadScenario:
    def test_base_case(self):
        scenario = load_scenario(BASE_CASE_PATH)
        assert scenario.controls == {"mfa": 2, "segmentation": 1, "edr": 3, "backups": 2}
        assert scenario.archetype.modeled_insurance.deductible == 500_000
        assert scenario.archetype.modeled_insurance.coverage_limit == 15_000_000
        assert scenario.simulation.random_seed == 42

    def test_omitted_bounds_preserved(self):
        scenario = load_scenario(BASE_CASE_PATH)
        downtime = scenario.inputs["Cost_DowntimePerDay"]
        assert downtime.min is None and downtime.max is None
        assert downtime.mode == 50_000

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_scenario(path) == Scenario()

    def test_invalid_file_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("controls:\n  mfa: 7\n")
        with pytest.raises(ValidationError):
            load_scenario(path)
