"""Configuration models — all scenario input types."""

from fair_simulator.config.variables import (
    TriangularInput,
    VariableKind,
    VariableSpec,
    VARIABLE_REGISTRY,
    variable_kind,
)
from fair_simulator.config.controls import ControlDefinition, ControlMaturity
from fair_simulator.config.insurance import Archetype, InsurancePolicy, ModeledInsurance, resolve_policy
from fair_simulator.config.company import CompanyProfile, LossProfile
from fair_simulator.config.finance import FinanceConfig
from fair_simulator.config.scenario import (
    ITERATION_PRESETS,
    Scenario,
    SchedulerConfig,
    SimulationConfig,
    load_scenario,
)

__all__ = [
    "TriangularInput",
    "VariableKind",
    "VariableSpec",
    "VARIABLE_REGISTRY",
    "variable_kind",
    "ControlDefinition",
    "ControlMaturity",
    "Archetype",
    "InsurancePolicy",
    "ModeledInsurance",
    "resolve_policy",
    "CompanyProfile",
    "LossProfile",
    "FinanceConfig",
    "ITERATION_PRESETS",
    "SimulationConfig",
    "SchedulerConfig",
    "Scenario",
    "load_scenario",
]
