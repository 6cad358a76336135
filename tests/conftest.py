"""Shared test fixtures — sample configs matching base_case.yaml."""

from __future__ import annotations

from pathlib import Path

import pytest

from fair_simulator.config import (
    ControlDefinition,
    Scenario,
    SimulationConfig,
    TriangularInput,
)
from fair_simulator.config.variables import default_inputs


BASE_CASE_PATH = Path(__file__).parent.parent / "scenarios" / "base_case.yaml"


class ConstantUniform:
    """Stand-in random source that always draws the same uniform."""

    def __init__(self, u: float):
        self.u = u
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.u


@pytest.fixture
def inputs() -> dict[str, TriangularInput]:
    return default_inputs()


@pytest.fixture
def control_defs() -> list[ControlDefinition]:
    return [
        ControlDefinition(id="mfa", group="Identity", label="MFA", variable_ids=["P_InitialAccess"]),
        ControlDefinition(id="edr", group="Detect", label="EDR", variable_ids=["T_DetectDays", "P_WriteAccess"]),
        ControlDefinition(id="pam", group="Identity", label="PAM", variable_ids=["P_WriteAccess"]),
        ControlDefinition(id="backups", group="Recover", label="Backups", variable_ids=["Cost_Recovery"]),
    ]


@pytest.fixture
def point_inputs() -> dict[str, TriangularInput]:
    """Zero-width distributions: every draw returns the mode exactly."""

    def point(v: float) -> TriangularInput:
        return TriangularInput(min=v, mode=v, max=v)

    return {
        "TEF": point(1.0),
        "P_InitialAccess": point(1.0),
        "P_IFSReachable": point(1.0),
        "P_WriteAccess": point(1.0),
        "P_Secondary": point(1.0),
        "Cost_IR": point(100_000),
        "Cost_Recovery": point(200_000),
        "T_DetectDays": point(2),
        "T_RecoveryDays": point(3),
        "Cost_DowntimePerDay": point(10_000),
    }


@pytest.fixture
def scenario() -> Scenario:
    return Scenario(simulation=SimulationConfig(iteration_count=2_000, random_seed=42))
