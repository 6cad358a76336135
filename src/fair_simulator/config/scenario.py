"""Top-level scenario — bundles inputs, controls, insurance and finance."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from fair_simulator.config.company import CompanyProfile
from fair_simulator.config.controls import ControlDefinition, ControlMaturity, default_control_definitions
from fair_simulator.config.finance import FinanceConfig
from fair_simulator.config.insurance import Archetype
from fair_simulator.config.variables import TriangularInput, default_inputs


ITERATION_PRESETS: tuple[int, ...] = (2_000, 10_000, 25_000, 50_000)
MAX_ITERATIONS = 50_000


class SimulationConfig(BaseModel):
    """Run-level settings for one Monte-Carlo simulation."""

    iteration_count: int = Field(
        default=2_000, ge=1, le=MAX_ITERATIONS,
        description="Number of independent trials. Presets: 2,000 (live preview), "
                    "10,000 / 25,000 / 50,000 (refine).",
    )
    run_sensitivity: bool = Field(
        default=False,
        description="Run the one-at-a-time sensitivity sweep (needs ≥ 1,000 iterations).",
    )
    random_seed: int | None = Field(
        default=None,
        description="Optional RNG seed for reproducible runs. None = non-deterministic.",
    )
    loss_sample_cap: int = Field(
        default=1_000, ge=0,
        description="Max sorted net losses returned for charting.",
    )


class SchedulerConfig(BaseModel):
    """Where and when simulation work runs."""

    sync_max_iterations: int = Field(
        default=3_000, ge=1,
        description="Runs at or below this size execute on the calling thread.",
    )
    sensitivity_min_iterations: int = Field(
        default=10_000, ge=1,
        description="Background runs at or above this size always include the sensitivity sweep.",
    )
    raw_input_min_iterations: int = Field(
        default=5_000, ge=1,
        description="Runs at or above this size read the latest raw inputs, not the debounced ones.",
    )
    debounce_seconds: float = Field(default=0.5, ge=0, description="Quiet period before a live recompute")
    live_iterations: int = Field(default=2_000, ge=1, description="Iteration count of debounced live runs")
    fallback_max_iterations: int = Field(
        default=5_000, ge=1,
        description="Iteration cap for the synchronous run after a worker failure.",
    )
    light_loss_sample_cap: int = Field(default=1_000, ge=0)
    heavy_loss_sample_cap: int = Field(default=5_000, ge=0)
    start_method: str = Field(default="spawn", description="multiprocessing start method for workers")


class Scenario(BaseModel):
    """Complete input bundle for one simulation run."""

    inputs: dict[str, TriangularInput] = Field(default_factory=default_inputs)
    controls: dict[str, ControlMaturity] = Field(
        default_factory=dict,
        description="Control maturity per control id (0–5). Missing ids count as 0.",
    )
    control_defs: list[ControlDefinition] = Field(default_factory=default_control_definitions)
    archetype: Archetype | None = None
    company: CompanyProfile = Field(default_factory=CompanyProfile)
    finance: FinanceConfig = Field(default_factory=FinanceConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)


def load_scenario(path: str | Path) -> Scenario:
    """Load a Scenario from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return Scenario(**data)
