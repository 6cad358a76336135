"""Simulation driver — N trials → percentile summary + top risk driver.

Each run:
  1. Executes ``iteration_count`` independent trials (``run_one_iteration``)
  2. Sorts gross and net losses ascending
  3. Computes mean / median / P50 / P90 / P95 of net, plus gross P90
  4. Optionally runs the one-at-a-time sensitivity sweep

Sensitivity sweep (``run_sensitivity`` and N ≥ 1,000):
  For each candidate variable, scale its effective distribution by 1.1,
  rerun min(2,000, N) trials and compare net P90 against the baseline.
  The variable with the largest strictly-positive increase wins; ties go to
  the earlier candidate.  If nothing increases P90, the first candidate is
  reported.  This is a cheap local approximation, not a variance-based
  (Sobol) decomposition.

Below the sweep threshold ``top_driver`` is the fixed default label.

Entry points:
  - ``run_simulation(effective, deductible, coverage_limit, iteration_count, ...)``
  - ``run_scenario(scenario)`` — resolves controls + insurance first
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np

from fair_simulator.config.insurance import resolve_policy
from fair_simulator.config.scenario import Scenario
from fair_simulator.config.variables import TriangularInput
from fair_simulator.engine.distributions import make_rng
from fair_simulator.engine.effective_inputs import get_effective_inputs
from fair_simulator.engine.iteration import run_one_iteration
from fair_simulator.models.results import SimulationResults


SENSITIVITY_CANDIDATES: tuple[str, ...] = (
    "P_IFSReachable",
    "P_WriteAccess",
    "T_DetectDays",
    "P_Secondary",
    "TEF",
)
DEFAULT_TOP_DRIVER = "P_WriteAccess"
SENSITIVITY_MIN_ITERATIONS = 1_000
SENSITIVITY_MAX_TRIALS = 2_000
PERTURBATION_FACTOR = 1.1


# ═══════════════════════════════════════════════════════════════════════════
# Statistics
# ═══════════════════════════════════════════════════════════════════════════

def percentile(sorted_values: Sequence[float] | np.ndarray, p: float) -> float:
    """Linear-interpolated percentile of an ascending array (``p`` in 0–1).

    i = p × (n − 1); interpolate between floor(i) and ceil(i).
    Returns 0 for an empty array.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    i = p * (n - 1)
    lo = int(np.floor(i))
    hi = int(np.ceil(i))
    if lo == hi:
        return float(sorted_values[lo])
    frac = i - lo
    return float(sorted_values[lo] * (1 - frac) + sorted_values[hi] * frac)


# ═══════════════════════════════════════════════════════════════════════════
# Trial loop
# ═══════════════════════════════════════════════════════════════════════════

def run_trials(
    effective: Mapping[str, TriangularInput],
    deductible: float,
    coverage_limit: float,
    iteration_count: int,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Run N trials; return (gross, net) sorted ascending."""
    gross = np.empty(iteration_count, dtype=float)
    net = np.empty(iteration_count, dtype=float)
    for i in range(iteration_count):
        outcome = run_one_iteration(effective, deductible, coverage_limit, rng)
        gross[i] = outcome.gross
        net[i] = outcome.net
    return np.sort(gross), np.sort(net)


def perturb_inputs(
    effective: Mapping[str, TriangularInput],
    variable_id: str,
    factor: float = PERTURBATION_FACTOR,
) -> dict[str, TriangularInput]:
    """Copy of ``effective`` with one variable scaled by ``factor``."""
    perturbed = dict(effective)
    value = perturbed.get(variable_id)
    if value is not None:
        perturbed[variable_id] = value.scaled(factor)
    return perturbed


# ═══════════════════════════════════════════════════════════════════════════
# Sensitivity sweep
# ═══════════════════════════════════════════════════════════════════════════

def find_top_driver(
    effective: Mapping[str, TriangularInput],
    deductible: float,
    coverage_limit: float,
    iteration_count: int,
    baseline_p90: float,
    rng: np.random.Generator,
    candidates: Sequence[str] = SENSITIVITY_CANDIDATES,
) -> str:
    """Candidate whose +10% perturbation raises net P90 the most."""
    trials = min(SENSITIVITY_MAX_TRIALS, iteration_count)
    top_driver: str | None = None
    max_delta = 0.0

    for var_id in candidates:
        perturbed = perturb_inputs(effective, var_id)
        _, nets = run_trials(perturbed, deductible, coverage_limit, trials, rng)
        delta = percentile(nets, 0.9) - baseline_p90
        if delta > max_delta:
            max_delta = delta
            top_driver = var_id

    return top_driver if top_driver is not None else candidates[0]


# ═══════════════════════════════════════════════════════════════════════════
# Public entry points
# ═══════════════════════════════════════════════════════════════════════════

def run_simulation(
    effective: Mapping[str, TriangularInput],
    deductible: float,
    coverage_limit: float,
    iteration_count: int,
    run_sensitivity: bool = False,
    rng: np.random.Generator | None = None,
    loss_sample_cap: int = 1_000,
) -> SimulationResults:
    """Run the Monte-Carlo simulation and summarise it.

    Parameters
    ----------
    effective : Mapping[str, TriangularInput]
        Post-control input distributions.
    deductible, coverage_limit : float
        Insurance terms applied to every trial.
    iteration_count : int
        Number of independent trials.
    run_sensitivity : bool
        Compute ``top_driver`` by perturbation (only when N ≥ 1,000).
    rng : np.random.Generator | None
        Random source. None = fresh unseeded generator.
    loss_sample_cap : int
        Length of the sorted-net prefix returned in ``loss_samples``.

    Returns
    -------
    SimulationResults
        Fresh, immutable summary of this run.
    """
    if rng is None:
        rng = make_rng()

    grosses, nets = run_trials(effective, deductible, coverage_limit, iteration_count, rng)

    mean = float(nets.mean()) if nets.size else 0.0
    p50 = percentile(nets, 0.5)
    p90 = percentile(nets, 0.9)

    if run_sensitivity and iteration_count >= SENSITIVITY_MIN_ITERATIONS:
        top_driver = find_top_driver(
            effective, deductible, coverage_limit, iteration_count, p90, rng,
        )
    else:
        top_driver = DEFAULT_TOP_DRIVER

    return SimulationResults(
        mean=mean,
        median=p50,
        p50=p50,
        p90=p90,
        p95=percentile(nets, 0.95),
        gross_p90=percentile(grosses, 0.9),
        net_p90=p90,
        top_driver=top_driver,
        iteration_count=iteration_count,
        loss_samples=nets[:loss_sample_cap].tolist(),
    )


def run_scenario(scenario: Scenario, rng: np.random.Generator | None = None) -> SimulationResults:
    """Resolve controls and insurance for ``scenario`` and run it synchronously."""
    sim = scenario.simulation
    if rng is None:
        rng = make_rng(sim.random_seed)

    effective = get_effective_inputs(scenario.inputs, scenario.controls, scenario.control_defs)
    policy = resolve_policy(scenario.archetype)

    return run_simulation(
        effective,
        policy.deductible,
        policy.coverage_limit,
        sim.iteration_count,
        run_sensitivity=sim.run_sensitivity,
        rng=rng,
        loss_sample_cap=sim.loss_sample_cap,
    )
