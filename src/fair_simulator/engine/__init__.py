"""Engine — stochastic FAIR loss quantification."""

from fair_simulator.engine.distributions import (
    make_rng,
    sample_bernoulli,
    sample_poisson,
    sample_triangular,
)
from fair_simulator.engine.insurance import net_loss
from fair_simulator.engine.control_multipliers import (
    cost_multiplier,
    multiplier_for_kind,
    probability_multiplier,
    time_multiplier,
)
from fair_simulator.engine.effective_inputs import aggregate_multiplier, get_effective_inputs
from fair_simulator.engine.iteration import IterationOutcome, run_one_iteration
from fair_simulator.engine.simulation import percentile, run_scenario, run_simulation
from fair_simulator.engine.scheduler import Debouncer, SimulationScheduler

__all__ = [
    "make_rng",
    "sample_triangular",
    "sample_poisson",
    "sample_bernoulli",
    "net_loss",
    "probability_multiplier",
    "time_multiplier",
    "cost_multiplier",
    "multiplier_for_kind",
    "aggregate_multiplier",
    "get_effective_inputs",
    "IterationOutcome",
    "run_one_iteration",
    "percentile",
    "run_simulation",
    "run_scenario",
    # Scheduling
    "Debouncer",
    "SimulationScheduler",
]
