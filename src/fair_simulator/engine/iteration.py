"""One Monte-Carlo trial — a simulated year of losses.

Causal chain:
  λ = TEF × P_InitialAccess × P_IFSReachable × P_WriteAccess
  events ~ Poisson(λ)
  per event:
    primary   = Cost_IR + Cost_Recovery + (T_DetectDays + T_RecoveryDays) × Cost_DowntimePerDay
    secondary = Bernoulli(P_Secondary) × (legal + notification + churn)
  gross = Σ (primary + secondary)
  net   = net_loss(gross, deductible, coverage_limit)

A variable missing from the inputs samples as 0.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple

import numpy as np

from fair_simulator.config.variables import TriangularInput
from fair_simulator.engine.distributions import sample_bernoulli, sample_poisson, sample_triangular
from fair_simulator.engine.insurance import net_loss


COST_LEGAL = 200_000.0
COST_NOTIFICATION = 150_000.0
COST_CHURN = 400_000.0
SECONDARY_COST = COST_LEGAL + COST_NOTIFICATION + COST_CHURN


class IterationOutcome(NamedTuple):
    gross: float
    net: float


def sample_variable(
    effective: Mapping[str, TriangularInput],
    key: str,
    rng: np.random.Generator,
) -> float:
    """Triangular draw for ``key``; 0 when the variable is absent."""
    value = effective.get(key)
    if value is None:
        return 0.0
    lo, mode, hi = value.resolved()
    return sample_triangular(lo, mode, hi, rng)


def run_one_iteration(
    effective: Mapping[str, TriangularInput],
    deductible: float,
    coverage_limit: float,
    rng: np.random.Generator,
) -> IterationOutcome:
    """Run one trial and return its gross and net annual loss."""
    tef = sample_variable(effective, "TEF", rng)
    p_access = sample_variable(effective, "P_InitialAccess", rng)
    p_reachable = sample_variable(effective, "P_IFSReachable", rng)
    p_write = sample_variable(effective, "P_WriteAccess", rng)

    lam = tef * p_access * p_reachable * p_write
    event_count = sample_poisson(lam, rng)

    gross = 0.0
    for _ in range(event_count):
        ir = sample_variable(effective, "Cost_IR", rng)
        recovery = sample_variable(effective, "Cost_Recovery", rng)
        detect_days = sample_variable(effective, "T_DetectDays", rng)
        recover_days = sample_variable(effective, "T_RecoveryDays", rng)
        cost_per_day = sample_variable(effective, "Cost_DowntimePerDay", rng)

        downtime = (detect_days + recover_days) * cost_per_day
        primary = ir + recovery + downtime

        p_secondary = sample_variable(effective, "P_Secondary", rng)
        secondary = sample_bernoulli(p_secondary, rng) * SECONDARY_COST

        gross += primary + secondary

    return IterationOutcome(gross=gross, net=net_loss(gross, deductible, coverage_limit))
