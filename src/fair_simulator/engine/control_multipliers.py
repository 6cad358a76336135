"""Control maturity → variable multiplier.

  multiplier = max(0.05, 1 − (maturity / 5) × strength)

Strength depends on the variable family: probability 0.85, time 0.8,
cost 0.7.  Maturity 0 gives 1.0; the 0.05 floor keeps a variable from being
zeroed out entirely.
"""

from __future__ import annotations

from fair_simulator.config.controls import MATURITY_MAX
from fair_simulator.config.variables import VariableKind


PROBABILITY_STRENGTH = 0.85
TIME_STRENGTH = 0.8
COST_STRENGTH = 0.7
MULTIPLIER_FLOOR = 0.05


def _multiplier(maturity: float, strength: float) -> float:
    return max(MULTIPLIER_FLOOR, 1 - (maturity / MATURITY_MAX) * strength)


def probability_multiplier(maturity: float) -> float:
    """Multiplier for frequency / probability variables."""
    return _multiplier(maturity, PROBABILITY_STRENGTH)


def time_multiplier(maturity: float) -> float:
    """Multiplier for detection / recovery days."""
    return _multiplier(maturity, TIME_STRENGTH)


def cost_multiplier(maturity: float) -> float:
    """Multiplier for cost variables."""
    return _multiplier(maturity, COST_STRENGTH)


_BY_KIND = {
    VariableKind.PROBABILITY: probability_multiplier,
    VariableKind.TIME: time_multiplier,
    VariableKind.COST: cost_multiplier,
}


def multiplier_for_kind(kind: VariableKind, maturity: float) -> float:
    """Dispatch to the multiplier family declared for a variable."""
    return _BY_KIND[kind](maturity)
