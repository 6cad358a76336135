"""Effective (post-control) inputs.

For each variable, every control that lists it contributes one multiplier,
chosen by the variable's declared kind and the control's current maturity
(absent → 0).  Contributions multiply; the product scales min, mode and max
alike.  Omitted bounds stay omitted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from fair_simulator.config.controls import ControlDefinition
from fair_simulator.config.variables import TriangularInput, variable_kind
from fair_simulator.engine.control_multipliers import multiplier_for_kind


def aggregate_multiplier(
    variable_id: str,
    controls: Mapping[str, int],
    control_defs: Sequence[ControlDefinition],
) -> float:
    """Product of all control multipliers acting on ``variable_id``."""
    kind = variable_kind(variable_id)
    product = 1.0
    for control in control_defs:
        if variable_id not in control.variable_ids:
            continue
        product *= multiplier_for_kind(kind, controls.get(control.id, 0))
    return product


def get_effective_inputs(
    inputs: Mapping[str, TriangularInput],
    controls: Mapping[str, int],
    control_defs: Sequence[ControlDefinition],
) -> dict[str, TriangularInput]:
    """Apply control maturity to baseline inputs.  Pure; safe to call on every change."""
    return {
        var_id: value.scaled(aggregate_multiplier(var_id, controls, control_defs))
        for var_id, value in inputs.items()
    }
