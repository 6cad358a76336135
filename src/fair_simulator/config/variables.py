"""Input variables — the FAIR factors sampled by the Monte-Carlo engine.

Each variable is a triangular distribution ``{min?, mode, max?}``.  When a
bound is omitted it is filled in at sampling time as ``mode × 0.5`` /
``mode × 1.5``.

Every known variable declares its semantic *kind* once, here, so the control
model can pick the right multiplier family without guessing from the name:

  PROBABILITY — TEF, access-chain probabilities, P_Secondary
  TIME        — detection / recovery days
  COST        — incident response, recovery, downtime cost per day

Unknown variable ids resolve to PROBABILITY.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_MIN_FACTOR = 0.5
DEFAULT_MAX_FACTOR = 1.5


class VariableKind(str, Enum):
    """Which control-multiplier family scales a variable."""

    PROBABILITY = "probability"
    TIME = "time"
    COST = "cost"


class VariableSpec(BaseModel):
    """Static description of one input variable."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    kind: VariableKind
    unit: str = ""


class TriangularInput(BaseModel):
    """Triangular distribution descriptor for one input variable.

    Bounds are optional.  Ordering ``min <= mode <= max`` is enforced for the
    bounds that are present; the sampler itself does not re-check it.
    """

    model_config = ConfigDict(frozen=True)

    min: float | None = Field(default=None, ge=0, description="Lower bound (default mode × 0.5)")
    mode: float = Field(ge=0, description="Most likely value")
    max: float | None = Field(default=None, ge=0, description="Upper bound (default mode × 1.5)")

    @model_validator(mode="after")
    def _check_order(self) -> "TriangularInput":
        if self.min is not None and self.min > self.mode:
            raise ValueError(f"min ({self.min}) must not exceed mode ({self.mode})")
        if self.max is not None and self.max < self.mode:
            raise ValueError(f"max ({self.max}) must not be below mode ({self.mode})")
        return self

    def resolved(self) -> tuple[float, float, float]:
        """(min, mode, max) with omitted bounds filled from the mode."""
        lo = self.min if self.min is not None else self.mode * DEFAULT_MIN_FACTOR
        hi = self.max if self.max is not None else self.mode * DEFAULT_MAX_FACTOR
        return lo, self.mode, hi

    def scaled(self, factor: float) -> "TriangularInput":
        """Multiply every present bound by ``factor``; omitted bounds stay omitted."""
        return TriangularInput.model_construct(
            min=self.min * factor if self.min is not None else None,
            mode=self.mode * factor,
            max=self.max * factor if self.max is not None else None,
        )


# ═══════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════

VARIABLE_REGISTRY: dict[str, VariableSpec] = {
    spec.id: spec
    for spec in (
        VariableSpec(id="TEF", label="Threat event frequency", kind=VariableKind.PROBABILITY, unit="events/yr"),
        VariableSpec(id="P_InitialAccess", label="P(initial access)", kind=VariableKind.PROBABILITY),
        VariableSpec(id="P_IFSReachable", label="P(file server reachable)", kind=VariableKind.PROBABILITY),
        VariableSpec(id="P_WriteAccess", label="P(write access)", kind=VariableKind.PROBABILITY),
        VariableSpec(id="P_Secondary", label="P(secondary loss)", kind=VariableKind.PROBABILITY),
        VariableSpec(id="T_DetectDays", label="Time to detect", kind=VariableKind.TIME, unit="days"),
        VariableSpec(id="T_RecoveryDays", label="Time to recover", kind=VariableKind.TIME, unit="days"),
        VariableSpec(id="Cost_IR", label="Incident response cost", kind=VariableKind.COST, unit="$"),
        VariableSpec(id="Cost_Recovery", label="Recovery cost", kind=VariableKind.COST, unit="$"),
        VariableSpec(id="Cost_DowntimePerDay", label="Downtime cost per day", kind=VariableKind.COST, unit="$/day"),
    )
}


def variable_kind(variable_id: str) -> VariableKind:
    """Declared kind of ``variable_id``; unregistered ids are PROBABILITY."""
    spec = VARIABLE_REGISTRY.get(variable_id)
    return spec.kind if spec is not None else VariableKind.PROBABILITY


def default_inputs() -> dict[str, TriangularInput]:
    """Baseline (pre-control) distributions for the reference scenario."""
    return {
        "TEF": TriangularInput(min=2, mode=4, max=8),
        "P_InitialAccess": TriangularInput(min=0.1, mode=0.3, max=0.5),
        "P_IFSReachable": TriangularInput(min=0.3, mode=0.5, max=0.7),
        "P_WriteAccess": TriangularInput(min=0.2, mode=0.4, max=0.6),
        "P_Secondary": TriangularInput(min=0.1, mode=0.3, max=0.6),
        "T_DetectDays": TriangularInput(min=3, mode=10, max=30),
        "T_RecoveryDays": TriangularInput(min=2, mode=5, max=14),
        "Cost_IR": TriangularInput(min=75_000, mode=150_000, max=400_000),
        "Cost_Recovery": TriangularInput(min=100_000, mode=300_000, max=900_000),
        "Cost_DowntimePerDay": TriangularInput(min=20_000, mode=50_000, max=120_000),
    }
