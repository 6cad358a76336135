"""Result types — the contract between engine, finance and consumers.

``SimulationResults`` is created fresh per run and never mutated; the next
run supersedes it.  It serialises with camelCase aliases (``grossP90``,
``netP90``, ``topDriver`` ...) for dashboards and exports.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════
# Monte-Carlo output
# ═══════════════════════════════════════════════════════════════════════════

class SimulationResults(BaseModel):
    """Percentile summary of one Monte-Carlo run (net of insurance unless noted)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mean: float
    """Arithmetic mean of net annual loss."""

    median: float
    """Median net annual loss (same as p50)."""

    p50: float
    p90: float
    p95: float

    gross_p90: float = Field(alias="grossP90")
    """90th percentile of gross (pre-insurance) annual loss."""

    net_p90: float = Field(alias="netP90")
    """90th percentile of net annual loss — equal to p90, named for downstream clarity."""

    top_driver: str | None = Field(default=None, alias="topDriver")
    """Variable whose +10% perturbation raised net P90 the most."""

    iteration_count: int = Field(alias="iterationCount")

    loss_samples: list[float] | None = Field(default=None, alias="lossSamples")
    """Bounded prefix of the sorted net losses, for histograms."""


# ═══════════════════════════════════════════════════════════════════════════
# Finance overlay
# ═══════════════════════════════════════════════════════════════════════════

class DSCRStressResult(BaseModel):
    """Debt Service Coverage before and after a P90 loss event."""

    ebitda: float
    cfads_pre_event: float
    cfads_post_event: float
    debt_service: float
    dscr_pre_event: float
    dscr_post_event: float
    covenant_threshold: float
    covenant_breach: bool
    """True if post-event DSCR < covenant threshold."""


class WaccResult(BaseModel):
    """CAPM build-up of the weighted average cost of capital."""

    debt_to_equity: float
    levered_beta: float
    cost_of_equity: float
    after_tax_cost_of_debt: float
    wacc: float
    change_vs_baseline_bps: float


class DCFResult(BaseModel):
    """Enterprise / equity value from projected FCF + Gordon terminal value."""

    enterprise_value: float
    equity_value: float


class CapitalBudgetingResult(BaseModel):
    """Security control treated as a capital project.

    Benefit stream = annual risk reduction (gross P90 − net P90).
    """

    control_cost: float
    annual_benefit: float
    discount_rate: float
    years: int
    npv: float
    irr: float
    payback_years: float
    profitability_index: float


class FinancialOverlay(BaseModel):
    """All downstream finance computed from one simulation."""

    dscr: DSCRStressResult
    wacc: WaccResult
    dcf: DCFResult
    capital_budgeting: CapitalBudgetingResult
