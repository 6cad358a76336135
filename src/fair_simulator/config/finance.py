"""Financial configuration — FMVA inputs consuming the engine's loss outputs."""

from pydantic import BaseModel, Field, model_validator


class FinanceConfig(BaseModel):
    """Capital structure, credit, valuation and capital-budgeting assumptions.

    Monetary fields are in millions to match the company profile.  All
    fields have defaults so a bare ``Scenario()`` can run the full overlay.
    """

    # --- Credit / DSCR ---
    total_debt_millions: float = Field(default=250.0, ge=0, description="Outstanding debt ($M)")
    interest_rate: float = Field(default=0.065, ge=0, le=0.50, description="Annual interest rate on debt")
    amort_term_years: float = Field(
        default=10.0, ge=0,
        description="Straight-line amortization term. 0 = interest-only.",
    )
    cash_tax_rate: float = Field(
        default=0.25, ge=0, le=0.60,
        description="Cash taxes as a fraction of EBITDA.",
    )
    capex_pct_of_revenue: float = Field(default=0.03, ge=0, le=1.0, description="Maintenance capex / revenue")
    other_adjustments_millions: float = Field(default=0.0, description="Other CFADS adjustments ($M)")
    dscr_covenant_threshold: float = Field(
        default=1.20, ge=0,
        description="Minimum DSCR for covenant compliance.",
    )

    # --- WACC (CAPM build-up) ---
    risk_free_rate: float = Field(default=0.035, ge=0, le=0.25)
    equity_risk_premium: float = Field(default=0.06, ge=0, le=0.25)
    unlevered_beta: float = Field(default=1.0, ge=0)
    cost_of_debt: float = Field(default=0.05, ge=0, le=0.50, description="Pre-tax cost of debt")
    tax_rate: float = Field(default=0.25, ge=0, le=0.60, description="Marginal corporate tax rate")
    debt_weight: float = Field(default=0.30, ge=0, le=1.0)
    equity_weight: float = Field(default=0.70, gt=0, le=1.0)
    baseline_wacc: float = Field(default=0.092, ge=0, description="Reference WACC for bps deltas")

    # --- DCF ---
    terminal_growth_rate: float = Field(default=0.025, ge=0, le=0.10)

    # --- Control investment (capital budgeting) ---
    horizon_years: int = Field(default=3, ge=1, le=30, description="Years of risk-reduction benefit")
    control_cost_pct_of_revenue: float = Field(
        default=0.002, ge=0,
        description="Annual control spend as a fraction of revenue (× horizon = total cost).",
    )
    min_control_cost_millions: float = Field(default=2.0, ge=0)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "FinanceConfig":
        if abs(self.debt_weight + self.equity_weight - 1.0) > 1e-6:
            raise ValueError("debt_weight + equity_weight must equal 1")
        return self
