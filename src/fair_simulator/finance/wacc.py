"""WACC — CAPM build-up with Hamada re-levering.

  D/E              = debt_weight / equity_weight
  levered β        = unlevered β × (1 + (1 − tax) × D/E)
  cost of equity   = risk_free + levered β × equity_risk_premium
  after-tax Kd     = cost_of_debt × (1 − tax)
  WACC             = Ke × E + Kd_after_tax × D
"""

from __future__ import annotations

from fair_simulator.config.finance import FinanceConfig
from fair_simulator.models.results import WaccResult


def compute_wacc(cfg: FinanceConfig) -> WaccResult:
    """Weighted average cost of capital and its delta vs the baseline (bps)."""
    debt_to_equity = cfg.debt_weight / cfg.equity_weight
    levered_beta = cfg.unlevered_beta * (1 + (1 - cfg.tax_rate) * debt_to_equity)
    cost_of_equity = cfg.risk_free_rate + levered_beta * cfg.equity_risk_premium
    after_tax_kd = cfg.cost_of_debt * (1 - cfg.tax_rate)
    wacc = cost_of_equity * cfg.equity_weight + after_tax_kd * cfg.debt_weight

    return WaccResult(
        debt_to_equity=debt_to_equity,
        levered_beta=levered_beta,
        cost_of_equity=cost_of_equity,
        after_tax_cost_of_debt=after_tax_kd,
        wacc=wacc,
        change_vs_baseline_bps=(wacc - cfg.baseline_wacc) * 10_000,
    )
