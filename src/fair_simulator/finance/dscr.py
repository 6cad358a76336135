"""Debt service & DSCR — credit impact of a P90 loss event.

Key formulas:
  debt_service = debt × rate + debt / amort_term_years   (interest-only if term ≤ 0)
  CFADS        = EBITDA − cash_taxes − capex + other_adjustments
  DSCR         = CFADS / debt_service                    (0 if no debt service)

The post-event view deducts the engine's net P90 from EBITDA (floored at 0)
and flags a covenant breach when post-event DSCR drops below the threshold.
"""

from __future__ import annotations

from fair_simulator.config.company import CompanyProfile
from fair_simulator.config.finance import FinanceConfig
from fair_simulator.models.results import DSCRStressResult


def debt_service(total_debt: float, interest_rate: float, amort_term_years: float) -> float:
    """Annual interest plus straight-line principal."""
    if amort_term_years <= 0:
        return total_debt * interest_rate
    return total_debt * interest_rate + total_debt / amort_term_years


def cfads(ebitda: float, cash_taxes: float, capex: float, other_adjustments: float) -> float:
    """Cash flow available for debt service."""
    return ebitda - cash_taxes - capex + other_adjustments


def dscr(cfads_value: float, total_debt: float, interest_rate: float, amort_term_years: float) -> float:
    """CFADS / debt service; 0 when there is no debt service."""
    ds = debt_service(total_debt, interest_rate, amort_term_years)
    return cfads_value / ds if ds > 0 else 0.0


def compute_dscr_stress(
    company: CompanyProfile,
    finance_cfg: FinanceConfig,
    net_p90_millions: float,
) -> DSCRStressResult:
    """DSCR before and after absorbing a net-P90 loss (all figures in $M).

    Cash taxes and capex are held at their pre-event level so the loss
    flows straight through to CFADS.
    """
    ebitda = company.ebitda_millions
    cash_taxes = ebitda * finance_cfg.cash_tax_rate
    capex = company.annual_revenue_millions * finance_cfg.capex_pct_of_revenue
    other = finance_cfg.other_adjustments_millions

    ds = debt_service(
        finance_cfg.total_debt_millions, finance_cfg.interest_rate, finance_cfg.amort_term_years,
    )
    cfads_pre = cfads(ebitda, cash_taxes, capex, other)
    cfads_post = cfads(max(0.0, ebitda - net_p90_millions), cash_taxes, capex, other)

    dscr_pre = cfads_pre / ds if ds > 0 else 0.0
    dscr_post = cfads_post / ds if ds > 0 else 0.0

    return DSCRStressResult(
        ebitda=round(ebitda, 4),
        cfads_pre_event=round(cfads_pre, 4),
        cfads_post_event=round(cfads_post, 4),
        debt_service=round(ds, 4),
        dscr_pre_event=round(dscr_pre, 4),
        dscr_post_event=round(dscr_post, 4),
        covenant_threshold=finance_cfg.dscr_covenant_threshold,
        covenant_breach=ds > 0 and dscr_post < finance_cfg.dscr_covenant_threshold,
    )
