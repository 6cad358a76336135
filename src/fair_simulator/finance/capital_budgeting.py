"""Capital budgeting for a security control.

The control is a project: cost paid at t = 0, benefit = annual risk
reduction (gross P90 − net P90) received for ``years`` years.

  NPV     = −cost + Σ benefit / (1 + r)^t
  IRR     = r where NPV = 0 (bisection on [0, 2])
  Payback = cost / benefit
  PI      = PV(benefits) / cost
"""

from __future__ import annotations

from fair_simulator.models.results import CapitalBudgetingResult


IRR_LOW = 0.0
IRR_HIGH = 2.0
IRR_STEPS = 50


def _pv_annuity(annual_benefit: float, years: int, rate: float) -> float:
    return sum(annual_benefit / (1 + rate) ** t for t in range(1, years + 1))


def npv(control_cost: float, annual_benefit: float, years: int = 3, discount_rate: float = 0.092) -> float:
    """Net present value of the control investment."""
    return -control_cost + _pv_annuity(annual_benefit, years, discount_rate)


def irr(control_cost: float, annual_benefit: float, years: int = 3) -> float:
    """Internal rate of return by bisection.

    Returns 0 when there is no benefit, no cost, or the undiscounted benefit
    never recovers the cost.  Rates above 200% are reported as ~2.0.
    """
    if annual_benefit <= 0 or control_cost <= 0:
        return 0.0
    if annual_benefit * years <= control_cost:
        return 0.0

    low, high = IRR_LOW, IRR_HIGH
    for _ in range(IRR_STEPS):
        mid = (low + high) / 2
        if _pv_annuity(annual_benefit, years, mid) >= control_cost:
            low = mid
        else:
            high = mid
    return (low + high) / 2


def payback_years(control_cost: float, annual_benefit: float) -> float:
    """Simple payback; 0 when there is no benefit."""
    if annual_benefit <= 0:
        return 0.0
    return control_cost / annual_benefit


def profitability_index(
    control_cost: float, annual_benefit: float, years: int = 3, discount_rate: float = 0.092,
) -> float:
    """PV(benefits) / cost; 0 when the control is free."""
    if control_cost <= 0:
        return 0.0
    return _pv_annuity(annual_benefit, years, discount_rate) / control_cost


def evaluate_control_investment(
    gross_p90: float,
    net_p90: float,
    control_cost: float,
    discount_rate: float,
    years: int = 3,
) -> CapitalBudgetingResult:
    """Full capital-budgeting view of a control funded by risk reduction."""
    benefit = gross_p90 - net_p90
    return CapitalBudgetingResult(
        control_cost=control_cost,
        annual_benefit=benefit,
        discount_rate=discount_rate,
        years=years,
        npv=npv(control_cost, benefit, years, discount_rate),
        irr=irr(control_cost, benefit, years),
        payback_years=payback_years(control_cost, benefit),
        profitability_index=profitability_index(control_cost, benefit, years, discount_rate),
    )
