"""DCF — enterprise value from projected free cash flow.

Key formulas:
  PV(FCF)   = Σ FCF_t / (1 + r)^t,  t = 1..n
  TV        = FCF_n × (1 + g) / (r − g)
  EV        = PV(FCF) + TV / (1 + r)^n

No net debt adjustment is modeled, so equity value = enterprise value.
"""

from __future__ import annotations

from fair_simulator.models.results import DCFResult


FCF_CONVERSION = 0.7
REVENUE_GROWTH_PATH: tuple[float, ...] = (1.0, 1.05, 1.10, 1.15)


def dcf_from_cash_flows(
    cash_flows: list[float],
    terminal_growth: float,
    discount_rate: float,
) -> DCFResult:
    """Value a series of annual cash flows plus a Gordon-growth terminal value.

    Returns zero values when there are no cash flows or when
    ``discount_rate <= terminal_growth`` (the perpetuity is undefined).
    """
    if not cash_flows or discount_rate <= terminal_growth:
        return DCFResult(enterprise_value=0.0, equity_value=0.0)

    pv = 0.0
    for t, cf in enumerate(cash_flows, start=1):
        pv += cf / (1 + discount_rate) ** t

    n = len(cash_flows)
    terminal_value = cash_flows[-1] * (1 + terminal_growth) / (discount_rate - terminal_growth)
    enterprise_value = pv + terminal_value / (1 + discount_rate) ** n
    return DCFResult(enterprise_value=enterprise_value, equity_value=enterprise_value)


def build_projected_fcf(revenue: float, ebitda_margin_percent: float) -> list[float]:
    """Four-year FCF projection: revenue growth path × EBITDA margin × 70% conversion."""
    margin = ebitda_margin_percent / 100
    return [revenue * g * margin * FCF_CONVERSION for g in REVENUE_GROWTH_PATH]
