"""Sensitivity / tornado analysis of the control-investment NPV.

One-at-a-time sweeps around the base case, measured on the NPV of the
control (benefit = gross P90 − net P90):

  - Loss severity     gross & net P90 × 0.9 / × 1.1
  - Frequency         NPV scaled proportionally by 0.9 / 1.1
  - Insurance limit   net P90 × 1.2 (less cover) / × 0.8 (more cover)
  - WACC              base / +100 bps  (also reports the DCF equity-value delta)

Bars are sorted by swing width, largest first.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fair_simulator.finance.capital_budgeting import npv
from fair_simulator.finance.dcf import build_projected_fcf, dcf_from_cash_flows


WACC_SHOCK = 0.01


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    driver: str
    """Human-readable driver name."""

    npv_at_low: float
    npv_base: float
    npv_at_high: float

    delta_npv: float
    """abs(npv_at_high − npv_at_low) — total swing width."""

    equity_value_delta: float | None = None
    """DCF equity value lost under the shock (WACC only)."""


@dataclass
class SensitivityResult:
    """Complete tornado output."""

    base_npv: float
    bars: list[TornadoBar] = field(default_factory=list)


def _bar(driver: str, low: float, base: float, high: float, equity_delta: float | None = None) -> TornadoBar:
    return TornadoBar(
        driver=driver,
        npv_at_low=round(low, 4),
        npv_base=round(base, 4),
        npv_at_high=round(high, 4),
        delta_npv=round(abs(high - low), 4),
        equity_value_delta=round(equity_delta, 4) if equity_delta is not None else None,
    )


def run_finance_tornado(
    gross_p90: float,
    net_p90: float,
    control_cost: float,
    wacc: float,
    years: int = 3,
    revenue: float | None = None,
    ebitda_margin_percent: float | None = None,
    terminal_growth: float = 0.025,
) -> SensitivityResult:
    """Sweep the FAIR and FMVA drivers of the control NPV.

    ``revenue`` / ``ebitda_margin_percent`` (same units as the losses) enable
    the DCF equity-value delta on the WACC bar.
    """
    base_benefit = gross_p90 - net_p90
    base_npv = npv(control_cost, base_benefit, years, wacc)

    severity_low = npv(control_cost, (gross_p90 - net_p90) * 0.9, years, wacc)
    severity_high = npv(control_cost, (gross_p90 - net_p90) * 1.1, years, wacc)

    freq_low = base_npv * 0.9
    freq_high = base_npv * 1.1

    insurance_low = npv(control_cost, gross_p90 - net_p90 * 1.2, years, wacc)
    insurance_high = npv(control_cost, gross_p90 - net_p90 * 0.8, years, wacc)

    wacc_high = npv(control_cost, base_benefit, years, wacc + WACC_SHOCK)
    equity_delta = None
    if revenue is not None and ebitda_margin_percent is not None:
        fcf = build_projected_fcf(revenue, ebitda_margin_percent)
        equity_base = dcf_from_cash_flows(fcf, terminal_growth, wacc).equity_value
        equity_shocked = dcf_from_cash_flows(fcf, terminal_growth, wacc + WACC_SHOCK).equity_value
        equity_delta = equity_base - equity_shocked

    bars = [
        _bar("Loss Severity", severity_low, base_npv, severity_high),
        _bar("Frequency", freq_low, base_npv, freq_high),
        _bar("Insurance Limit", insurance_low, base_npv, insurance_high),
        _bar("WACC", base_npv, base_npv, wacc_high, equity_delta),
    ]
    bars.sort(key=lambda b: b.delta_npv, reverse=True)

    return SensitivityResult(base_npv=round(base_npv, 4), bars=bars)
