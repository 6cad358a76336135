"""Financial overlay — downstream FMVA views of one simulation.

The engine reports losses in dollars; company financials are in millions,
so gross / net P90 are converted before they reach the formulas.
"""

from __future__ import annotations

from fair_simulator.config.scenario import Scenario
from fair_simulator.finance.capital_budgeting import evaluate_control_investment
from fair_simulator.finance.dcf import build_projected_fcf, dcf_from_cash_flows
from fair_simulator.finance.dscr import compute_dscr_stress
from fair_simulator.finance.wacc import compute_wacc
from fair_simulator.models.results import FinancialOverlay, SimulationResults


MILLION = 1_000_000.0


def control_cost_millions(scenario: Scenario) -> float:
    """Total control spend over the benefit horizon, with a floor."""
    fin = scenario.finance
    spend = scenario.company.annual_revenue_millions * fin.control_cost_pct_of_revenue * fin.horizon_years
    return max(fin.min_control_cost_millions, spend)


def build_financial_overlay(results: SimulationResults, scenario: Scenario) -> FinancialOverlay:
    """DSCR stress, WACC, DCF and control NPV for one simulation result."""
    fin = scenario.finance
    company = scenario.company
    gross_p90 = results.gross_p90 / MILLION
    net_p90 = results.net_p90 / MILLION

    wacc = compute_wacc(fin)
    fcf = build_projected_fcf(company.annual_revenue_millions, company.ebitda_margin_percent)

    return FinancialOverlay(
        dscr=compute_dscr_stress(company, fin, net_p90),
        wacc=wacc,
        dcf=dcf_from_cash_flows(fcf, fin.terminal_growth_rate, wacc.wacc),
        capital_budgeting=evaluate_control_investment(
            gross_p90, net_p90, control_cost_millions(scenario), wacc.wacc, fin.horizon_years,
        ),
    )
