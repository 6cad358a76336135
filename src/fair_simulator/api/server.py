"""FastAPI server — HTTP access to the FAIR × FMVA simulator.

Run with:
    uvicorn fair_simulator.api.server:app --reload --port 8000

Or:
    python -m fair_simulator.api.server

Endpoints:
    GET  /health              — liveness probe
    GET  /schema              — JSON Schema for Scenario inputs
    GET  /scenario/defaults   — complete default scenario as JSON
    POST /simulate            — run a Monte-Carlo simulation (+ finance overlay)
    POST /effective-inputs    — post-control distributions and multipliers
    POST /finance/tornado     — control-investment NPV tornado
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from fair_simulator.config.scenario import Scenario
from fair_simulator.engine.effective_inputs import aggregate_multiplier, get_effective_inputs
from fair_simulator.engine.simulation import run_scenario
from fair_simulator.finance.overlay import build_financial_overlay, control_cost_millions
from fair_simulator.finance.sensitivity import run_finance_tornado
from fair_simulator.finance.wacc import compute_wacc


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="FAIR × FMVA Cyber-Risk Simulator API",
    version="1.0",
    description=(
        "Monte-Carlo FAIR loss quantification with an insurance layer, control "
        "maturity modeling, and downstream FMVA metrics (DSCR, WACC, DCF, NPV)."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class SimulateRequest(BaseModel):
    """Request body for /simulate. All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full Scenario JSON. Missing fields use defaults. "
                    "Example: {'controls': {'mfa': 4}, 'simulation': {'iteration_count': 10000}}",
    )
    include_finance: bool = Field(default=True, description="Attach the DSCR/WACC/DCF/NPV overlay")


class ScenarioRequest(BaseModel):
    """Request body carrying only a partial scenario."""
    scenario: dict[str, Any] = Field(default_factory=dict)


class TornadoRequest(BaseModel):
    """Request body for /finance/tornado.

    Loss figures in $M; omitted values come from the scenario's loss profile.
    """
    scenario: dict[str, Any] = Field(default_factory=dict)
    gross_p90_millions: float | None = Field(default=None, ge=0)
    net_p90_millions: float | None = Field(default=None, ge=0)


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def get_default_scenario() -> dict[str, Any]:
    """Default Scenario as a JSON-ready dict."""
    return Scenario().model_dump(mode="json")


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _build_scenario(overrides: dict[str, Any]) -> Scenario:
    """Build a Scenario from partial overrides merged onto defaults.

    Each ``inputs.<variable>`` entry replaces the default distribution whole,
    so omitted bounds fall back to mode × 0.5 / mode × 1.5.
    """
    defaults = get_default_scenario()
    overrides = dict(overrides)
    inputs = overrides.pop("inputs", None)
    _deep_merge(defaults, overrides)
    if isinstance(inputs, dict):
        defaults["inputs"].update(inputs)
    elif inputs is not None:
        defaults["inputs"] = inputs
    try:
        return Scenario(**defaults)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/schema")
def get_schema():
    """Full JSON Schema for Scenario — all inputs with types, defaults, constraints."""
    return Scenario.model_json_schema()


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default Scenario as JSON. Use as a starting point for modifications."""
    return get_default_scenario()


@app.post("/simulate")
def simulate(req: SimulateRequest):
    """Run the Monte-Carlo simulation synchronously.

    Example minimal request:
    ```json
    {"scenario": {"controls": {"mfa": 4, "edr": 3}, "simulation": {"iteration_count": 10000, "run_sensitivity": true}}}
    ```
    """
    scenario = _build_scenario(req.scenario)
    results = run_scenario(scenario)
    response: dict[str, Any] = {"results": results.model_dump(by_alias=True)}
    if req.include_finance:
        response["finance"] = build_financial_overlay(results, scenario).model_dump()
    return response


@app.post("/effective-inputs")
def effective_inputs(req: ScenarioRequest):
    """Post-control distributions plus the aggregate multiplier per variable."""
    scenario = _build_scenario(req.scenario)
    effective = get_effective_inputs(scenario.inputs, scenario.controls, scenario.control_defs)
    return {
        var_id: {
            **value.model_dump(),
            "multiplier": aggregate_multiplier(var_id, scenario.controls, scenario.control_defs),
        }
        for var_id, value in effective.items()
    }


@app.post("/finance/tornado")
def finance_tornado(req: TornadoRequest):
    """One-at-a-time sweep of the control-investment NPV."""
    scenario = _build_scenario(req.scenario)
    profile = scenario.company.loss_profile
    gross = req.gross_p90_millions if req.gross_p90_millions is not None else profile.gross_p90_millions
    net = req.net_p90_millions if req.net_p90_millions is not None else profile.net_p90_millions

    result = run_finance_tornado(
        gross_p90=gross,
        net_p90=net,
        control_cost=control_cost_millions(scenario),
        wacc=compute_wacc(scenario.finance).wacc,
        years=scenario.finance.horizon_years,
        revenue=scenario.company.annual_revenue_millions,
        ebitda_margin_percent=scenario.company.ebitda_margin_percent,
        terminal_growth=scenario.finance.terminal_growth_rate,
    )
    return {
        "base_npv": result.base_npv,
        "tornado_bars": [
            {
                "driver": bar.driver,
                "npv_at_low": bar.npv_at_low,
                "npv_base": bar.npv_base,
                "npv_at_high": bar.npv_at_high,
                "delta_npv": bar.delta_npv,
                "equity_value_delta": bar.equity_value_delta,
            }
            for bar in result.bars
        ],
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "fair_simulator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
