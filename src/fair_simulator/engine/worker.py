"""Background worker — runs one simulation in an isolated process.

The worker shares no memory with the caller: it receives a plain-dict
payload, builds its own random generator, and answers with exactly one
message on the pipe:

  ("ok", <SimulationResults as dict>)   on success
  ("error", <formatted traceback>)      on failure
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any

from fair_simulator.config.variables import TriangularInput
from fair_simulator.engine.distributions import make_rng
from fair_simulator.engine.simulation import run_simulation


def build_payload(
    effective: Mapping[str, TriangularInput],
    deductible: float,
    coverage_limit: float,
    iteration_count: int,
    run_sensitivity: bool,
    loss_sample_cap: int,
    seed: int | None = None,
) -> dict[str, Any]:
    """Serialise one run request into a picklable message."""
    return {
        "effective": {k: v.model_dump() for k, v in effective.items()},
        "deductible": deductible,
        "coverage_limit": coverage_limit,
        "iteration_count": iteration_count,
        "run_sensitivity": run_sensitivity,
        "loss_sample_cap": loss_sample_cap,
        "seed": seed,
    }


def run_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Execute a payload in-process and return the result dict."""
    effective = {
        k: TriangularInput.model_construct(**v) for k, v in payload["effective"].items()
    }
    results = run_simulation(
        effective,
        payload["deductible"],
        payload["coverage_limit"],
        payload["iteration_count"],
        run_sensitivity=payload["run_sensitivity"],
        rng=make_rng(payload.get("seed")),
        loss_sample_cap=payload["loss_sample_cap"],
    )
    return results.model_dump()


def worker_main(conn, payload: Mapping[str, Any]) -> None:
    """Process target: run the payload and post a single reply."""
    try:
        reply = ("ok", run_payload(payload))
    except Exception:
        reply = ("error", traceback.format_exc())
    try:
        conn.send(reply)
    finally:
        conn.close()
