"""Execution scheduler — decides *where* simulation work runs.

  N ≤ sync_max_iterations (3,000)  → synchronous on the calling thread
  N >  sync_max_iterations         → background worker process
  N ≥ sensitivity_min_iterations   → worker also runs the sensitivity sweep

Input / control updates are debounced (single-slot timer, 0.5 s) and then
trigger a 2,000-iteration live run on the debounced snapshot.  Runs of
N ≥ raw_input_min_iterations (5,000) read the latest raw state instead.

Every request gets a generation number.  Starting a new request terminates
any in-flight worker, and a completion is accepted only if its generation is
still the latest, so a superseded run can never overwrite a fresher one.

A failed worker (error reply or process death) is logged and replaced by a
synchronous run capped at fallback_max_iterations (5,000).
"""

from __future__ import annotations

import logging
import multiprocessing
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fair_simulator.config.controls import ControlDefinition
from fair_simulator.config.insurance import Archetype, InsurancePolicy, resolve_policy
from fair_simulator.config.scenario import Scenario, SchedulerConfig
from fair_simulator.config.variables import TriangularInput
from fair_simulator.engine.effective_inputs import get_effective_inputs
from fair_simulator.engine.simulation import run_simulation
from fair_simulator.engine.worker import build_payload, worker_main
from fair_simulator.models.results import SimulationResults

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Debounce
# ═══════════════════════════════════════════════════════════════════════════

class Debouncer:
    """Trailing-edge debounce with a single pending timer.

    Each ``trigger()`` replaces the pending timer, so a burst of calls fires
    ``callback`` once, ``delay`` seconds after the last one.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self._delay = delay
        self._callback = callback
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self._delay, lambda: self._fire(timer))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def _fire(self, timer: threading.Timer) -> None:
        # A replaced or cancelled timer may still reach here once expired.
        with self._lock:
            if self._timer is not timer:
                return
            self._timer = None
        self._callback()


# ═══════════════════════════════════════════════════════════════════════════
# Task handle
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class TaskHandle:
    """One in-flight background run."""

    generation: int
    iteration_count: int
    effective: dict[str, TriangularInput]
    policy: InsurancePolicy
    process: Any
    conn: Any
    watcher: threading.Thread | None = field(default=None, repr=False)


# ═══════════════════════════════════════════════════════════════════════════
# Scheduler
# ═══════════════════════════════════════════════════════════════════════════

class SimulationScheduler:
    """Owns the lifecycle of simulation runs for one interactive session.

    Usage::

        scheduler = SimulationScheduler(Scenario(), on_result=print)
        scheduler.set_controls({"mfa": 3})      # debounced live run
        scheduler.run_simulation(25_000)        # background refine run
        scheduler.wait(timeout=60)
        scheduler.latest_results.net_p90
    """

    def __init__(
        self,
        scenario: Scenario | None = None,
        config: SchedulerConfig | None = None,
        on_result: Callable[[SimulationResults], None] | None = None,
        worker_target: Callable[..., None] = worker_main,
    ):
        scenario = scenario if scenario is not None else Scenario()
        self._config = config if config is not None else SchedulerConfig()
        self._on_result = on_result
        self._worker_target = worker_target
        self._ctx = multiprocessing.get_context(self._config.start_method)

        self._cond = threading.Condition(threading.RLock())

        self._inputs: dict[str, TriangularInput] = dict(scenario.inputs)
        self._controls: dict[str, int] = dict(scenario.controls)
        self._debounced_inputs = dict(self._inputs)
        self._debounced_controls = dict(self._controls)
        self._control_defs: list[ControlDefinition] = list(scenario.control_defs)
        self._archetype: Archetype | None = scenario.archetype

        self._generation = 0
        self._pending_generation: int | None = None
        self._task: TaskHandle | None = None
        self._latest: SimulationResults | None = None

        self._debouncer = Debouncer(self._config.debounce_seconds, self._run_live)

    # ── State ───────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        """True while the most recently requested run has not delivered."""
        with self._cond:
            return self._pending_generation is not None

    @property
    def latest_results(self) -> SimulationResults | None:
        with self._cond:
            return self._latest

    @property
    def generation(self) -> int:
        with self._cond:
            return self._generation

    def set_inputs(self, inputs: Mapping[str, TriangularInput]) -> None:
        """Replace baseline inputs; schedules a debounced live run."""
        with self._cond:
            self._inputs = dict(inputs)
        self._debouncer.trigger()

    def set_controls(self, controls: Mapping[str, int]) -> None:
        """Replace control maturities; schedules a debounced live run."""
        with self._cond:
            self._controls = dict(controls)
        self._debouncer.trigger()

    def set_archetype(self, archetype: Archetype | None) -> None:
        """Switch archetype (insurance terms) and rerun the live preview immediately."""
        with self._cond:
            self._archetype = archetype
        self.run_simulation(self._config.live_iterations)

    def _run_live(self) -> None:
        with self._cond:
            self._debounced_inputs = dict(self._inputs)
            self._debounced_controls = dict(self._controls)
        self.run_simulation(self._config.live_iterations)

    def _snapshot(self, iteration_count: int) -> tuple[dict[str, TriangularInput], InsurancePolicy]:
        if iteration_count >= self._config.raw_input_min_iterations:
            inputs, controls = self._inputs, self._controls
        else:
            inputs, controls = self._debounced_inputs, self._debounced_controls
        effective = get_effective_inputs(inputs, controls, self._control_defs)
        return effective, resolve_policy(self._archetype)

    # ── Dispatch ────────────────────────────────────────────────────────

    def run_simulation(self, iteration_count: int, run_sensitivity: bool = False) -> int:
        """Start a run and return its generation number.

        Small runs block until the result is delivered and ignore
        ``run_sensitivity``; large runs return immediately and deliver
        through ``on_result`` / ``latest_results``.
        """
        cfg = self._config
        with self._cond:
            self._generation += 1
            generation = self._generation
            self._pending_generation = generation
            self._terminate_task()
            effective, policy = self._snapshot(iteration_count)

            if iteration_count > cfg.sync_max_iterations:
                self._dispatch(
                    generation, iteration_count, effective, policy,
                    run_sensitivity or iteration_count >= cfg.sensitivity_min_iterations,
                )
                return generation

        # Interactive runs report the default driver; the sweep is worker-only.
        results = run_simulation(
            effective,
            policy.deductible,
            policy.coverage_limit,
            iteration_count,
            loss_sample_cap=cfg.light_loss_sample_cap,
        )
        self._accept(generation, results)
        return generation

    def _dispatch(
        self,
        generation: int,
        iteration_count: int,
        effective: dict[str, TriangularInput],
        policy: InsurancePolicy,
        run_sensitivity: bool,
    ) -> None:
        payload = build_payload(
            effective,
            policy.deductible,
            policy.coverage_limit,
            iteration_count,
            run_sensitivity,
            self._config.heavy_loss_sample_cap,
        )
        parent_conn, child_conn = self._ctx.Pipe(duplex=False)
        process = self._ctx.Process(
            target=self._worker_target, args=(child_conn, payload), daemon=True,
        )
        process.start()
        child_conn.close()

        handle = TaskHandle(
            generation=generation,
            iteration_count=iteration_count,
            effective=effective,
            policy=policy,
            process=process,
            conn=parent_conn,
        )
        handle.watcher = threading.Thread(
            target=self._watch, args=(handle,), name=f"sim-watch-{generation}", daemon=True,
        )
        self._task = handle
        logger.debug(
            "Dispatched generation %d (%d iterations, sensitivity=%s) to pid %s",
            generation, iteration_count, run_sensitivity, process.pid,
        )
        handle.watcher.start()

    def _terminate_task(self) -> None:
        task, self._task = self._task, None
        if task is not None and task.process.is_alive():
            logger.debug("Terminating superseded worker (generation %d)", task.generation)
            task.process.terminate()

    def _watch(self, handle: TaskHandle) -> None:
        try:
            status, body = handle.conn.recv()
        except (EOFError, OSError):
            handle.process.join(timeout=1.0)
            status, body = "error", f"worker exited with code {handle.process.exitcode}"
        else:
            handle.process.join(timeout=1.0)
        finally:
            handle.conn.close()

        with self._cond:
            superseded = handle.generation != self._generation
        if superseded:
            logger.debug("Discarding result of superseded generation %d", handle.generation)
            return

        if status == "ok":
            self._accept(handle.generation, SimulationResults.model_validate(body))
            return

        fallback_count = min(handle.iteration_count, self._config.fallback_max_iterations)
        logger.warning(
            "Simulation worker failed for generation %d; falling back to %d synchronous iterations: %s",
            handle.generation, fallback_count, body,
        )
        results = run_simulation(
            handle.effective,
            handle.policy.deductible,
            handle.policy.coverage_limit,
            fallback_count,
            loss_sample_cap=self._config.light_loss_sample_cap,
        )
        self._accept(handle.generation, results)

    def _accept(self, generation: int, results: SimulationResults) -> bool:
        with self._cond:
            if generation != self._generation:
                return False
            self._latest = results
            self._pending_generation = None
            if self._task is not None and self._task.generation == generation:
                self._task = None
            self._cond.notify_all()
        if self._on_result is not None:
            self._on_result(results)
        return True

    # ── Lifecycle ───────────────────────────────────────────────────────

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the latest run delivers; False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending_generation is None, timeout)

    def shutdown(self) -> None:
        """Cancel pending timers and terminate any in-flight worker."""
        self._debouncer.cancel()
        with self._cond:
            self._generation += 1
            self._pending_generation = None
            self._terminate_task()
            self._cond.notify_all()
