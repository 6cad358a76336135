"""Tests for a single Monte-Carlo trial."""

from __future__ import annotations

import pytest

from fair_simulator.config.variables import TriangularInput
from fair_simulator.engine.distributions import make_rng
from fair_simulator.engine.iteration import SECONDARY_COST, run_one_iteration, sample_variable

from conftest import ConstantUniform


class TestSampleVariable:
    def test_missing_key_is_zero(self):
        assert sample_variable({}, "TEF", make_rng(1)) == 0.0

    def test_omitted_bounds_filled_from_mode(self):
        rng = make_rng(2)
        value = {"Cost_IR": TriangularInput(mode=100)}
        draws = [sample_variable(value, "Cost_IR", rng) for _ in range(500)]
        assert all(50 <= d <= 150 for d in draws)


class TestRunOneIteration:
    def test_empty_inputs_no_loss(self):
        outcome = run_one_iteration({}, 250_000, 10_000_000, make_rng(1))
        assert outcome.gross == 0.0
        assert outcome.net == 0.0

    def test_zero_frequency_no_loss(self, point_inputs):
        point_inputs["TEF"] = TriangularInput(min=0, mode=0, max=0)
        outcome = run_one_iteration(point_inputs, 250_000, 10_000_000, make_rng(1))
        assert outcome.gross == 0.0

    def test_single_event_loss_composition(self, point_inputs):
        # λ = 1 and a constant uniform of 0.5 yields exactly one event,
        # and P_Secondary = 1 always triggers the secondary loss.
        outcome = run_one_iteration(point_inputs, 250_000, 500_000, ConstantUniform(0.5))
        primary = 100_000 + 200_000 + (2 + 3) * 10_000
        assert outcome.gross == pytest.approx(primary + SECONDARY_COST)
        assert outcome.gross == pytest.approx(1_100_000)
        # insured = min(1.1M − 250k, 500k) = 500k
        assert outcome.net == pytest.approx(600_000)

    def test_secondary_cost_constant(self):
        assert SECONDARY_COST == 750_000

    def test_no_secondary_loss_when_probability_zero(self, point_inputs):
        point_inputs["P_Secondary"] = TriangularInput(min=0, mode=0, max=0)
        outcome = run_one_iteration(point_inputs, 0, 0, ConstantUniform(0.5))
        assert outcome.gross == pytest.approx(350_000)

    def test_net_never_exceeds_gross(self, inputs):
        rng = make_rng(4)
        for _ in range(500):
            outcome = run_one_iteration(inputs, 250_000, 10_000_000, rng)
            assert 0 <= outcome.net <= outcome.gross
