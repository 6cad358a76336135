"""Tests for the random-variate samplers."""

from __future__ import annotations

import pytest

from fair_simulator.engine.distributions import (
    make_rng,
    sample_bernoulli,
    sample_poisson,
    sample_triangular,
)

from conftest import ConstantUniform


# ═══════════════════════════════════════════════════════════════════════════
# Triangular
# ═══════════════════════════════════════════════════════════════════════════


class TestTriangular:
    def test_draws_stay_within_bounds(self):
        rng = make_rng(1)
        draws = [sample_triangular(10, 50, 100, rng) for _ in range(1000)]
        assert all(10 <= d <= 100 for d in draws)

    def test_zero_width_returns_bound(self):
        rng = make_rng(1)
        assert sample_triangular(5, 5, 5, rng) == 5

    def test_inverse_cdf_at_mode(self):
        # u = c lands exactly on the mode
        assert sample_triangular(0, 5, 10, ConstantUniform(0.5)) == pytest.approx(5.0)

    def test_inverse_cdf_extremes(self):
        assert sample_triangular(0, 5, 10, ConstantUniform(0.0)) == pytest.approx(0.0)
        assert sample_triangular(0, 5, 10, ConstantUniform(1.0)) == pytest.approx(10.0)

    def test_mean_close_to_analytic(self):
        rng = make_rng(7)
        draws = [sample_triangular(0, 3, 9, rng) for _ in range(5000)]
        assert sum(draws) / len(draws) == pytest.approx(4.0, abs=0.2)

    def test_mode_above_max_still_bounded(self):
        for u in (0.0, 0.3, 0.9, 0.99):
            value = sample_triangular(0, 20, 10, ConstantUniform(u))
            assert 0 <= value <= 10

    def test_mode_below_min_still_bounded(self):
        for u in (0.0, 0.3, 0.9, 0.99):
            value = sample_triangular(10, 2, 20, ConstantUniform(u))
            assert 10 <= value <= 20


# ═══════════════════════════════════════════════════════════════════════════
# Poisson
# ═══════════════════════════════════════════════════════════════════════════


class TestPoisson:
    def test_zero_lambda(self):
        assert sample_poisson(0, make_rng(1)) == 0

    def test_negative_lambda(self):
        assert sample_poisson(-2.5, make_rng(1)) == 0

    def test_zero_lambda_consumes_no_draws(self):
        source = ConstantUniform(0.5)
        sample_poisson(0, source)
        assert source.calls == 0

    def test_non_negative_integers(self):
        rng = make_rng(3)
        draws = [sample_poisson(2.0, rng) for _ in range(500)]
        assert all(isinstance(d, int) and d >= 0 for d in draws)

    def test_mean_matches_lambda(self):
        rng = make_rng(11)
        draws = [sample_poisson(3.0, rng) for _ in range(5000)]
        assert sum(draws) / len(draws) == pytest.approx(3.0, abs=0.15)

    def test_knuth_product_with_constant_uniform(self):
        # 0.5 > e^-1, 0.25 <= e^-1 → one event
        assert sample_poisson(1.0, ConstantUniform(0.5)) == 1


# ═══════════════════════════════════════════════════════════════════════════
# Bernoulli
# ═══════════════════════════════════════════════════════════════════════════


class TestBernoulli:
    def test_only_zero_or_one(self):
        rng = make_rng(5)
        assert {sample_bernoulli(0.4, rng) for _ in range(200)} <= {0, 1}

    def test_certain_outcomes(self):
        rng = make_rng(5)
        assert all(sample_bernoulli(1.0, rng) == 1 for _ in range(100))
        assert all(sample_bernoulli(0.0, rng) == 0 for _ in range(100))

    def test_rate_close_to_p(self):
        rng = make_rng(9)
        hits = sum(sample_bernoulli(0.3, rng) for _ in range(5000))
        assert hits / 5000 == pytest.approx(0.3, abs=0.03)


# ═══════════════════════════════════════════════════════════════════════════
# Seeding
# ═══════════════════════════════════════════════════════════════════════════


class TestSeeding:
    def test_same_seed_same_stream(self):
        a, b = make_rng(42), make_rng(42)
        assert [sample_triangular(0, 1, 2, a) for _ in range(20)] == \
               [sample_triangular(0, 1, 2, b) for _ in range(20)]

    def test_different_seeds_differ(self):
        a, b = make_rng(1), make_rng(2)
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]
