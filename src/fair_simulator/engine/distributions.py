"""Random-variate samplers — triangular, Poisson, Bernoulli.

Every sampler takes the random source explicitly (``rng``, a numpy
``Generator``) and consumes uniform draws from it via ``rng.random()``.
Seeding the generator makes a whole run reproducible; a background worker
builds its own generator so no state is shared with the caller.

Degenerate inputs never raise:
  - zero-width triangular range → returns the bound
  - lambda <= 0 → Poisson returns 0
"""

from __future__ import annotations

import math

import numpy as np


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Fresh generator; ``None`` seeds from OS entropy."""
    return np.random.default_rng(seed)


def sample_triangular(min_: float, mode: float, max_: float, rng: np.random.Generator) -> float:
    """Inverse-CDF triangular draw in ``[min_, max_]``.

    c = (mode − min) / (max − min)
    u ≤ c → min + √(u·(max − min)·(mode − min))
    u > c → max − √((1 − u)·(max − min)·(max − mode))

    A malformed triple (``mode`` outside the bounds) still yields a number:
    a negative radicand falls back to the branch bound, and the result is
    clamped to the interval spanned by ``min_`` and ``max_``.
    """
    u = rng.random()
    width = max_ - min_
    if width == 0:
        return min_

    c = (mode - min_) / width
    if u <= c:
        radicand = u * width * (mode - min_)
        value = min_ + math.sqrt(radicand) if radicand >= 0 else min_
    else:
        radicand = (1 - u) * width * (max_ - mode)
        value = max_ - math.sqrt(radicand) if radicand >= 0 else max_

    lo, hi = (min_, max_) if min_ <= max_ else (max_, min_)
    return min(max(value, lo), hi)


def sample_poisson(lam: float, rng: np.random.Generator) -> int:
    """Knuth's product-of-uniforms Poisson draw (event count with mean ``lam``)."""
    if lam <= 0:
        return 0
    threshold = math.exp(-lam)
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= rng.random()
        if p <= threshold:
            return k - 1


def sample_bernoulli(p: float, rng: np.random.Generator) -> int:
    """1 with probability ``p``, else 0."""
    return 1 if rng.random() < p else 0
