# FuncSynth: Random Function Dataset Synthesis (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Random draw primitives and discretized grids.

All randomness goes through an explicitly passed :class:`numpy.random.Generator`.
Independent streams are derived from one run seed with
:class:`numpy.random.SeedSequence` spawn keys, so a draw depends only on
``(seed, key)`` and never on evaluation order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

# Spawn-key prefixes for the independent streams of one run
GENERATION_STREAM = 0
SAMPLE_STREAM = 1


def make_rng(seed: int, *key: int) -> np.random.Generator:
    """Return the generator for stream ``key`` of run ``seed``."""
    return np.random.default_rng(np.random.SeedSequence(entropy=seed, spawn_key=key))


def choose_with_replacement(rng: np.random.Generator, n: int, k: int) -> np.ndarray:
    """Draw ``k`` indices uniformly from ``range(n)``, with replacement."""
    if n < 1:
        raise ValueError(f"cannot draw from an empty index set (n={n})")
    return rng.integers(0, n, size=k)


def choose_distinct(rng: np.random.Generator, n: int, k: int) -> np.ndarray:
    """Draw ``k`` distinct indices uniformly from ``range(n)``, without replacement."""
    if not 0 < k <= n:
        raise ValueError(f"cannot draw {k} distinct indices from {n}")
    return rng.choice(n, size=k, replace=False)


# Grid values are rounded to this many decimals; steps must stay well above it
GRID_DECIMALS = 12
MIN_GRID_STEP = 1e-9
MAX_GRID_POINTS = 10_000_001


def grid_half_count(limit: float, step: float) -> int:
    """Largest ``K`` with ``K * step <= limit``, tolerating float drift in ``limit / step``."""
    ratio = limit / step
    return int(np.floor(ratio + 1e-9 * max(1.0, ratio)))


def grid_problem(limit: float, step: float):
    """Why ``(limit, step)`` cannot make a usable grid, or ``None``."""
    if not (np.isfinite(limit) and limit > 0):
        return f"grid limit must be positive and finite, got {limit}"
    if not (np.isfinite(step) and step > 0):
        return f"grid step must be positive and finite, got {step}"
    if step < MIN_GRID_STEP:
        return f"grid step {step} is finer than {MIN_GRID_STEP}"
    if step > limit:
        return f"grid step {step} is wider than the limit {limit}; only 0 would remain"
    if limit / step > MAX_GRID_POINTS:
        return f"grid would hold more than {MAX_GRID_POINTS} values"
    count = 2 * grid_half_count(limit, step) + 1
    if count > MAX_GRID_POINTS:
        return f"grid would hold {count} values, more than {MAX_GRID_POINTS}"
    return None


@dataclass(frozen=True)
class Grid:
    """Multiples of ``step`` inside ``[-limit, limit]``.

    Values are ``k * step`` for ``k`` in ``-K..K``, so the spacing is exactly
    ``step`` and ``0`` is always on the grid. The endpoints are on the grid
    when ``limit`` is a multiple of ``step``. Values are rounded to 12
    decimals so that e.g. ``300 * 0.01`` is stored as ``3.0``.
    """

    limit: float
    step: float
    values: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        problem = grid_problem(self.limit, self.step)
        if problem is not None:
            raise ValueError(problem)
        half = grid_half_count(self.limit, self.step)
        values = np.round(np.arange(-half, half + 1) * self.step, GRID_DECIMALS) + 0.0
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return len(self.values)

    def sample(self, rng: np.random.Generator, size: int) -> np.ndarray:
        """Draw ``size`` values uniformly from the grid, with replacement."""
        return self.values[choose_with_replacement(rng, len(self.values), size)]
