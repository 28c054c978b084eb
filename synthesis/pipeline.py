# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Sampling & evaluation pipeline.

Every sample is a pure function of ``(function batch, domain, noise_sd,
seed, index)``: it draws its own point and noise from the stream
``(SAMPLE_STREAM, index)`` of the run seed. Samples can therefore be computed
in any order, on any worker, and still produce the same records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

import numpy as np

from core.draws import SAMPLE_STREAM, Grid, make_rng
from core.expression import GeneratedFunction


@dataclass(frozen=True)
class OutputRecord:
    """One dataset row.

    Attributes:
        index: Sample index in ``0..size_of_dataset-1``.
        point: Sampled variable values ``[n_vars]``.
        clean: Function values at ``point`` ``[N]``.
        noisy: ``clean`` plus Gaussian noise ``[N]``.
    """

    index: int
    point: np.ndarray
    clean: np.ndarray
    noisy: np.ndarray

    def values(self) -> np.ndarray:
        """Row values in column order: point, clean, noisy."""
        return np.concatenate([self.point, self.clean, self.noisy])


def draw_sample_point(rng: np.random.Generator, domain: Grid, n_vars: int) -> np.ndarray:
    """One grid value per variable, independent, with replacement."""
    return domain.sample(rng, n_vars)


def evaluate_batch(functions: Sequence[GeneratedFunction], point: np.ndarray) -> np.ndarray:
    """Evaluate every function at ``point``; all variables go to every function."""
    return np.array([float(f.evaluate(point)) for f in functions], dtype=np.float64)


def add_noise(clean: np.ndarray, noise_sd: float, rng: np.random.Generator) -> np.ndarray:
    """``clean + Normal(0, noise_sd)``, one independent draw per value."""
    return clean + rng.normal(0.0, noise_sd, size=clean.shape)


def evaluate_sample(
    index: int,
    functions: Sequence[GeneratedFunction],
    domain: Grid,
    noise_sd: float,
    seed: int,
) -> OutputRecord:
    """Produce the record for sample ``index``."""
    if not functions:
        raise ValueError("function batch is empty")
    index = int(index)
    rng = make_rng(seed, SAMPLE_STREAM, index)
    n_vars = functions[0].n_vars
    point = draw_sample_point(rng, domain, n_vars)
    clean = evaluate_batch(functions, point)
    noisy = add_noise(clean, noise_sd, rng)
    return OutputRecord(index, point, clean, noisy)


def evaluate_samples(
    indices: Iterable[int],
    functions: Sequence[GeneratedFunction],
    domain: Grid,
    noise_sd: float,
    seed: int,
) -> list:
    """Records for ``indices``, in the given order."""
    return [evaluate_sample(i, functions, domain, noise_sd, seed) for i in indices]


def run_pipeline(
    functions: Sequence[GeneratedFunction],
    domain: Grid,
    noise_sd: float,
    size_of_dataset: int,
    seed: int,
    n_workers: int = 1,
    chunk_size: int = 256,
) -> Iterator[OutputRecord]:
    """Yield exactly ``size_of_dataset`` records, in index order.

    Args:
        functions: Shared, read-only function batch.
        domain: Variable grid.
        noise_sd: Gaussian noise standard deviation.
        size_of_dataset: Number of samples.
        seed: Run seed.
        n_workers: 1 runs in-process; otherwise a process pool is used
            (``<= 0`` means one worker per CPU).
        chunk_size: Samples per unit of parallel work.
    """
    n_vars = {f.n_vars for f in functions}
    if len(n_vars) > 1:
        raise ValueError(f"functions disagree on the number of variables: {sorted(n_vars)}")

    if n_workers == 1:
        for index in range(size_of_dataset):
            yield evaluate_sample(index, functions, domain, noise_sd, seed)
        return

    from .parallel import parallel_map_samples

    yield from parallel_map_samples(
        functions, domain, noise_sd, range(size_of_dataset), seed,
        n_workers=n_workers, chunk_size=chunk_size,
    )
