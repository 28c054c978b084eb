# FuncSynth: Random Function Dataset Synthesis (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Process-pool work distribution for the sampling pipeline.

Contiguous index chunks are evaluated by worker processes and handed back in
submission order. Only the calling process consumes the records, so the
output sink never sees concurrent writers.
"""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor
from typing import Iterator, List, Sequence

from core.draws import Grid
from core.expression import GeneratedFunction
from log import get_logger

from .pipeline import OutputRecord, evaluate_samples

logger = get_logger(__name__)


def chunk_indices(indices: Sequence[int], chunk_size: int) -> List[Sequence[int]]:
    """Split ``indices`` into consecutive slices of at most ``chunk_size``."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return [indices[i:i + chunk_size] for i in range(0, len(indices), chunk_size)]


def _evaluate_chunk(args) -> List[OutputRecord]:
    indices, functions, domain, noise_sd, seed = args
    return evaluate_samples(indices, functions, domain, noise_sd, seed)


def parallel_map_samples(
    functions: Sequence[GeneratedFunction],
    domain: Grid,
    noise_sd: float,
    indices: Sequence[int],
    seed: int,
    n_workers: int = 0,
    chunk_size: int = 256,
) -> Iterator[OutputRecord]:
    """Evaluate ``indices`` on a process pool, yielding records in index order.

    Args:
        n_workers: Worker processes; ``<= 0`` uses ``os.cpu_count()``.
        chunk_size: Samples per submitted job.
    """
    if n_workers <= 0:
        n_workers = os.cpu_count() or 1
    chunks = chunk_indices(indices, chunk_size)
    functions = tuple(functions)
    logger.debug("Distributing %d samples over %d workers in %d chunks",
                 len(indices), n_workers, len(chunks))

    jobs = ((chunk, functions, domain, noise_sd, seed) for chunk in chunks)
    with ProcessPoolExecutor(max_workers=n_workers) as pool:
        try:
            for records in pool.map(_evaluate_chunk, jobs):
                yield from records
        except BaseException:
            pool.shutdown(wait=True, cancel_futures=True)
            raise
