# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Random function generator.

Draw order per function (fixed, so a seed reproduces the batch):

1. ``term_count`` vocabulary indices, with replacement.
2. Per drawn entry: arity in ``1..max_interactions``, then ``arity`` distinct
   variables, then one weight from the weight grid.

The same entry may be drawn several times with different groups and weights.
Identical terms are kept and add up.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .config import ConfigError, SynthesisConfig
from .draws import Grid, choose_distinct, choose_with_replacement
from .expression import GeneratedFunction, Term, variable_names
from .vocabulary import VocabularyEntry, build_vocabulary


def _check_arguments(vocabulary, term_count, max_interactions, weight_domain, variables):
    if len(vocabulary) == 0:
        raise ConfigError("vocabulary", "vocabulary is empty")
    if term_count < 1:
        raise ConfigError("max_terms", f"must be >= 1, got {term_count}")
    if len(variables) == 0:
        raise ConfigError("max_num_vars", "no variables to draw from")
    if not 1 <= max_interactions <= len(variables):
        raise ConfigError(
            "max_interactions",
            f"must be in 1..{len(variables)} (number of variables), got {max_interactions}",
        )
    if len(weight_domain) == 0:
        raise ConfigError("max_weight", "weight domain is empty")


def generate_random_function(
    vocabulary: Sequence[VocabularyEntry],
    term_count: int,
    max_interactions: int,
    weight_domain: Grid,
    variables: Sequence[str],
    rng: np.random.Generator,
) -> GeneratedFunction:
    """Build one random function as a sum of ``term_count`` weighted terms.

    Args:
        vocabulary: Entries to draw from.
        term_count: Number of summed terms.
        max_interactions: Largest interaction group size.
        weight_domain: Grid of admissible weights.
        variables: Names of all input variables; the function takes all of them.
        rng: Source of randomness.

    Returns:
        GeneratedFunction with callable and definition string.

    Raises:
        ConfigError: On an empty vocabulary/domain or an out-of-range
            ``max_interactions``, before anything is drawn.
    """
    _check_arguments(vocabulary, term_count, max_interactions, weight_domain, variables)
    n_vars = len(variables)

    entries = choose_with_replacement(rng, len(vocabulary), term_count)
    terms = []
    for entry_idx in entries:
        arity = int(rng.integers(1, max_interactions + 1))
        group = choose_distinct(rng, n_vars, arity)
        weight = weight_domain.sample(rng, 1)[0]
        terms.append(Term(vocabulary[int(entry_idx)], tuple(int(i) for i in group), weight))

    return GeneratedFunction(terms, n_vars)


def generate_function_batch(
    config: SynthesisConfig, rng: np.random.Generator
) -> Tuple[GeneratedFunction, ...]:
    """Generate the ``num_of_random_functions`` functions of one run."""
    vocabulary = build_vocabulary(config.min_order, config.max_order)
    weights = config.weight_grid()
    variables = variable_names(config.max_num_vars)
    return tuple(
        generate_random_function(
            vocabulary,
            config.max_terms,
            config.max_interactions,
            weights,
            variables,
            rng,
        )
        for _ in range(config.num_of_random_functions)
    )
