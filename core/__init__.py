# FuncSynth: Random Function Dataset Synthesis (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Core random-function kernel.

Provides the term vocabulary, the expression representation and evaluator,
random draw primitives, run configuration, and the function generator.
"""

from .vocabulary import TermKind, VocabularyEntry, build_vocabulary
from .draws import (
    Grid,
    grid_problem,
    make_rng,
    choose_distinct,
    choose_with_replacement,
    GENERATION_STREAM,
    SAMPLE_STREAM,
)
from .expression import Term, GeneratedFunction, eval_definition, variable_names
from .config import ConfigError, SynthesisConfig
from .generator import generate_random_function, generate_function_batch

__all__ = [
    # vocabulary
    "TermKind",
    "VocabularyEntry",
    "build_vocabulary",
    # draws
    "Grid",
    "grid_problem",
    "make_rng",
    "choose_distinct",
    "choose_with_replacement",
    "GENERATION_STREAM",
    "SAMPLE_STREAM",
    # expression
    "Term",
    "GeneratedFunction",
    "eval_definition",
    "variable_names",
    # config
    "ConfigError",
    "SynthesisConfig",
    # generator
    "generate_random_function",
    "generate_function_batch",
]
