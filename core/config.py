# FuncSynth: Random Function Dataset Synthesis (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Run configuration and its validation.

:class:`SynthesisConfig` is built from the hydra config (see
``conf/config.yaml``) and checked once, before any function is generated.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass

from omegaconf import DictConfig

from .draws import Grid, grid_problem


class ConfigError(ValueError):
    """Invalid run configuration. Fatal to the whole run.

    Attributes:
        param: Name of the offending parameter.
    """

    def __init__(self, param: str, message: str):
        super().__init__(f"{param}: {message}")
        self.param = param


_POSITIVE_COUNTS = (
    "max_num_vars",
    "max_terms",
    "max_interactions",
    "num_of_random_functions",
    "size_of_dataset",
)

_POSITIVE_REALS = ("domain_limit", "domain_step", "max_weight", "weight_step")


@dataclass(frozen=True)
class SynthesisConfig:
    """Every knob of one synthesis run.

    Attributes:
        min_order: Smallest power in the ``pow(k)`` vocabulary entries.
        max_order: Largest power in the ``pow(k)`` vocabulary entries.
        max_num_vars: Number of input variables ``x1..xn``.
        max_interactions: Largest number of variables multiplied in one term.
        max_terms: Terms summed per generated function.
        domain_limit: Variables range over ``[-domain_limit, domain_limit]``.
        domain_step: Spacing of the variable grid.
        max_weight: Weights range over ``[-max_weight, max_weight]``.
        weight_step: Spacing of the weight grid.
        noise_sd: Standard deviation of the additive Gaussian noise.
        num_of_random_functions: Functions per batch (N).
        size_of_dataset: Sampled points (M).
        seed: Run seed; all random streams derive from it.
    """

    min_order: int = 0
    max_order: int = 3
    max_num_vars: int = 10
    max_interactions: int = 3
    max_terms: int = 5
    domain_limit: float = 5.0
    domain_step: float = 0.01
    max_weight: float = 10.0
    weight_step: float = 0.01
    noise_sd: float = 0.1
    num_of_random_functions: int = 10
    size_of_dataset: int = 10000
    seed: int = 42

    def __post_init__(self) -> None:
        for name in _POSITIVE_COUNTS + ("min_order", "max_order", "seed"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(name, f"must be an integer, got {value!r}")
        for name in _POSITIVE_COUNTS:
            if getattr(self, name) < 1:
                raise ConfigError(name, f"must be >= 1, got {getattr(self, name)}")
        if self.max_interactions > self.max_num_vars:
            raise ConfigError(
                "max_interactions",
                f"{self.max_interactions} exceeds max_num_vars={self.max_num_vars}",
            )
        if self.min_order < 0:
            raise ConfigError("min_order", f"must be >= 0, got {self.min_order}")
        if self.min_order > self.max_order:
            raise ConfigError(
                "max_order", f"{self.max_order} is below min_order={self.min_order}"
            )
        if self.seed < 0:
            raise ConfigError("seed", f"must be >= 0, got {self.seed}")
        for name in _POSITIVE_REALS:
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ConfigError(name, f"must be positive and finite, got {value!r}")
        for limit, step in (("domain_limit", "domain_step"), ("max_weight", "weight_step")):
            problem = grid_problem(getattr(self, limit), getattr(self, step))
            if problem is not None:
                raise ConfigError(step, problem)
        if not (math.isfinite(self.noise_sd) and self.noise_sd >= 0):
            raise ConfigError("noise_sd", f"must be >= 0 and finite, got {self.noise_sd!r}")

    @classmethod
    def from_cfg(cls, cfg: DictConfig) -> "SynthesisConfig":
        """Read the sectioned hydra config (vocabulary / variables / functions / ...)."""
        vocab = cfg.get("vocabulary", {})
        variables = cfg.get("variables", {})
        functions = cfg.get("functions", {})
        noise = cfg.get("noise", {})
        dataset = cfg.get("dataset", {})
        return cls(
            min_order=vocab.get("min_order", 0),
            max_order=vocab.get("max_order", 3),
            max_num_vars=variables.get("max_num_vars", 10),
            domain_limit=float(variables.get("domain_limit", 5.0)),
            domain_step=float(variables.get("domain_step", 0.01)),
            max_interactions=functions.get("max_interactions", 3),
            max_terms=functions.get("max_terms", 5),
            max_weight=float(functions.get("max_weight", 10.0)),
            weight_step=float(functions.get("weight_step", 0.01)),
            num_of_random_functions=functions.get("num_of_random_functions", 10),
            noise_sd=float(noise.get("noise_sd", 0.1)),
            size_of_dataset=dataset.get("size_of_dataset", 10000),
            seed=cfg.get("seed", 42),
        )

    def domain_grid(self) -> Grid:
        return Grid(self.domain_limit, self.domain_step)

    def weight_grid(self) -> Grid:
        return Grid(self.max_weight, self.weight_step)

    def to_dict(self) -> dict:
        return asdict(self)
