# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Random function representation.

A generated function is a flat weighted sum of single-factor terms::

    f(x) = w_1 * g_1(prod(x[G_1])) + ... + w_T * g_T(prod(x[G_T]))

where each ``g_t`` is a :class:`~core.vocabulary.VocabularyEntry` and each
``G_t`` an interaction group of distinct variable indices.

The numeric evaluator and the textual definition are both derived from the
same :class:`Term` sequence and perform the same floating-point operations in
the same order, so evaluating the definition with :func:`eval_definition`
reproduces the callable bit for bit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from .vocabulary import VocabularyEntry


# ---------------------------------------------------------------------------
# Safe math namespace for definition evaluation
# ---------------------------------------------------------------------------

_SAFE_MATH = {
    "__builtins__": {},
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "exp": np.exp,
}


def variable_names(n_vars: int) -> Tuple[str, ...]:
    """Names ``x1..x{n_vars}`` of the input variables."""
    return tuple(f"x{i + 1}" for i in range(n_vars))


@dataclass(frozen=True)
class Term:
    """``weight * entry(prod(x[group]))``.

    Attributes:
        entry: Vocabulary entry applied to the interaction product.
        group: Sorted, duplicate-free variable indices (0-based).
        weight: Multiplicative coefficient.
    """

    entry: VocabularyEntry
    group: Tuple[int, ...]
    weight: float

    def __post_init__(self) -> None:
        if not self.group:
            raise ValueError("interaction group must hold at least one variable")
        if len(set(self.group)) != len(self.group):
            raise ValueError(f"interaction group has duplicate variables: {self.group}")
        object.__setattr__(self, "group", tuple(sorted(int(i) for i in self.group)))
        object.__setattr__(self, "weight", float(self.weight))

    def product(self, x: np.ndarray) -> np.ndarray:
        """Product of the grouped variables, multiplied left to right."""
        out = x[..., self.group[0]]
        for idx in self.group[1:]:
            out = out * x[..., idx]
        return out

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.weight * self.entry.apply(self.product(x))

    def render(self, names: Sequence[str]) -> str:
        product = "*".join(names[i] for i in self.group)
        return f"{self.weight!r}*{self.entry.render(product)}"

    def to_dict(self, names: Sequence[str]) -> dict:
        return {
            "entry": self.entry.name,
            "variables": [names[i] for i in self.group],
            "weight": self.weight,
        }


class GeneratedFunction:
    """Sum of terms over a fixed set of ``n_vars`` input variables.

    Callable three ways, always with every variable supplied:

    - ``f(x)`` with ``x`` of shape ``[n_vars]`` or ``[..., n_vars]``;
    - ``f(v1, ..., vn)`` with ``n_vars`` positional scalars;
    - ``f(x1=..., ..., xn=...)`` with every variable named.

    Variables absent from all interaction groups are accepted and ignored.

    Attributes:
        terms: The summed terms, in generation order.
        names: Variable names, ``x1..x{n_vars}``.
        definition: Canonical string form, ``" + "``-joined rendered terms.
    """

    def __init__(self, terms: Sequence[Term], n_vars: int):
        if not terms:
            raise ValueError("a generated function needs at least one term")
        self.terms = tuple(terms)
        self.n_vars = int(n_vars)
        self.names = variable_names(self.n_vars)
        for term in self.terms:
            if term.group[-1] >= self.n_vars:
                raise ValueError(
                    f"term uses variable index {term.group[-1]} but only "
                    f"{self.n_vars} variables exist"
                )
        self.definition = " + ".join(term.render(self.names) for term in self.terms)

    def __repr__(self) -> str:
        return f"GeneratedFunction(n_vars={self.n_vars}, definition={self.definition!r})"

    def __len__(self) -> int:
        return len(self.terms)

    def __call__(self, *args, **kwargs) -> np.ndarray:
        return self.evaluate(self._gather(args, kwargs))

    def _gather(self, args: tuple, kwargs: Dict[str, float]) -> np.ndarray:
        if args and kwargs:
            raise ValueError("pass variables either positionally or by name, not both")
        if kwargs:
            missing = [n for n in self.names if n not in kwargs]
            unknown = sorted(set(kwargs) - set(self.names))
            if missing or unknown:
                raise ValueError(
                    f"expected variables {list(self.names)}; "
                    f"missing {missing}, unknown {unknown}"
                )
            return np.stack([np.asarray(kwargs[n], dtype=np.float64) for n in self.names], axis=-1)
        if len(args) == 1:
            return np.asarray(args[0], dtype=np.float64)
        return np.asarray(args, dtype=np.float64)

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        """Evaluate on a point ``[n_vars]`` or a batch ``[..., n_vars]``.

        Returns:
            float64 array of shape ``x.shape[:-1]`` (0-d for a single point).
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim == 0 or x.shape[-1] != self.n_vars:
            raise ValueError(
                f"expected {self.n_vars} variable values in the last axis, "
                f"got shape {x.shape}"
            )
        with np.errstate(all="ignore"):
            total = self.terms[0].evaluate(x)
            for term in self.terms[1:]:
                total = total + term.evaluate(x)
        return total

    def to_dict(self) -> dict:
        return {
            "definition": self.definition,
            "terms": [term.to_dict(self.names) for term in self.terms],
        }


def eval_definition(definition: str, x: np.ndarray, n_vars: int) -> np.ndarray:
    """Evaluate a definition string on ``x`` of shape ``[..., n_vars]``.

    Generic parser path used to cross-check :class:`GeneratedFunction`. Only
    the variables and the ``sin``/``cos``/``tan``/``exp`` names are visible.
    """
    x = np.asarray(x, dtype=np.float64)
    namespace = {**_SAFE_MATH}
    for i, name in enumerate(variable_names(n_vars)):
        namespace[name] = x[..., i]
    with np.errstate(all="ignore"):
        return np.asarray(eval(definition, namespace), dtype=np.float64)  # noqa: S307
