# FuncSynth: Random Function Dataset Synthesis (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Term vocabulary: the elementary transforms a random function is built from.

Each :class:`VocabularyEntry` is a template over one placeholder slot. The
slot receives the product of an interaction group, e.g. ``pow(3)`` over
``{x2, x5}`` becomes ``(x2*x5)**3``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class TermKind(Enum):
    """Tag for the variant of a vocabulary entry."""

    POW = "pow"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    EXP = "exp"


_UNARY = {
    TermKind.SIN: np.sin,
    TermKind.COS: np.cos,
    TermKind.TAN: np.tan,
    TermKind.EXP: np.exp,
}


@dataclass(frozen=True)
class VocabularyEntry:
    """One elementary transform.

    Attributes:
        kind: Variant tag.
        order: Integer power for ``TermKind.POW``, ``None`` otherwise.
    """

    kind: TermKind
    order: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.kind is TermKind.POW) != (self.order is not None):
            raise ValueError(
                f"order is required for pow entries and forbidden otherwise "
                f"(kind={self.kind.value}, order={self.order})"
            )

    @property
    def name(self) -> str:
        if self.kind is TermKind.POW:
            return f"pow({self.order})"
        return self.kind.value

    def apply(self, arg: np.ndarray) -> np.ndarray:
        """Evaluate the transform on the substituted slot value(s)."""
        if self.kind is TermKind.POW:
            return arg ** self.order
        return _UNARY[self.kind](arg)

    def render(self, product: str) -> str:
        """Substitute ``product`` into the placeholder slot."""
        if self.kind is TermKind.POW:
            return f"({product})**{self.order}"
        return f"{self.kind.value}({product})"


def build_vocabulary(min_order: int, max_order: int) -> Tuple[VocabularyEntry, ...]:
    """Build the vocabulary ``pow(min_order)..pow(max_order), sin, cos, tan, exp``.

    Args:
        min_order: Smallest polynomial power (inclusive).
        max_order: Largest polynomial power (inclusive).

    Returns:
        Immutable tuple of entries in a fixed order, so index draws are
        reproducible.
    """
    if min_order > max_order:
        raise ValueError(f"min_order ({min_order}) > max_order ({max_order})")
    powers = tuple(VocabularyEntry(TermKind.POW, k) for k in range(min_order, max_order + 1))
    return powers + tuple(VocabularyEntry(kind) for kind in _UNARY)
