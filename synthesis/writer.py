# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""CSV output sink and function manifest.

Column layout: ``x1..xn, fun1..funN, noisey_fun1..noisey_funN``. The
``noisey_`` spelling is kept for compatibility with existing datasets.
"""

from __future__ import annotations

import csv
import json
import os
from typing import List, Optional, Sequence

from core.config import SynthesisConfig
from core.expression import GeneratedFunction, variable_names
from log import get_logger

from .pipeline import OutputRecord

logger = get_logger(__name__)


def header(n_vars: int, n_functions: int) -> List[str]:
    """Column names of the output file."""
    return (
        list(variable_names(n_vars))
        + [f"fun{i + 1}" for i in range(n_functions)]
        + [f"noisey_fun{i + 1}" for i in range(n_functions)]
    )


def format_value(value: float) -> str:
    """Shortest round-trip representation (``repr``); ``nan``/``inf``/``-inf`` as is."""
    return repr(float(value))


class CSVSink:
    """Append-only CSV writer for :class:`OutputRecord` rows.

    Use as a context manager. Each row is fully formatted before it is
    written, and rows are written by the owning thread only.
    """

    def __init__(self, path: str, n_vars: int, n_functions: int):
        self.path = path
        self.n_vars = n_vars
        self.n_functions = n_functions
        self.columns = header(n_vars, n_functions)
        self.rows_written = 0
        self._file = None
        self._writer = None

    def __enter__(self) -> "CSVSink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._file = open(self.path, "w", newline="")
        self._writer = csv.writer(self._file, lineterminator="\n")
        self._writer.writerow(self.columns)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None

    def write(self, record: OutputRecord) -> None:
        if self._writer is None:
            raise RuntimeError("sink is not open; use it as a context manager")
        values = record.values()
        if len(values) != len(self.columns):
            raise ValueError(
                f"record {record.index} has {len(values)} values, "
                f"expected {len(self.columns)}"
            )
        self._writer.writerow([format_value(v) for v in values])
        self.rows_written += 1


def manifest_path(csv_path: str) -> str:
    """``data/run.csv`` -> ``data/run.functions.json``."""
    root, _ = os.path.splitext(csv_path)
    return f"{root}.functions.json"


def write_manifest(
    csv_path: str,
    functions: Sequence[GeneratedFunction],
    config: Optional[SynthesisConfig] = None,
) -> str:
    """Record the ground-truth definition of every ``funI`` column.

    Returns:
        Path of the written JSON file.
    """
    path = manifest_path(csv_path)
    payload = {
        "config": config.to_dict() if config is not None else None,
        "functions": {
            f"fun{i + 1}": func.to_dict() for i, func in enumerate(functions)
        },
    }
    with open(path, "w") as f:
        json.dump(payload, f, indent=2, allow_nan=True)
        f.write("\n")
    logger.info("Saved function manifest: %s", path)
    return path
