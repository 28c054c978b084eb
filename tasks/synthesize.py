# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Random Function Dataset Task.

Generates a batch of random functions, samples the variable grid, evaluates
every function at every point, adds Gaussian noise and writes the CSV.
"""

import math
import time

from omegaconf import DictConfig
from tqdm import tqdm

from core.config import SynthesisConfig
from core.draws import GENERATION_STREAM, make_rng
from core.generator import generate_function_batch
from synthesis.pipeline import run_pipeline
from synthesis.writer import CSVSink, write_manifest
from tasks.base import BaseTask
from log import get_logger, progress_logging

logger = get_logger(__name__)


class SynthesizeTask(BaseTask):
    """Random function dataset synthesis.

    Config keys:
        seed                                : run seed
        vocabulary.min_order / max_order    : pow(k) range
        variables.max_num_vars              : number of inputs x1..xn
        variables.domain_limit / domain_step: sampling grid
        functions.num_of_random_functions   : batch size N
        functions.max_terms                 : terms per function
        functions.max_interactions          : largest interaction group
        functions.max_weight / weight_step  : weight grid
        noise.noise_sd                      : Gaussian noise std
        dataset.size_of_dataset             : number of rows M
        output.path                         : CSV destination
        output.manifest                     : also write <stem>.functions.json
        runtime.n_workers                   : 1 = in-process, <=0 = all CPUs
        runtime.chunk_size                  : samples per parallel job
        runtime.progress                    : show a tqdm bar
    """

    def __init__(self, cfg: DictConfig):
        output = cfg.get("output", {})
        runtime = cfg.get("runtime", {})
        self.output_path = output.get("path", "./data/random_functions.csv")
        self.manifest = output.get("manifest", True)
        self.n_workers = runtime.get("n_workers", 1)
        self.chunk_size = runtime.get("chunk_size", 256)
        self.progress = runtime.get("progress", True)
        super().__init__(cfg)

    def setup_config(self) -> SynthesisConfig:
        return SynthesisConfig.from_cfg(self.cfg)

    def generate(self):
        """Generate the function batch from the generation stream of the seed."""
        config = self.config
        logger.info(
            "Generating %d functions: %d terms, <= %d interactions, %d variables, "
            "pow(%d..%d)",
            config.num_of_random_functions, config.max_terms, config.max_interactions,
            config.max_num_vars, config.min_order, config.max_order,
        )
        rng = make_rng(config.seed, GENERATION_STREAM)
        functions = generate_function_batch(config, rng)
        for i, func in enumerate(functions):
            logger.info("fun%d = %s", i + 1, func.definition)
        return functions

    def synthesize(self, functions):
        config = self.config
        domain = config.domain_grid()
        records = run_pipeline(
            functions,
            domain,
            config.noise_sd,
            config.size_of_dataset,
            config.seed,
            n_workers=self.n_workers,
            chunk_size=self.chunk_size,
        )

        non_finite = 0
        t0 = time.time()
        with CSVSink(self.output_path, config.max_num_vars, len(functions)) as sink:
            with progress_logging():
                for record in tqdm(records, total=config.size_of_dataset,
                                   disable=not self.progress, desc="samples"):
                    non_finite += sum(1 for v in record.clean if not math.isfinite(v))
                    sink.write(record)
            rows = sink.rows_written
        wall_time = time.time() - t0
        logger.info("Saved CSV: %s", self.output_path)

        manifest = None
        if self.manifest:
            manifest = write_manifest(self.output_path, functions, config)

        return {
            "rows": rows,
            "columns": config.max_num_vars + 2 * len(functions),
            "non_finite": non_finite,
            "wall_time": wall_time,
            "path": self.output_path,
            "manifest": manifest,
        }

    def report(self, stats):
        logger.info("Rows: %d | Columns: %d | Time: %.1fs",
                    stats["rows"], stats["columns"], stats["wall_time"])
        if stats["non_finite"]:
            logger.warning("%d clean values are non-finite (tan poles / exp overflow)",
                           stats["non_finite"])
