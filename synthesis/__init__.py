"""Dataset synthesis for FuncSynth.

Sampling & evaluation pipeline, process-pool distribution and CSV output.
"""

from .pipeline import (
    OutputRecord,
    draw_sample_point,
    evaluate_batch,
    add_noise,
    evaluate_sample,
    evaluate_samples,
    run_pipeline,
)
from .parallel import parallel_map_samples, chunk_indices
from .writer import CSVSink, header, manifest_path, write_manifest

__all__ = [
    "OutputRecord",
    "draw_sample_point",
    "evaluate_batch",
    "add_noise",
    "evaluate_sample",
    "evaluate_samples",
    "run_pipeline",
    "parallel_map_samples",
    "chunk_indices",
    "CSVSink",
    "header",
    "manifest_path",
    "write_manifest",
]
