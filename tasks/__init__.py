"""Synthesis tasks for the FuncSynth framework.

Each task inherits from :class:`BaseTask` and implements the full lifecycle:
setup_config, generate, synthesize, report.
"""

from .base import BaseTask
from .synthesize import SynthesizeTask

__all__ = [
    "BaseTask",
    "SynthesizeTask",
]
