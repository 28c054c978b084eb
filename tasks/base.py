# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

from abc import ABC, abstractmethod

from omegaconf import DictConfig, OmegaConf

from log import get_logger

logger = get_logger(__name__)


class BaseTask(ABC):
    """Abstract base class for dataset synthesis tasks.

    Lifecycle: setup_config → generate → synthesize → report.

    Attributes:
        cfg (DictConfig): Hydra configuration.
        config: Validated run configuration, built by :meth:`setup_config`.
        functions: Generated function batch, filled by :meth:`generate`.
    """

    def __init__(self, cfg: DictConfig):
        """Sets up the task. Configuration errors surface here, before any work.

        Args:
            cfg (DictConfig): Hydra config.
        """
        self.cfg = cfg
        self.config = self.setup_config()
        self.functions = None

    @abstractmethod
    def setup_config(self):
        """Validate the hydra config into a run configuration."""
        pass

    @abstractmethod
    def generate(self):
        """Build the random function batch."""
        pass

    @abstractmethod
    def synthesize(self, functions):
        """Sample, evaluate and persist the dataset. Returns run statistics."""
        pass

    @abstractmethod
    def report(self, stats):
        """Log a summary of the run."""
        pass

    def run(self):
        """Execute the full lifecycle."""
        logger.info("Starting Task: %s", self.cfg.name)
        logger.debug("Config:\n%s", OmegaConf.to_yaml(self.cfg))
        self.functions = self.generate()
        stats = self.synthesize(self.functions)
        self.report(stats)
        logger.info("Task Complete.")
        return stats
