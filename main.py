# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""FuncSynth CLI Entry Point.

Dispatches synthesis tasks. Any config key can be overridden:
    python main.py functions.max_terms=3 dataset.size_of_dataset=500
"""

import hydra
from omegaconf import DictConfig
from tasks.synthesize import SynthesizeTask


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    """Looks up the task named in the config and runs it.

    Args:
        cfg (DictConfig): The run configuration.
    """
    task_name = cfg.name

    task_map = {
        'synthesize': SynthesizeTask,
    }

    if task_name not in task_map:
        raise ValueError(f"Unknown task: {task_name}. Available: {list(task_map.keys())}")

    TaskClass = task_map[task_name]
    task = TaskClass(cfg)
    task.run()

if __name__ == "__main__":
    main()
