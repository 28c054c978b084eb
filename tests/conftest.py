from collections import deque

import numpy as np
import pytest
from omegaconf import OmegaConf


class ScriptedRNG:
    """Replays fixed draws in place of a numpy Generator.

    Only the two calls the generator makes are supported: ``integers`` and
    ``choice(..., replace=False)``.
    """

    def __init__(self, integers, choices):
        self._integers = deque(integers)
        self._choices = deque(choices)

    def integers(self, low, high=None, size=None):
        value = np.asarray(self._integers.popleft())
        assert low <= value.min() and value.max() < high, (low, high, value)
        if size is None:
            return int(value)
        assert value.shape == (size,), (size, value)
        return value

    def choice(self, a, size=None, replace=True):
        assert not replace
        value = np.asarray(self._choices.popleft())
        assert value.shape == (size,) and value.max() < a
        return value

    def exhausted(self):
        return not self._integers and not self._choices


@pytest.fixture
def scripted_rng():
    return ScriptedRNG


def make_cfg(tmp_path, **overrides):
    """Small sectioned run config writing into ``tmp_path``."""
    cfg = OmegaConf.create({
        "name": "synthesize",
        "seed": 7,
        "vocabulary": {"min_order": 0, "max_order": 3},
        "variables": {"max_num_vars": 4, "domain_limit": 2.0, "domain_step": 0.01},
        "functions": {
            "num_of_random_functions": 3,
            "max_terms": 4,
            "max_interactions": 2,
            "max_weight": 5.0,
            "weight_step": 0.1,
        },
        "noise": {"noise_sd": 0.1},
        "dataset": {"size_of_dataset": 50},
        "output": {"path": str(tmp_path / "out.csv"), "manifest": True},
        "runtime": {"n_workers": 1, "chunk_size": 16, "progress": False},
    })
    for key, value in overrides.items():
        OmegaConf.update(cfg, key, value)
    return cfg


@pytest.fixture
def cfg_factory(tmp_path):
    def _factory(**overrides):
        return make_cfg(tmp_path, **overrides)
    return _factory
