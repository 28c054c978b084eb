# FuncSynth: Random Function Dataset Synthesis
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# End-to-end tests: task lifecycle, CSV output and manifest.

import csv
import json

import numpy as np
import pytest
from hydra import compose, initialize

from core.config import ConfigError, SynthesisConfig
from core.expression import eval_definition
from synthesis.pipeline import OutputRecord
from synthesis.writer import CSVSink, format_value, header, manifest_path
from tasks.synthesize import SynthesizeTask


def _read_rows(path):
    with open(path, newline="") as f:
        return list(csv.reader(f))


def _read_table(path):
    rows = _read_rows(path)
    return rows[0], np.array([[float(v) for v in r] for r in rows[1:]], dtype=np.float64)


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------

def test_header_layout():
    assert header(2, 3) == [
        "x1", "x2", "fun1", "fun2", "fun3",
        "noisey_fun1", "noisey_fun2", "noisey_fun3",
    ]


def test_format_value_round_trips():
    for value in [0.1, -1e-300, 1.2345678901234567e200, 14.0]:
        assert float(format_value(value)) == value
    assert format_value(float("inf")) == "inf"
    assert format_value(float("-inf")) == "-inf"
    assert format_value(float("nan")) == "nan"


def test_sink_writes_unquoted_rows(tmp_path):
    path = tmp_path / "nested" / "out.csv"
    record = OutputRecord(0, np.array([3.0, -1.0]), np.array([14.0]), np.array([14.25]))
    with CSVSink(str(path), 2, 1) as sink:
        sink.write(record)
    assert path.read_text() == "x1,x2,fun1,noisey_fun1\n3.0,-1.0,14.0,14.25\n"


def test_sink_rejects_wrong_width(tmp_path):
    record = OutputRecord(0, np.array([3.0]), np.array([14.0]), np.array([14.0]))
    with CSVSink(str(tmp_path / "out.csv"), 2, 1) as sink:
        with pytest.raises(ValueError):
            sink.write(record)


def test_sink_must_be_open(tmp_path):
    sink = CSVSink(str(tmp_path / "out.csv"), 1, 1)
    with pytest.raises(RuntimeError):
        sink.write(OutputRecord(0, np.zeros(1), np.zeros(1), np.zeros(1)))


def test_manifest_path():
    assert manifest_path("data/run.csv") == "data/run.functions.json"


# ---------------------------------------------------------------------------
# Task runs
# ---------------------------------------------------------------------------

def test_row_and_column_counts(cfg_factory):
    cfg = cfg_factory()
    stats = SynthesizeTask(cfg).run()
    rows = _read_rows(cfg.output.path)
    assert stats["rows"] == 50
    assert len(rows) == 1 + 50
    assert all(len(r) == 4 + 2 * 3 for r in rows)
    assert rows[0] == header(4, 3)


def test_csv_matches_manifest_definitions(cfg_factory):
    cfg = cfg_factory(**{"noise.noise_sd": 0.0})
    SynthesizeTask(cfg).run()
    columns, data = _read_table(cfg.output.path)
    with open(manifest_path(cfg.output.path)) as f:
        manifest = json.load(f)
    assert manifest["config"]["seed"] == 7
    x = data[:, :4]
    for i in range(3):
        definition = manifest["functions"][f"fun{i + 1}"]["definition"]
        clean = data[:, columns.index(f"fun{i + 1}")]
        noisy = data[:, columns.index(f"noisey_fun{i + 1}")]
        np.testing.assert_allclose(eval_definition(definition, x, 4), clean, rtol=1e-9)
        np.testing.assert_array_equal(noisy, clean)


def test_same_seed_is_byte_identical(cfg_factory, tmp_path):
    a = cfg_factory(**{"output.path": str(tmp_path / "a.csv")})
    b = cfg_factory(**{"output.path": str(tmp_path / "b.csv")})
    SynthesizeTask(a).run()
    SynthesizeTask(b).run()
    assert (tmp_path / "a.csv").read_bytes() == (tmp_path / "b.csv").read_bytes()


def test_worker_count_does_not_change_output(cfg_factory, tmp_path):
    a = cfg_factory(**{"output.path": str(tmp_path / "serial.csv")})
    b = cfg_factory(**{"output.path": str(tmp_path / "parallel.csv"),
                       "runtime.n_workers": 2, "runtime.chunk_size": 7})
    SynthesizeTask(a).run()
    SynthesizeTask(b).run()
    assert (tmp_path / "serial.csv").read_bytes() == (tmp_path / "parallel.csv").read_bytes()


def test_different_seed_changes_output(cfg_factory, tmp_path):
    a = cfg_factory(**{"output.path": str(tmp_path / "a.csv")})
    b = cfg_factory(**{"output.path": str(tmp_path / "b.csv"), "seed": 8})
    SynthesizeTask(a).run()
    SynthesizeTask(b).run()
    assert (tmp_path / "a.csv").read_bytes() != (tmp_path / "b.csv").read_bytes()


def test_minimal_run(cfg_factory):
    cfg = cfg_factory(**{
        "functions.max_terms": 1,
        "functions.num_of_random_functions": 1,
        "dataset.size_of_dataset": 1,
    })
    task = SynthesizeTask(cfg)
    task.run()
    rows = _read_rows(cfg.output.path)
    assert len(rows) == 2
    assert rows[0] == ["x1", "x2", "x3", "x4", "fun1", "noisey_fun1"]
    assert len(task.functions) == 1
    assert len(task.functions[0].terms) == 1
    assert " + " not in task.functions[0].definition


def test_manifest_can_be_disabled(cfg_factory):
    cfg = cfg_factory(**{"output.manifest": False})
    stats = SynthesizeTask(cfg).run()
    assert stats["manifest"] is None


def test_config_error_before_any_output(cfg_factory):
    cfg = cfg_factory(**{"functions.max_interactions": 9})
    with pytest.raises(ConfigError) as err:
        SynthesizeTask(cfg)
    assert err.value.param == "max_interactions"


def test_non_finite_values_are_reported(cfg_factory):
    # exp of products of five variables on [-40, 40] overflows often
    cfg = cfg_factory(**{
        "vocabulary.min_order": 0, "vocabulary.max_order": 0,
        "variables.max_num_vars": 5, "variables.domain_limit": 40.0,
        "variables.domain_step": 1.0,
        "functions.max_interactions": 5, "functions.max_terms": 6,
        "dataset.size_of_dataset": 200,
    })
    stats = SynthesizeTask(cfg).run()
    _, data = _read_table(cfg.output.path)
    clean = data[:, 5:8]
    assert stats["non_finite"] == int((~np.isfinite(clean)).sum())


# ---------------------------------------------------------------------------
# Shipped hydra config
# ---------------------------------------------------------------------------

def test_default_config_is_valid():
    with initialize(version_base=None, config_path="../conf"):
        cfg = compose(config_name="config", overrides=["functions.max_terms=2"])
    assert cfg.name == "synthesize"
    config = SynthesisConfig.from_cfg(cfg)
    assert config.max_terms == 2
    assert config.max_interactions <= config.max_num_vars
