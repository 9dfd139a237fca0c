import csv

import numpy as np
import pytest

from signal_generators import random_walk
from sigfractal.config import PipelineConfig
from sigfractal.core import FEATURE_FIELDS
from sigfractal.tools.extract import extract_features, main


def _write_series(path, values, header: bool = True) -> None:
    lines = ["time,value"] if header else []
    lines += [f"{30.0 * i},{float(v)!r}" for i, v in enumerate(values)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_extract_features_thins_with_every() -> None:
    cfg = PipelineConfig(window_size=64, sample_hz=1.0, seg_len=32, overlap=16)
    values = random_walk(100)

    all_vectors = list(extract_features(values, cfg))
    thinned = list(extract_features(values, cfg, every=5))

    assert len(all_vectors) == 37
    assert len(thinned) == 8
    assert [v.as_of for v in thinned] == [float(63 + 5 * i) for i in range(8)]


def test_extract_features_rejects_non_positive_every() -> None:
    with pytest.raises(ValueError):
        list(extract_features(np.zeros(10), PipelineConfig(), every=0))


def test_main_writes_feature_csv(tmp_path) -> None:
    src = tmp_path / "series.csv"
    out = tmp_path / "out" / "features.csv"
    _write_series(src, random_walk(80))

    code = main(
        [
            str(src),
            "--column",
            "1",
            "--time-column",
            "0",
            "--window",
            "64",
            "--sample-hz",
            "0.0333",
            "--output",
            str(out),
        ]
    )

    assert code == 0
    with out.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows[0] == list(FEATURE_FIELDS)
    assert len(rows) == 1 + 17
    as_of = FEATURE_FIELDS.index("as_of")
    assert float(rows[1][as_of]) == pytest.approx(30.0 * 63)


def test_main_reads_yaml_config(tmp_path, capsys) -> None:
    src = tmp_path / "series.csv"
    cfg = tmp_path / "cfg.yaml"
    _write_series(src, random_walk(40), header=False)
    cfg.write_text("pipeline:\n  window_size: 32\n  seg_len: 16\n  overlap: 8\n", encoding="utf-8")

    code = main([str(src), "--column", "1", "--config", str(cfg)])

    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].split(",") == list(FEATURE_FIELDS)
    assert len(lines) == 1 + 9


def test_main_rejects_out_of_range_column(tmp_path) -> None:
    src = tmp_path / "series.csv"
    _write_series(src, random_walk(10))
    assert main([str(src), "--column", "5"]) == 2


def test_main_rejects_non_positive_every(tmp_path) -> None:
    src = tmp_path / "series.csv"
    _write_series(src, random_walk(10))
    assert main([str(src), "--column", "1", "--every", "0"]) == 2


def test_main_reports_gapped_csv(tmp_path) -> None:
    src = tmp_path / "series.csv"
    src.write_text("time,value\n0,1\n30,\n", encoding="utf-8")
    assert main([str(src), "--column", "1"]) == 1
