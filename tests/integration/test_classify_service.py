import csv
from pathlib import Path

import pytest

from byteclasser.errors import ConfigLoadError, ConfigMalformedError, InputReadError
from byteclasser.services.classify_service import run_classification


def read_back(path: Path):
    with path.open(newline="", encoding="utf-8") as fh:
        return list(csv.reader(fh))


def test_end_to_end_concrete_scenario(tmp_path, test_config, write_targets, write_csv, make_target):
    targets = write_targets({"alpha": [make_target("6162", weight=2.0)]})
    corpus = write_csv("text,extra\nabcabc,x\n")
    out = tmp_path / "out.csv"

    result = run_classification(corpus, targets, out, config=test_config)

    assert read_back(out) == [
        ["row_id", "text", "alpha"],
        ["0", "abcabc x", "4.0"],
    ]
    assert result.rows_scored == 1
    assert result.rows_dropped == 0
    assert result.labels == ["alpha"]
    assert result.output_path == out


def test_skipped_targets_and_dropped_rows_reported(tmp_path, test_config, write_targets, write_csv,
                                                   make_target, caplog):
    targets = write_targets({
        "alpha": [make_target("6g", weight=50.0), make_target("61", weight=1.0)],
        "beta": [make_target("62", weight=-0.5)],
    })
    corpus = write_csv("a,b\nab,ba\nbroken\nzz,zz\n")
    out = tmp_path / "out.csv"

    with caplog.at_level("WARNING"):
        result = run_classification(corpus, targets, out, config=test_config)

    assert result.targets_total == 3
    assert result.targets_skipped == 1
    assert result.rows_read == 3
    assert result.rows_dropped == 1
    assert read_back(out) == [
        ["row_id", "text", "alpha", "beta"],
        ["0", "ab ba", "2.0", "-1.0"],
        ["2", "zz zz", "0.0", "0.0"],
    ]
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "Skipped 1 of 3 targets" in messages
    assert "Dropped 1 of 3 input rows" in messages


def test_output_identical_across_worker_counts(tmp_path, test_config, write_targets, write_csv, make_target):
    targets = write_targets({
        "errors": [make_target("4552524f52", weight=3.0), make_target("6661696c", weight=1.5)],
        "ok": [make_target("6f6b", weight=1.0)],
        "noise": [make_target("2020", weight=-0.25)],
    })
    lines = ["msg,level"]
    for i in range(120):
        lines.append(f"ERROR {i} fail  ok,{'ok' if i % 3 else 'failfail'}")
    corpus = write_csv("\n".join(lines) + "\n")

    serial_out = tmp_path / "serial.csv"
    run_classification(corpus, targets, serial_out, config=test_config)

    parallel_cfg = dict(test_config, scoring={'max_workers': 4, 'chunk_size': 5})
    parallel_out = tmp_path / "parallel.csv"
    run_classification(corpus, targets, parallel_out, config=parallel_cfg)

    assert serial_out.read_bytes() == parallel_out.read_bytes()


def test_config_error_aborts_before_reading_rows(tmp_path, test_config, write_targets):
    targets = write_targets(document={"targets": {}})
    out = tmp_path / "out.csv"
    with pytest.raises(ConfigMalformedError):
        # input does not exist: the targets error must surface first
        run_classification(tmp_path / "missing.csv", targets, out, config=test_config)
    assert not out.exists()


def test_missing_targets_file(tmp_path, test_config, write_csv):
    with pytest.raises(ConfigLoadError):
        run_classification(write_csv("t\nx\n"), tmp_path / "nope.json", tmp_path / "out.csv", config=test_config)


def test_missing_input_file(tmp_path, test_config, write_targets, make_target):
    targets = write_targets({"a": [make_target("61")]})
    with pytest.raises(InputReadError):
        run_classification(tmp_path / "missing.csv", targets, tmp_path / "out.csv", config=test_config)


def test_undecodable_header_still_scores_rows(tmp_path, test_config, write_targets, write_csv, make_target):
    targets = write_targets({"a": [make_target("61")]})
    out = tmp_path / "out.csv"
    result = run_classification(write_csv(b"te\xffxt\naaa\n"), targets, out, config=test_config)
    assert result.rows_scored == 1
    assert read_back(out)[1] == ["0", "aaa", "3.0"]


def test_default_settings_when_config_omitted(tmp_path, write_targets, write_csv, make_target):
    targets = write_targets({"a": [make_target("61")]})
    out = tmp_path / "out.csv"
    result = run_classification(write_csv("t\naaa\n"), targets, out)
    assert read_back(out)[1] == ["0", "aaa", "3.0"]
    assert result.workers == 1
