from pathlib import Path

import pytest

from schedsim.errors import ConfigurationError, ValidationError
from schedsim.models import Process
from schedsim.registry import ProcessRegistry
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":2},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs, ProcessRegistry)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 2
    assert procs[1].priority == 1
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\n,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].pid == "P2"
    assert procs[1].priority == 1


def test_load_rejects_bad_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,0,1\n")
    with pytest.raises(ValidationError):
        load_workload(p)


def test_load_rejects_malformed_entries(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":"soon","burst_time":3}]')
    with pytest.raises(ValidationError):
        load_workload(p)

    p.write_text('{"pid":"A"}')
    with pytest.raises(ValidationError):
        load_workload(p)


def test_load_rejects_unknown_format(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("- pid: A\n")
    with pytest.raises(ConfigurationError):
        load_workload(p)


def test_load_rejects_fractional_json_times(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":1.9,"burst_time":2.7}]')
    with pytest.raises(ValidationError):
        load_workload(p)


def test_load_accepts_padded_csv_numbers(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA, 2 , 3 , 4\n")
    procs = load_workload(p)
    assert (procs[0].arrival_time, procs[0].burst_time, procs[0].priority) == (2, 3, 4)


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_load_rejects_non_utf8_bytes(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    if suffix == ".json":
        p.write_bytes(b'[{"pid":"\xff","arrival_time":0,"burst_time":3}]')
    else:
        p.write_bytes(b"pid,arrival_time,burst_time,priority\n\xff,0,3,1\n")
    with pytest.raises(ValidationError):
        load_workload(p)
