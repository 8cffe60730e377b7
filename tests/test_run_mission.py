from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

from telemetry.logger import read_records


ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "configs" / "rover.yaml"


def load_run_mission():
    spec = importlib.util.spec_from_file_location("run_mission", ROOT / "scripts" / "run_mission.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_batches_print_pose_after_each(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)
    telemetry_path = tmp_path / "logs" / "mission.jsonl"
    rc = load_run_mission().main(
        ["--config", str(CONFIG_PATH), "--telemetry-path", str(telemetry_path), "fff", "u", "q"]
    )
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [
        "(0, 0) NORTH",
        "(0, 2) NORTH stopped",
        "(0, 2) SOUTH",
        "(0, 2) SOUTH stopped",
    ]

    records = read_records(str(telemetry_path))
    assert [r["event"] for r in records] == ["land", "execute", "execute", "execute"]
    assert [r["failure"] for r in records[1:]] == ["unsafe_location", None, "unrecognized_instruction"]


def test_no_land_rejects_batch(
    tmp_path: Path, capsys: pytest.CaptureFixture
) -> None:
    rc = load_run_mission().main(
        ["--config", str(CONFIG_PATH), "--telemetry-path", str(tmp_path / "t.jsonl"), "--no-land", "f"]
    )
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["unknown"]
    assert "rejected" in captured.err
