from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from typing import List

import pytest

from telemetry.logger import TelemetryLogger


ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "configs" / "rover.yaml"


def load_run_sim():
    spec = importlib.util.spec_from_file_location("run_sim", ROOT / "scripts" / "run_sim.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_loop_error_still_closes_renderer_and_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    run_sim = load_run_sim()
    closed: List[str] = []

    class StubRenderer:
        def __init__(self, **kwargs) -> None:
            pass

        def tick(self, target_fps: int) -> float:
            return 0.0

        def draw(self, state, status: str = "") -> None:
            pass

        def close(self) -> None:
            closed.append("renderer")

    class TrackingLogger(TelemetryLogger):
        def close(self) -> None:
            closed.append("telemetry")
            super().close()

    def broken_events():
        raise RuntimeError("display lost")

    monkeypatch.setattr(run_sim, "PygameRenderer", StubRenderer)
    monkeypatch.setattr(run_sim, "TelemetryLogger", TrackingLogger)
    monkeypatch.setattr(run_sim.pygame.event, "get", broken_events)
    monkeypatch.setattr(sys, "argv", ["run_sim.py", "--config", str(CONFIG_PATH)])
    monkeypatch.chdir(tmp_path)

    with pytest.raises(RuntimeError):
        run_sim.main()
    assert closed == ["renderer", "telemetry"]
