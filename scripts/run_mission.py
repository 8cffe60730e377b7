from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from grid_rover.builder import build_rover_from_config
from grid_rover.config import MissionConfig
from grid_rover.rover import RoverNotLanded
from telemetry.logger import TelemetryLogger


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Land a grid rover and run instruction batches.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/rover.yaml",
        help="Path to mission YAML config.",
    )
    parser.add_argument(
        "--map",
        type=str,
        default=None,
        help="JSON map overriding the configured one.",
    )
    parser.add_argument(
        "--telemetry-path",
        type=str,
        default=None,
        help="JSONL telemetry output (defaults to the configured path).",
    )
    parser.add_argument(
        "--no-land",
        action="store_true",
        help="Skip landing; batches are then rejected.",
    )
    parser.add_argument("batches", nargs="*", help="Instruction strings, executed in order.")
    args = parser.parse_args(argv)

    mission = MissionConfig.from_file(args.config)
    world = mission.load_world(args.map)

    telemetry_path = args.telemetry_path or mission.telemetry_path
    telemetry_logger = TelemetryLogger(telemetry_path) if telemetry_path else None

    rover = build_rover_from_config(mission.rover, world, telemetry_logger=telemetry_logger)
    try:
        if not args.no_land:
            rover.land(mission.landing_position, mission.landing_orientation)
        print(rover)
        for batch in args.batches:
            try:
                rover.execute(batch)
            except RoverNotLanded as exc:
                print(f"{batch}: rejected ({exc})", file=sys.stderr)
                return 1
            print(rover)
    finally:
        if telemetry_logger is not None:
            telemetry_logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
