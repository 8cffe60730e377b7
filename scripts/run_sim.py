from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pygame

from grid_rover.builder import build_rover_from_config
from grid_rover.config import MissionConfig, load_yaml
from grid_rover.render import PygameRenderer
from telemetry.logger import TelemetryLogger


def main() -> None:
    parser = argparse.ArgumentParser(description="Keyboard teleop for the grid rover.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/rover.yaml",
        help="Path to mission YAML config.",
    )
    args = parser.parse_args()

    cfg = load_yaml(args.config)
    render_cfg = cfg.get("render", {})
    mission = MissionConfig.from_dict(cfg, base_dir=str(Path(args.config).resolve().parent))
    world = mission.load_world()

    telemetry_logger = TelemetryLogger(mission.telemetry_path) if mission.telemetry_path else None
    rover = build_rover_from_config(mission.rover, world, telemetry_logger=telemetry_logger)
    rover.land(mission.landing_position, mission.landing_orientation)

    renderer = PygameRenderer(
        world=world,
        window_width=int(render_cfg.get("window_width", 660)),
        window_height=int(render_cfg.get("window_height", 660)),
        view=world.extent(margin=2),
        show_trail=bool(render_cfg.get("show_trail", True)),
        trail_max_length=int(render_cfg.get("trail_max_length", 500)),
    )

    keys = "".join(sorted(rover.bindings))
    print(f"Keyboard teleop: bound keys [{keys}], ENTER re-lands, ESC to quit.")

    status = str(rover)
    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_RETURN:
                        rover.land(mission.landing_position, mission.landing_orientation)
                        status = str(rover)
                    elif event.unicode:
                        # Unbound keys are sent too; the rover reports them as stopped.
                        failure = rover.execute(event.unicode)
                        status = f"{event.unicode!r}: {rover}"
                        if failure is not None:
                            status += f" ({failure.value})"

            renderer.tick(int(render_cfg.get("fps", 30)))
            renderer.draw(rover.state, status=status)
    finally:
        renderer.close()
        if telemetry_logger is not None:
            telemetry_logger.close()


if __name__ == "__main__":
    main()
