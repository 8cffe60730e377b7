from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .directions import Orientation, Position
from .world import GridWorld


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class MissionConfig:
    """Everything needed to put a rover on a map.

    Attributes
    ----------
    rover : dict
        ``rover`` section: ``commands`` bindings and ``sensors`` list.
    landing_position : tuple[int, int]
        Cell the rover lands on.
    landing_orientation : Orientation
        Heading at landing.
    map_path : str, optional
        JSON map file; relative paths resolve against ``base_dir``.
    telemetry_path : str, optional
        JSONL file for telemetry records.
    """

    rover: Dict[str, Any]
    landing_position: Position = (0, 0)
    landing_orientation: Orientation = Orientation.NORTH
    map_path: Optional[str] = None
    telemetry_path: Optional[str] = None
    base_dir: str = "."
    map_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any], base_dir: str = ".") -> "MissionConfig":
        rover_cfg = dict(cfg.get("rover") or {})
        if not rover_cfg.get("commands"):
            raise ValueError("Config has no rover.commands bindings")
        # YAML 1.1 reads unquoted on/off/yes/no keys as booleans.
        for key in rover_cfg["commands"]:
            if not isinstance(key, str):
                raise ValueError(f"Command key {key!r} must be a quoted one-character string")

        landing_position, landing_orientation = parse_landing(rover_cfg.pop("landing", None))
        map_cfg = cfg.get("map") or {}
        telemetry_cfg = cfg.get("telemetry") or {}
        return cls(
            rover=rover_cfg,
            landing_position=landing_position,
            landing_orientation=landing_orientation,
            map_path=map_cfg.get("path"),
            telemetry_path=telemetry_cfg.get("path"),
            base_dir=base_dir,
            map_data={k: v for k, v in map_cfg.items() if k != "path"},
        )

    @classmethod
    def from_file(cls, path: str) -> "MissionConfig":
        """Load a YAML mission config; relative map paths resolve against the config file's directory."""
        return cls.from_dict(load_yaml(path), base_dir=str(Path(path).resolve().parent))

    def resolve(self, path: str) -> str:
        p = Path(path)
        if not p.is_absolute():
            p = Path(self.base_dir) / p
        return str(p)

    def load_world(self, override_path: Optional[str] = None) -> GridWorld:
        """World from ``override_path``, the configured map file, or inline map data."""
        if override_path is not None:
            return GridWorld.from_map_file(override_path)
        if self.map_path is not None:
            return GridWorld.from_map_file(self.resolve(self.map_path))
        return GridWorld.from_map_dict(self.map_data)


def parse_landing(landing: Any) -> Tuple[Position, Orientation]:
    """Read a landing pose from ``{x, y, orientation}`` or ``[x, y(, orientation)]``.

    Missing coordinates default to 0 and a missing orientation to NORTH.
    """
    if landing is None:
        return (0, 0), Orientation.NORTH
    if isinstance(landing, dict):
        x = landing.get("x", 0)
        y = landing.get("y", 0)
        orientation = landing.get("orientation", "NORTH")
    elif isinstance(landing, (list, tuple)) and len(landing) in (2, 3):
        x, y = landing[0], landing[1]
        orientation = landing[2] if len(landing) == 3 else "NORTH"
    else:
        raise ValueError(f"Malformed landing: {landing!r}")
    try:
        position = (int(x), int(y))
    except (TypeError, ValueError):
        raise ValueError(f"Landing coordinates must be integers: {landing!r}") from None
    return position, Orientation.parse(orientation)
