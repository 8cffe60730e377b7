from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .commands import COMMAND_TYPES, PRIMITIVES, Command, compose
from .rover import Rover
from .sensors import BoundarySensor, ObstacleSensor, Sensor
from .world import GridWorld

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


SENSOR_TYPES: Dict[str, Callable[[GridWorld], Sensor]] = {
    "obstacle": ObstacleSensor,
    "boundary": BoundarySensor,
}


class RoverBuilder:
    """Collects instruction bindings and sensors, then builds a ``Rover``.

    Methods return the builder so calls can be chained::

        rover = (
            RoverBuilder()
            .program_command("f", move_forward())
            .program_command("r", rotate_right())
            .add_sensor(ObstacleSensor(world))
            .build()
        )
    """

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._sensors: List[Sensor] = []

    def program_command(self, char: str, command: Command) -> "RoverBuilder":
        """Bind ``command`` to instruction ``char``; a later binding replaces an earlier one."""
        if not isinstance(char, str) or len(char) != 1:
            raise ValueError(f"Instruction must be a single character, got {char!r}")
        if not isinstance(command, COMMAND_TYPES):
            raise TypeError(f"Not a rover command: {command!r}")
        self._commands[char] = command
        return self

    def add_sensor(self, sensor: Sensor) -> "RoverBuilder":
        if not isinstance(sensor, Sensor):
            raise TypeError(f"Not a sensor: {sensor!r}")
        self._sensors.append(sensor)
        return self

    def build(self, telemetry_logger: Optional["TelemetryLogger"] = None) -> Rover:
        return Rover(self._commands, self._sensors, telemetry_logger=telemetry_logger)


# ---------------------------------------------------------------------------
# Config-driven construction
# ---------------------------------------------------------------------------


def resolve_command(entry: Union[str, Sequence[Any]], bound: Mapping[str, Command]) -> Command:
    """Turn a config entry into a command.

    ``entry`` is a primitive name (``forward``, ``backward``, ``left``,
    ``right``), a character already bound in ``bound``, or a list of such
    entries (nested lists allowed) forming a composite.
    """
    if isinstance(entry, str):
        key = entry.strip()
        if key.lower() in PRIMITIVES:
            return PRIMITIVES[key.lower()]()
        if key in bound:
            return bound[key]
        raise ValueError(f"Unknown command: {entry!r}")
    if isinstance(entry, (list, tuple)):
        return compose([resolve_command(item, bound) for item in entry])
    raise ValueError(f"Malformed command entry: {entry!r}")


def build_rover_from_config(
    rover_cfg: Dict[str, Any],
    world: GridWorld,
    telemetry_logger: Optional["TelemetryLogger"] = None,
) -> Rover:
    """Build a rover from the ``rover`` section of a mission config.

    Bindings are processed in file order, so composites may refer to
    characters bound above them.
    """
    builder = RoverBuilder()
    bound: Dict[str, Command] = {}
    for char, entry in (rover_cfg.get("commands") or {}).items():
        command = resolve_command(entry, bound)
        builder.program_command(str(char), command)
        bound[str(char)] = command

    for sensor_cfg in rover_cfg.get("sensors") or []:
        kind = sensor_cfg["type"] if isinstance(sensor_cfg, dict) else str(sensor_cfg)
        if kind not in SENSOR_TYPES:
            raise ValueError(f"Unknown sensor type: {kind!r}")
        builder.add_sensor(SENSOR_TYPES[kind](world))

    return builder.build(telemetry_logger=telemetry_logger)
