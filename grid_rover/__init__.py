"""
Top-level package for the grid rover.

Components:
- directions: compass orientation and unit displacements
- rover: rover state and the fail-fast instruction loop
- commands: move/rotate/compose commands and their dispatch
- sensors: obstacle sensor interface and grid-backed sensors
- builder: rover construction from bindings, sensors or YAML config
- world: obstacle maps on the integer grid
- config: YAML mission configs
- render: pygame-based visualization (import explicitly)
"""

from .directions import Orientation, Position
from .commands import (
    Command,
    Compose,
    Failure,
    MoveBackward,
    MoveForward,
    RotateLeft,
    RotateRight,
    compose,
    move_backward,
    move_forward,
    rotate_left,
    rotate_right,
    run_command,
)
from .rover import Rover, RoverNotLanded, RoverState
from .sensors import BoundarySensor, CallableSensor, ObstacleSensor, Sensor
from .builder import RoverBuilder, build_rover_from_config
from .world import Bounds, GridWorld

__all__ = [
    "Orientation",
    "Position",
    "Command",
    "Compose",
    "Failure",
    "MoveBackward",
    "MoveForward",
    "RotateLeft",
    "RotateRight",
    "compose",
    "move_backward",
    "move_forward",
    "rotate_left",
    "rotate_right",
    "run_command",
    "Rover",
    "RoverNotLanded",
    "RoverState",
    "BoundarySensor",
    "CallableSensor",
    "ObstacleSensor",
    "Sensor",
    "RoverBuilder",
    "build_rover_from_config",
    "Bounds",
    "GridWorld",
]
