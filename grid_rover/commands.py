"""
Rover command set.

Commands are immutable values, so one instance may be bound to several
instruction characters and reused inside several composites. Execution goes
through a single dispatch function, ``run_command``, which returns ``None``
on success or the ``Failure`` that stopped the command.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from .sensors import Sensor

if TYPE_CHECKING:
    from .rover import RoverState


class Failure(Enum):
    """Reasons an instruction could not be carried out."""

    UNSAFE_LOCATION = "unsafe_location"
    UNRECOGNIZED_INSTRUCTION = "unrecognized_instruction"


@dataclass(frozen=True)
class MoveForward:
    """Advance one cell along the current heading."""


@dataclass(frozen=True)
class MoveBackward:
    """Retreat one cell against the current heading, keeping the heading."""


@dataclass(frozen=True)
class RotateLeft:
    """Turn 90 degrees counter-clockwise in place."""


@dataclass(frozen=True)
class RotateRight:
    """Turn 90 degrees clockwise in place."""


@dataclass(frozen=True)
class Compose:
    """Ordered sub-commands executed as one fail-fast unit."""

    commands: Tuple["Command", ...] = ()


Command = Union[MoveForward, MoveBackward, RotateLeft, RotateRight, Compose]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def run_command(
    command: Command,
    state: "RoverState",
    sensors: Sequence[Sensor],
) -> Optional[Failure]:
    """Apply ``command`` to ``state``, consulting ``sensors`` before any move.

    Returns None on success. A blocked move returns
    ``Failure.UNSAFE_LOCATION`` and leaves position and orientation unchanged.
    """
    if isinstance(command, MoveForward):
        return _move_forward(state, sensors)
    if isinstance(command, MoveBackward):
        return _move_backward(state, sensors)
    if isinstance(command, RotateLeft):
        state.rotate_left()
        return None
    if isinstance(command, RotateRight):
        state.rotate_right()
        return None
    if isinstance(command, Compose):
        for child in command.commands:
            failure = run_command(child, state, sensors)
            if failure is not None:
                return failure
        return None
    raise TypeError(f"Not a rover command: {command!r}")


def _move_forward(state: "RoverState", sensors: Sequence[Sensor]) -> Optional[Failure]:
    x, y = state.next_position()
    for sensor in sensors:
        if not sensor.is_safe(x, y):
            return Failure.UNSAFE_LOCATION
    state.apply_move()
    return None


def _move_backward(state: "RoverState", sensors: Sequence[Sensor]) -> Optional[Failure]:
    # Face the opposite way, move, then turn back on both paths.
    state.rotate_right()
    state.rotate_right()
    failure = _move_forward(state, sensors)
    state.rotate_right()
    state.rotate_right()
    return failure


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def move_forward() -> MoveForward:
    return MoveForward()


def move_backward() -> MoveBackward:
    return MoveBackward()


def rotate_left() -> RotateLeft:
    return RotateLeft()


def rotate_right() -> RotateRight:
    return RotateRight()


def compose(*commands: Union[Command, Sequence[Command]]) -> Compose:
    """Build a composite from commands or iterables of commands.

    ``compose(a, b)`` and ``compose([a, b])`` are equivalent.
    """
    flat: list = []
    for item in commands:
        if isinstance(item, (list, tuple)):
            flat.extend(item)
        else:
            flat.append(item)
    for item in flat:
        if not isinstance(item, COMMAND_TYPES):
            raise TypeError(f"Not a rover command: {item!r}")
    return Compose(tuple(flat))


COMMAND_TYPES = (MoveForward, MoveBackward, RotateLeft, RotateRight, Compose)

PRIMITIVES = {
    "forward": move_forward,
    "backward": move_backward,
    "left": rotate_left,
    "right": rotate_right,
}
