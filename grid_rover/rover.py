from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

from .commands import Command, Failure, run_command
from .directions import Orientation, Position
from .sensors import Sensor

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


class RoverNotLanded(RuntimeError):
    """Raised when instructions are sent to a rover that has not landed."""

    def __init__(self) -> None:
        super().__init__("RoverNotLanded")


@dataclass
class RoverState:
    """Pose and status flags of a rover on the grid.

    Attributes
    ----------
    position : tuple[int, int]
        (x, y) cell. Meaningless until ``landed`` is True.
    orientation : Orientation
        Heading. Meaningless until ``landed`` is True.
    landed : bool
        Set by the first landing, never cleared afterwards.
    stopped : bool
        Set when the current instruction batch halted early.
    """

    position: Position = (0, 0)
    orientation: Orientation = Orientation.NORTH
    landed: bool = False
    stopped: bool = False

    def next_position(self) -> Position:
        """Cell one step ahead along the current heading (state is not changed)."""
        dx, dy = self.orientation.displacement()
        x, y = self.position
        return x + dx, y + dy

    def apply_move(self) -> None:
        """Commit a move to ``next_position()``; the cell must already be validated."""
        self.position = self.next_position()

    def rotate_right(self) -> None:
        self.orientation = self.orientation.rotate_right()

    def rotate_left(self) -> None:
        self.orientation = self.orientation.rotate_left()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to a dict for logging/telemetry."""
        if not self.landed:
            return {"landed": False}
        x, y = self.position
        return {
            "landed": True,
            "x": x,
            "y": y,
            "orientation": self.orientation.name,
            "stopped": self.stopped,
        }

    def __str__(self) -> str:
        if not self.landed:
            return "unknown"
        x, y = self.position
        suffix = " stopped" if self.stopped else ""
        return f"({x}, {y}) {self.orientation.name}{suffix}"


class Rover:
    """Grid rover driven by single-character instructions.

    The binding table and sensor list are fixed at construction (normally by
    ``RoverBuilder``); only the rover state changes afterwards.
    """

    def __init__(
        self,
        commands: Mapping[str, Command],
        sensors: Sequence[Sensor],
        telemetry_logger: Optional["TelemetryLogger"] = None,
    ) -> None:
        self._commands: Dict[str, Command] = dict(commands)
        self._sensors: List[Sensor] = list(sensors)
        self._state = RoverState()
        self.telemetry_logger = telemetry_logger

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> RoverState:
        """Return a copy of current state."""
        return replace(self._state)

    @property
    def landed(self) -> bool:
        return self._state.landed

    @property
    def stopped(self) -> bool:
        return self._state.stopped

    @property
    def bindings(self) -> Dict[str, Command]:
        return dict(self._commands)

    @property
    def sensors(self) -> List[Sensor]:
        return list(self._sensors)

    def __str__(self) -> str:
        return str(self._state)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def land(self, position: Position, orientation: Orientation) -> None:
        """Place the rover at ``position`` facing ``orientation``.

        May be called at any time; a new landing overwrites the previous pose.
        """
        x, y = position
        self._state.position = (int(x), int(y))
        self._state.orientation = orientation
        self._state.landed = True
        self._state.stopped = False
        self._log("land", instructions=None, failure=None)

    def execute(self, instructions: str) -> Optional[Failure]:
        """Run a batch of instructions, stopping at the first failure.

        A blocked move or an unbound character sets the stopped flag and
        discards the rest of the batch; moves already made are kept. The
        failure is returned rather than raised.

        Raises
        ------
        RoverNotLanded
            If ``land`` has never been called. State is left untouched.
        """
        if not self._state.landed:
            raise RoverNotLanded()

        self._state.stopped = False
        failure: Optional[Failure] = None
        for char in instructions:
            command = self._commands.get(char)
            if command is None:
                failure = Failure.UNRECOGNIZED_INSTRUCTION
            else:
                failure = run_command(command, self._state, self._sensors)
            if failure is not None:
                self._state.stopped = True
                break

        self._log("execute", instructions=instructions, failure=failure)
        return failure

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def _log(self, event: str, instructions: Optional[str], failure: Optional[Failure]) -> None:
        if self.telemetry_logger is None:
            return
        self.telemetry_logger.log_step(
            {
                "event": event,
                "instructions": instructions,
                "failure": failure.value if failure is not None else None,
                "state": self._state.to_dict(),
            }
        )
