from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from .world import GridWorld


class Sensor(ABC):
    """Abstract obstacle sensor consulted before every move.

    Implementations answer whether a grid cell is safe to occupy. The rover
    queries its sensors in order and treats the first unsafe answer as
    disqualifying, so a sensor may not be asked at all.
    """

    @abstractmethod
    def is_safe(self, x: int, y: int) -> bool:
        """Return True if the rover may enter cell (x, y)."""


class ObstacleSensor(Sensor):
    """Reports cells blocked in a ``GridWorld`` as unsafe."""

    def __init__(self, world: GridWorld) -> None:
        self.world = world

    def is_safe(self, x: int, y: int) -> bool:
        return not self.world.is_blocked(x, y)


class BoundarySensor(Sensor):
    """Reports cells outside the world bounds as unsafe.

    An unbounded world never triggers this sensor.
    """

    def __init__(self, world: GridWorld) -> None:
        self.world = world

    def is_safe(self, x: int, y: int) -> bool:
        return self.world.in_bounds(x, y)


class CallableSensor(Sensor):
    """Adapts a plain ``(x, y) -> bool`` predicate to the Sensor interface."""

    def __init__(self, predicate: Callable[[int, int], bool]) -> None:
        self.predicate = predicate

    def is_safe(self, x: int, y: int) -> bool:
        return bool(self.predicate(x, y))
