from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set
import json

import numpy as np

from .directions import Position


@dataclass(frozen=True)
class Bounds:
    """Inclusive rectangular extent of the explorable area, in grid cells."""

    xmin: int
    ymin: int
    xmax: int
    ymax: int

    def contains(self, x: int, y: int) -> bool:
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    @property
    def width(self) -> int:
        return self.xmax - self.xmin + 1

    @property
    def height(self) -> int:
        return self.ymax - self.ymin + 1


class GridWorld:
    """Integer grid with blocked cells and optional bounds.

    The grid itself is unbounded: cells outside ``bounds`` exist and are free
    unless listed as obstacles. Bounds only matter to sensors that choose to
    enforce them (see ``BoundarySensor``) and to rendering.

    Coordinates follow the rover convention:
    - x increases to the east
    - y increases to the north
    """

    def __init__(
        self,
        obstacles: Optional[Iterable[Position]] = None,
        bounds: Optional[Bounds] = None,
    ) -> None:
        self.obstacles: Set[Position] = set()
        self.bounds = bounds
        for x, y in obstacles or ():
            self.add_obstacle(x, y)

    # ------------------------------------------------------------------
    # Map loading
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any]) -> "GridWorld":
        """Create a world from a dict with ``bounds``, ``obstacles`` and ``grid``.

        ``grid`` is an optional list of equal-length strings, ``#`` marking a
        blocked cell. Row 0 is the northernmost row; its first character sits
        at ``grid_origin`` (defaults to the top-left corner of ``bounds``, or
        (0, len(grid) - 1) when unbounded).
        """
        bounds = None
        bounds_data = data.get("bounds")
        if bounds_data is not None:
            bounds = Bounds(
                xmin=int(bounds_data["xmin"]),
                ymin=int(bounds_data["ymin"]),
                xmax=int(bounds_data["xmax"]),
                ymax=int(bounds_data["ymax"]),
            )
            if bounds.xmin > bounds.xmax or bounds.ymin > bounds.ymax:
                raise ValueError(f"Empty map bounds: {bounds_data}")

        world = cls(bounds=bounds)
        for o in data.get("obstacles", []):
            world.add_obstacle(int(o["x"]), int(o["y"]))

        rows = data.get("grid")
        if rows:
            if "grid_origin" in data:
                origin = (int(data["grid_origin"]["x"]), int(data["grid_origin"]["y"]))
            elif bounds is not None:
                origin = (bounds.xmin, bounds.ymax)
            else:
                origin = (0, len(rows) - 1)
            world.add_raster(parse_grid_rows(rows), origin)
        return world

    @classmethod
    def from_map_file(cls, path: str) -> "GridWorld":
        """Create a world from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_map_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the world to a map dict (obstacles listed cell by cell)."""
        data: Dict[str, Any] = {
            "obstacles": [{"x": x, "y": y} for x, y in sorted(self.obstacles)],
        }
        if self.bounds is not None:
            b = self.bounds
            data["bounds"] = {"xmin": b.xmin, "ymin": b.ymin, "xmax": b.xmax, "ymax": b.ymax}
        return data

    # ------------------------------------------------------------------
    # Obstacles
    # ------------------------------------------------------------------
    def add_obstacle(self, x: int, y: int) -> None:
        self.obstacles.add((int(x), int(y)))

    def remove_obstacle(self, x: int, y: int) -> None:
        self.obstacles.discard((int(x), int(y)))

    def add_raster(self, blocked: np.ndarray, origin: Position) -> None:
        """Mark cells from a boolean raster whose [0, 0] entry lies at ``origin``.

        Raster rows run southward and columns run eastward.
        """
        ox, oy = origin
        for row, col in np.argwhere(blocked):
            self.add_obstacle(ox + int(col), oy - int(row))

    def is_blocked(self, x: int, y: int) -> bool:
        return (x, y) in self.obstacles

    def in_bounds(self, x: int, y: int) -> bool:
        """True when the cell lies inside the bounds, or when the world is unbounded."""
        return self.bounds is None or self.bounds.contains(x, y)

    # ------------------------------------------------------------------
    # Rasterization
    # ------------------------------------------------------------------
    def extent(self, margin: int = 1) -> Bounds:
        """Bounds if set, else the obstacle bounding box padded by ``margin``."""
        if self.bounds is not None:
            return self.bounds
        if not self.obstacles:
            return Bounds(-margin, -margin, margin, margin)
        xs = [x for x, _ in self.obstacles]
        ys = [y for _, y in self.obstacles]
        return Bounds(min(xs) - margin, min(ys) - margin, max(xs) + margin, max(ys) + margin)

    def occupancy(self, area: Optional[Bounds] = None) -> np.ndarray:
        """Boolean raster of blocked cells over ``area`` (defaults to ``extent()``).

        Row 0 is the northernmost row (``area.ymax``), matching map ``grid`` rows.
        """
        area = area or self.extent()
        grid = np.zeros((area.height, area.width), dtype=bool)
        for x, y in self.obstacles:
            if area.contains(x, y):
                grid[area.ymax - y, x - area.xmin] = True
        return grid


def parse_grid_rows(rows: List[str]) -> np.ndarray:
    """Convert ``#``/``.`` strings to a boolean raster."""
    if not rows:
        return np.zeros((0, 0), dtype=bool)
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise ValueError("Map grid rows must all have the same length")
    unknown = set("".join(rows)) - {"#", "."}
    if unknown:
        raise ValueError(f"Unexpected map grid characters: {sorted(unknown)}")
    return np.array([[c == "#" for c in r] for r in rows], dtype=bool)


def cells_to_rows(grid: np.ndarray) -> List[str]:
    """Inverse of ``parse_grid_rows``."""
    return ["".join("#" if v else "." for v in row) for row in np.asarray(grid, dtype=bool)]


def trail_extent(world: GridWorld, trail: Iterable[Position], margin: int = 1) -> Bounds:
    """Smallest area covering the world extent and every cell of ``trail``."""
    area = world.extent(margin)
    xs: List[int] = [area.xmin, area.xmax]
    ys: List[int] = [area.ymin, area.ymax]
    for x, y in trail:
        xs.extend((x - margin, x + margin))
        ys.extend((y - margin, y + margin))
    return Bounds(min(xs), min(ys), max(xs), max(ys))



def follow_view(view: Bounds, position: Position, margin: int = 1) -> Bounds:
    """Shift ``view`` by the least amount that keeps ``position`` ``margin`` cells inside.

    The view keeps its size; a view too small for the margin centres on the cell.
    """
    x, y = position
    mx = min(margin, (view.width - 1) // 2)
    my = min(margin, (view.height - 1) // 2)
    dx = min(0, x - mx - view.xmin) + max(0, x + mx - view.xmax)
    dy = min(0, y - my - view.ymin) + max(0, y + my - view.ymax)
    if dx == 0 and dy == 0:
        return view
    return Bounds(view.xmin + dx, view.ymin + dy, view.xmax + dx, view.ymax + dy)
