from __future__ import annotations

from typing import List, Tuple

import numpy as np
import pygame

from .directions import Position
from .rover import RoverState
from .world import Bounds, GridWorld, follow_view


Color = Tuple[int, int, int]

# Dark theme palette
THEME = {
    "bg": (18, 22, 32),
    "grid": (28, 34, 48),
    "bounds": (55, 65, 88),
    "obstacle_fill": (45, 52, 70),
    "obstacle_edge": (65, 75, 98),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_arrow": (140, 240, 255),
    "rover_stopped": (255, 90, 90),
    "trail_start": (60, 160, 200),
    "trail_end": (100, 220, 255),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
}


class PygameRenderer:
    """Top-down view of a ``GridWorld`` with the rover and its trail.

    The visible area starts at ``view`` (in cells) and scrolls to keep the
    rover at least ``follow_margin`` cells from its edge. Grid y is flipped so
    that north is up on screen.
    """

    def __init__(
        self,
        world: GridWorld,
        window_width: int,
        window_height: int,
        view: Bounds,
        show_trail: bool = True,
        trail_max_length: int = 500,
        follow_margin: int = 2,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Grid Rover")
        self.screen = pygame.display.set_mode((window_width, window_height))
        self.clock = pygame.time.Clock()

        self.world = world
        self.view = view
        self.window_width = window_width
        self.window_height = window_height
        self.show_trail = show_trail
        self.trail_max_length = trail_max_length
        self.follow_margin = follow_margin
        self.trail: List[Position] = []

        self.cell_px = max(4, min(window_width // view.width, window_height // view.height))

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        sx = (x - self.view.xmin) * self.cell_px
        sy = (self.view.ymax - y) * self.cell_px
        return pygame.Rect(sx, sy, self.cell_px, self.cell_px)

    def _cell_center(self, x: int, y: int) -> Tuple[int, int]:
        return self._cell_rect(x, y).center

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def draw(self, state: RoverState, status: str = "") -> None:
        """Render one frame."""
        if state.landed:
            self.view = follow_view(self.view, state.position, self.follow_margin)
        self.screen.fill(THEME["bg"])
        self._draw_cells()

        if state.landed:
            if self.show_trail:
                if not self.trail or self.trail[-1] != state.position:
                    self.trail.append(state.position)
                self.trail = self.trail[-self.trail_max_length :]
                self._draw_trail()
            self._draw_rover(state)

        self._draw_hud(status or str(state))
        pygame.display.flip()

    def _draw_cells(self) -> None:
        grid = self.world.occupancy(self.view)
        rows, cols = grid.shape
        for row in range(rows):
            for col in range(cols):
                rect = self._cell_rect(self.view.xmin + col, self.view.ymax - row)
                if grid[row, col]:
                    pygame.draw.rect(self.screen, THEME["obstacle_fill"], rect)
                    pygame.draw.rect(self.screen, THEME["obstacle_edge"], rect, 1)
                else:
                    pygame.draw.rect(self.screen, THEME["grid"], rect, 1)

        if self.world.bounds is not None:
            b = self.world.bounds
            top_left = self._cell_rect(b.xmin, b.ymax)
            outline = pygame.Rect(top_left.x, top_left.y, b.width * self.cell_px, b.height * self.cell_px)
            pygame.draw.rect(self.screen, THEME["bounds"], outline, 2)

    def _draw_trail(self) -> None:
        if len(self.trail) < 2:
            return
        pts = [self._cell_center(x, y) for x, y in self.trail]
        start = np.array(THEME["trail_start"], dtype=float)
        end = np.array(THEME["trail_end"], dtype=float)
        n = len(pts) - 1
        for i in range(n):
            t = (i + 1) / n
            color = tuple(int(c) for c in start + t * (end - start))
            pygame.draw.line(self.screen, color, pts[i], pts[i + 1], 2 if i == n - 1 else 1)

    def _draw_rover(self, state: RoverState) -> None:
        x, y = state.position
        center = self._cell_center(x, y)
        radius_px = max(2, int(self.cell_px * 0.4))
        fill = THEME["rover_stopped"] if state.stopped else THEME["rover_fill"]
        pygame.draw.circle(self.screen, fill, center, radius_px, 0)
        pygame.draw.circle(self.screen, THEME["rover_outline"], center, radius_px, 2)

        # Heading arrow; screen y grows downward
        dx, dy = state.orientation.displacement()
        head = (center[0] + dx * radius_px, center[1] - dy * radius_px)
        pygame.draw.line(self.screen, THEME["rover_arrow"], center, head, 3)

    def _draw_hud(self, text: str) -> None:
        pad = 10
        font = pygame.font.SysFont("monospace", 13)
        surf = font.render(f"  {text}  ", True, THEME["hud_text"])
        r = surf.get_rect(topleft=(pad, pad))
        panel = r.inflate(pad, pad)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        self.screen.blit(surf, (panel.x + 4, panel.y + 4))

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
