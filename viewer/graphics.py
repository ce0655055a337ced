"""
Graphics Engine for Wrapping Solves
Draws the level, bonuses, beacons and drones after every scheduling round
"""

import pygame
import numpy as np
from typing import List, Tuple

from wrapcore.geometry import Point, is_reaching
from wrapcore.level import Bonus, Cell, Level
from wrapcore.zones import zone_char


class Colors:
    """Color constants for visualization."""
    BLACK = (0, 0, 0)
    WHITE = (255, 255, 255)
    EMPTY = (225, 225, 225)
    BLOCKED = (80, 80, 80)
    WRAPPED = (250, 235, 120)
    BONUS = (40, 120, 230)
    SPAWN = (40, 170, 200)
    BEACON = (150, 60, 200)
    HAND = (255, 110, 20)

    # One color per drone, cycled
    DRONES = [
        (255, 80, 80),
        (80, 80, 255),
        (80, 200, 80),
        (255, 200, 80),
        (200, 80, 255),
        (80, 220, 220),
    ]


BONUS_LABELS = {
    Bonus.HAND: "B",
    Bonus.WHEELS: "F",
    Bonus.DRILL: "L",
    Bonus.TELEPORT: "R",
    Bonus.CLONE: "C",
}

STATUS_HEIGHT = 40


class GraphicsEngine:
    """
    Renders a Level and its drones into a pygame window.
    Read-only: never changes engine state.
    """

    def __init__(self, window_size: Tuple[int, int], cell_size: int = 6):
        """Initialize graphics engine. pygame.init() must already have run."""
        self.window_size = window_size
        self.cell_size = cell_size
        self.screen = pygame.display.set_mode(window_size)
        pygame.display.set_caption("Drone Wrapping Solver")
        self.font_small = pygame.font.Font(None, 18)
        self.frame_count = 0

    def fit_to_level(self, level: Level):
        """Shrink cells so the whole level fits the window."""
        usable_w = self.window_size[0]
        usable_h = self.window_size[1] - STATUS_HEIGHT
        self.cell_size = max(1, min(usable_w // level.width, usable_h // level.height))

    def _cell_rect(self, level: Level, p: Point) -> pygame.Rect:
        # y grows upwards in the level, downwards on screen
        top = STATUS_HEIGHT + (level.height - 1 - p.y) * self.cell_size
        return pygame.Rect(p.x * self.cell_size, top, self.cell_size, self.cell_size)

    def draw_level(self, level: Level):
        palette = np.array([Colors.EMPTY, Colors.BLOCKED, Colors.WRAPPED], dtype=np.uint8)
        # grid is (height, width) with y up; surfarray wants (width, height) with y down
        pixels = palette[level.grid[::-1, :].T]
        surface = pygame.surfarray.make_surface(pixels)
        surface = pygame.transform.scale(
            surface, (level.width * self.cell_size, level.height * self.cell_size))
        self.screen.blit(surface, (0, STATUS_HEIGHT))

        for p in level.spawns:
            pygame.draw.rect(self.screen, Colors.SPAWN, self._cell_rect(level, p))
        for p, bonus in level.bonuses.items():
            rect = self._cell_rect(level, p)
            pygame.draw.rect(self.screen, Colors.BONUS, rect)
            self._label(BONUS_LABELS[bonus], rect)
        for idx, p in enumerate(level.beacons):
            rect = self._cell_rect(level, p)
            pygame.draw.rect(self.screen, Colors.BEACON, rect)
            self._label(str(idx), rect)

    def draw_drones(self, level: Level, drones: List):
        for drone in drones:
            color = Colors.DRONES[drone.drone_id % len(Colors.DRONES)]
            for hand in drone.hands:
                if is_reaching(level, drone.pos, hand):
                    pygame.draw.rect(self.screen, Colors.HAND,
                                     self._cell_rect(level, drone.pos + hand), 1)
            rect = self._cell_rect(level, drone.pos)
            pygame.draw.rect(self.screen, color, rect)
            self._label(str(drone.drone_id), rect)

    def draw_status(self, level: Level, drones: List):
        zones = " ".join(f"{zone_char(z)}:{n}" for z, n in enumerate(level.zones_empty))
        pool = " ".join(f"{BONUS_LABELS[b]}x{n}" for b, n in level.collected.items())
        lines = [
            f"Empty {level.empty}  Zones {zones}  Collected {pool or '-'}",
            "  ".join(f"{d.drone_id}:{zone_char(d.zone)} W{d.wheels} L{d.drill}" for d in drones),
        ]
        for i, line in enumerate(lines):
            text = self.font_small.render(line, True, Colors.BLACK)
            self.screen.blit(text, (4, 4 + i * 16))

    def _label(self, text: str, rect: pygame.Rect):
        if self.cell_size < 10:
            return
        surface = self.font_small.render(text, True, Colors.WHITE)
        self.screen.blit(surface, surface.get_rect(center=rect.center))

    def render(self, level: Level, drones: List):
        """Draw one complete frame and flip it to the display."""
        self.screen.fill(Colors.WHITE)
        self.draw_level(level)
        self.draw_drones(level, drones)
        self.draw_status(level, drones)
        pygame.display.flip()
        self.frame_count += 1
