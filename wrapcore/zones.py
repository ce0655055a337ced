"""
Zone Partitioner

Splits the empty cells of a level into territories so concurrently active
drones spread out instead of chasing the same cells.

One zone per drone the level can ever have (Clone bonuses on the map + 1).
Seeds are distinct empty cells drawn from a seeded generator, then a single
multi-source BFS floods outward through empty cells; the first seed to
reach a cell owns it.
"""

import random
from collections import deque
from typing import List, Optional

from wrapcore.geometry import Point
from wrapcore.level import Bonus, Cell, Level, UNDECIDED_ZONE

NEIGHBORS = [(0, 1), (0, -1), (1, 0), (-1, 0)]


def zone_count(level: Level) -> int:
    """One zone for the starting drone plus one per Clone bonus."""
    return level.on_map(Bonus.CLONE) + 1


def partition_zones(level: Level, count: Optional[int] = None, seed: int = 0) -> List[Point]:
    """
    Assign a zone id to every empty cell reachable from a seed.

    Args:
        level: level to label in place (zones, zones_empty)
        count: number of zones; defaults to zone_count(level)
        seed: random seed for picking zone seeds

    Returns:
        The seed cell of each zone, indexed by zone id.
    """
    if count is None:
        count = zone_count(level)
    rng = random.Random(seed)
    candidates = level.empty_cells()
    seeds = rng.sample(candidates, min(count, len(candidates)))

    level.zones.fill(UNDECIDED_ZONE)
    level.zones_empty = [0] * len(seeds)

    queue = deque()
    for zone, cell in enumerate(seeds):
        level.zones[cell.y, cell.x] = zone
        level.zones_empty[zone] += 1
        queue.append(cell)

    while queue:
        cell = queue.popleft()
        zone = int(level.zones[cell.y, cell.x])
        for dx, dy in NEIGHBORS:
            nx, ny = cell.x + dx, cell.y + dy
            if (0 <= nx < level.width and 0 <= ny < level.height
                    and level.grid[ny, nx] == Cell.EMPTY
                    and level.zones[ny, nx] == UNDECIDED_ZONE):
                level.zones[ny, nx] = zone
                level.zones_empty[zone] += 1
                queue.append(Point(nx, ny))
    return seeds


def zone_char(zone: int) -> str:
    """Display letter of a zone ('A', 'B', ...; '-' when undecided)."""
    return chr(ord('A') + zone) if zone != UNDECIDED_ZONE else '-'
