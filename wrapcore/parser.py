"""
Level Description Parser

.desc FORMAT:  contour#start#obstacles#bonuses
- contour: closed rectilinear polygon "(x,y),(x,y),..." bounding the map
- start: "(x,y)" cell the first drone starts on
- obstacles: ';'-separated polygons cut out of the map (may be empty)
- bonuses: ';'-separated "<code>(x,y)" entries, code in B F L R C, and X
  for spawn points (may be empty)

Cells are filled by even-odd parity over the vertical polygon edges: a
cell is inside when an odd number of vertical edges lie at or left of it
on its row.

The ASCII reader is a small grid syntax used by tests and experiments:
'#' blocked, '.' empty, '@' start, 'X' spawn, B/F/L/R/C bonuses. The first
text row is the top of the map.
"""

import re
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from wrapcore.drone import Drone
from wrapcore.errors import LevelFormatError
from wrapcore.geometry import Point
from wrapcore.level import Bonus, Cell, Level
from wrapcore.zones import partition_zones

POINT_RE = re.compile(r"\((-?\d+),(-?\d+)\)")
BONUS_RE = re.compile(r"^([BFLRCX])\((-?\d+),(-?\d+)\)$")

SPAWN_CODE = "X"


def parse_point(s: str) -> Point:
    match = POINT_RE.fullmatch(s.strip())
    if match is None:
        raise LevelFormatError(f"Bad point: {s!r}")
    return Point(int(match.group(1)), int(match.group(2)))


def parse_contour(s: str) -> List[Point]:
    points = [Point(int(x), int(y)) for x, y in POINT_RE.findall(s)]
    if len(points) < 4:
        raise LevelFormatError(f"Polygon needs at least 4 vertices: {s!r}")
    return points


def parse_bonus(s: str) -> Tuple[Point, str]:
    match = BONUS_RE.match(s.strip())
    if match is None:
        raise LevelFormatError(f"Bad bonus entry: {s!r}")
    code, x, y = match.groups()
    return Point(int(x), int(y)), code


def rasterize(polygons: List[List[Point]]) -> np.ndarray:
    """Fill a (height, width) Cell matrix from closed rectilinear polygons."""
    width = max(p.x for poly in polygons for p in poly)
    height = max(p.y for poly in polygons for p in poly)
    if width <= 0 or height <= 0:
        raise LevelFormatError("Map has no area")

    # edges[y, x]: number of vertical edges at column x spanning row y
    edges = np.zeros((height, width + 1), dtype=np.int32)
    for poly in polygons:
        for p1, p2 in zip(poly, poly[1:] + poly[:1]):
            if p1.x != p2.x and p1.y != p2.y:
                raise LevelFormatError(f"Edge {p1}-{p2} is not axis aligned")
            if p1.x == p2.x and p1.y != p2.y:
                if p1.x < 0 or min(p1.y, p2.y) < 0:
                    raise LevelFormatError(f"Edge {p1}-{p2} has negative coordinates")
                edges[min(p1.y, p2.y):max(p1.y, p2.y), p1.x] += 1

    inside = np.cumsum(edges[:, :width], axis=1) % 2 == 1
    return np.where(inside, Cell.EMPTY, Cell.BLOCKED).astype(np.int8)


def _build(grid: np.ndarray, start: Point, spawns: Set[Point],
           bonuses: Dict[Point, Bonus], seed: int) -> Tuple[Level, Drone]:
    level = Level(grid, spawns=spawns, bonuses=bonuses)
    if not level.is_walkable(start):
        raise LevelFormatError(f"Start {start} is not on an open cell")
    for pos in list(spawns) + list(bonuses):
        if not level.is_walkable(pos):
            raise LevelFormatError(f"Bonus or spawn at {pos} is not on an open cell")
    partition_zones(level, seed=seed)
    return level, Drone(start)


def parse_level(text: str, seed: int = 0) -> Tuple[Level, Drone]:
    """
    Parse a .desc level description.

    Args:
        text: file contents
        seed: zone partition seed

    Returns:
        (level with zones partitioned, first drone at the start point)
    """
    fragments = text.strip().split("#")
    if len(fragments) != 4:
        raise LevelFormatError(f"Expected 4 '#'-separated sections, got {len(fragments)}")
    contour_str, start_str, obstacles_str, bonuses_str = fragments

    polygons = [parse_contour(contour_str)]
    polygons.extend(parse_contour(s) for s in obstacles_str.split(";") if s.strip())
    grid = rasterize(polygons)

    spawns: Set[Point] = set()
    bonuses: Dict[Point, Bonus] = {}
    for entry in bonuses_str.split(";"):
        if not entry.strip():
            continue
        pos, code = parse_bonus(entry)
        if code == SPAWN_CODE:
            spawns.add(pos)
        else:
            bonuses[pos] = Bonus(code)

    return _build(grid, parse_point(start_str), spawns, bonuses, seed)


def parse_ascii_map(text: str, seed: int = 0, start: Optional[Point] = None) -> Tuple[Level, Drone]:
    """Build a level from an ASCII drawing (first row = top of the map)."""
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if not rows or any(len(r) != len(rows[0]) for r in rows):
        raise LevelFormatError("ASCII map rows must be non-empty and equally long")

    height, width = len(rows), len(rows[0])
    grid = np.full((height, width), Cell.EMPTY, dtype=np.int8)
    spawns: Set[Point] = set()
    bonuses: Dict[Point, Bonus] = {}
    for row_idx, row in enumerate(rows):
        y = height - 1 - row_idx
        for x, ch in enumerate(row):
            pos = Point(x, y)
            if ch == "#":
                grid[y, x] = Cell.BLOCKED
            elif ch == "@":
                start = pos
            elif ch == SPAWN_CODE:
                spawns.add(pos)
            elif ch in "BFLRC":
                bonuses[pos] = Bonus(ch)
            elif ch != ".":
                raise LevelFormatError(f"Unknown map character {ch!r} at {pos}")

    if start is None:
        raise LevelFormatError("ASCII map has no start cell '@'")
    return _build(grid, start, spawns, bonuses, seed)
