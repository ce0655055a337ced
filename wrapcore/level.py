"""
Level Model - the shared mutable world of one puzzle instance

Holds the cell matrix and everything drones contend for: remaining empty
counts (global and per zone), spawn points, placed beacons, bonuses lying
on the grid and the pool of collected bonuses shared by all drones.

All cell mutation goes through wrap() and drill(), which keep the empty
counters in lockstep with the matrix.
"""

from collections import Counter
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Optional, Set

import numpy as np

from wrapcore.errors import InvariantViolation
from wrapcore.geometry import Point


class Cell(IntEnum):
    """Cell states as stored in the grid matrix."""
    EMPTY = 0
    BLOCKED = 1
    WRAPPED = 2


class Bonus(Enum):
    """Single-use pickups. Values are the codes used in level descriptions."""
    HAND = "B"
    WHEELS = "F"
    DRILL = "L"
    TELEPORT = "R"
    CLONE = "C"


UNDECIDED_ZONE = -1


def obstacle_weights(grid: np.ndarray) -> np.ndarray:
    """Number of 4-neighbours that are blocked or off the grid, per cell."""
    blocked = np.pad(grid == Cell.BLOCKED, 1, constant_values=True).astype(np.uint8)
    return (blocked[:-2, 1:-1] + blocked[2:, 1:-1]
            + blocked[1:-1, :-2] + blocked[1:-1, 2:]).astype(np.uint8)


class Level:
    """
    Grid world shared by every drone of a solve.

    The matrix is indexed grid[y, x]; y = 0 is the bottom row.
    """

    def __init__(self, grid: np.ndarray, spawns: Iterable[Point] = (),
                 bonuses: Optional[Dict[Point, Bonus]] = None):
        """
        Build a level from a cell matrix.

        Args:
            grid: (height, width) array of Cell values
            spawns: cells where a Clone may be activated
            bonuses: uncollected bonuses by position
        """
        self.grid = np.asarray(grid, dtype=np.int8).copy()
        self.height, self.width = self.grid.shape
        self.weights = obstacle_weights(self.grid)

        # Zones are assigned later by zones.partition_zones()
        self.zones = np.full(self.grid.shape, UNDECIDED_ZONE, dtype=np.int16)
        self.zones_empty: List[int] = []

        self.empty = int(np.count_nonzero(self.grid == Cell.EMPTY))
        self.spawns: Set[Point] = set(spawns)
        self.beacons: List[Point] = []
        self.bonuses: Dict[Point, Bonus] = dict(bonuses or {})
        self.collected: Counter = Counter()

    # ── Cell access ──────────────────────────────────────────────────────

    def valid(self, p: Point) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def _check_bounds(self, p: Point):
        if not self.valid(p):
            raise InvariantViolation(f"Cell {p} outside {self.width}x{self.height} grid")

    def cell_at(self, p: Point) -> Cell:
        self._check_bounds(p)
        return Cell(int(self.grid[p.y, p.x]))

    def zone_at(self, p: Point) -> int:
        self._check_bounds(p)
        return int(self.zones[p.y, p.x])

    def weight_at(self, p: Point) -> int:
        self._check_bounds(p)
        return int(self.weights[p.y, p.x])

    def is_walkable(self, p: Point) -> bool:
        return (0 <= p.x < self.width and 0 <= p.y < self.height
                and self.grid[p.y, p.x] != Cell.BLOCKED)

    def is_empty(self, p: Point) -> bool:
        return self.valid(p) and self.grid[p.y, p.x] == Cell.EMPTY

    def empty_cells(self) -> List[Point]:
        """Empty cells in row-major order (bottom row first)."""
        ys, xs = np.nonzero(self.grid == Cell.EMPTY)
        return [Point(int(x), int(y)) for y, x in zip(ys, xs)]

    # ── Mutation ─────────────────────────────────────────────────────────

    def wrap(self, p: Point):
        """Mark an Empty cell Wrapped and decrement the empty counters."""
        if self.cell_at(p) != Cell.EMPTY:
            raise InvariantViolation(f"Cannot wrap {p}: cell is {self.cell_at(p).name}")
        self.empty -= 1
        zone = self.zone_at(p)
        if zone != UNDECIDED_ZONE:
            self.zones_empty[zone] -= 1
        self.grid[p.y, p.x] = Cell.WRAPPED

    def drill(self, p: Point):
        """Tunnel through a Blocked cell. Tunnels never count as empty."""
        if self.cell_at(p) != Cell.BLOCKED:
            raise InvariantViolation(f"Cannot drill {p}: cell is {self.cell_at(p).name}")
        self.grid[p.y, p.x] = Cell.WRAPPED

    def check_invariant(self):
        """Raise if the empty counters disagree with the matrix."""
        actual = int(np.count_nonzero(self.grid == Cell.EMPTY))
        if actual != self.empty:
            raise InvariantViolation(f"Empty count {self.empty} != {actual} empty cells")
        for zone, remaining in enumerate(self.zones_empty):
            in_zone = int(np.count_nonzero((self.grid == Cell.EMPTY) & (self.zones == zone)))
            if in_zone != remaining:
                raise InvariantViolation(f"Zone {zone} count {remaining} != {in_zone} empty cells")

    # ── Bonus pool ───────────────────────────────────────────────────────

    def pick_up(self, p: Point) -> Optional[Bonus]:
        """Move the bonus lying at `p` (if any) into the shared pool."""
        bonus = self.bonuses.pop(p, None)
        if bonus is not None:
            self.collected[bonus] += 1
        return bonus

    def available(self, bonus: Bonus) -> int:
        return self.collected[bonus]

    def consume(self, bonus: Bonus) -> bool:
        """Take one unit of `bonus` from the pool. False if none is left."""
        if self.collected[bonus] <= 0:
            return False
        self.collected[bonus] -= 1
        if self.collected[bonus] == 0:
            del self.collected[bonus]
        return True

    def on_map(self, bonus: Bonus) -> int:
        """Number of uncollected `bonus` pickups still lying on the grid."""
        return sum(1 for b in self.bonuses.values() if b == bonus)

    def get_status(self) -> dict:
        """Snapshot for status lines and the viewer."""
        return {
            'size': (self.width, self.height),
            'empty': self.empty,
            'zones_empty': list(self.zones_empty),
            'collected': {b.name: n for b, n in self.collected.items()},
            'beacons': [str(b) for b in self.beacons],
        }
