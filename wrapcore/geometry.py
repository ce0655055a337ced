"""
Grid Geometry and Hand Reachability

A drone wraps cells through its hands: offsets relative to its position.
A hand only reaches its target when every cell of its blocker set is
walkable, which stops long hands from wrapping through thin walls.

BLOCKER SETS:
- (0,0), (1,-1), (1,0), (1,1): the offset itself
- (1,n) for n >= 2: n cells, one per row y = 1..n. Rows below the midpoint
  (n+1)/2 sit at x-offset 0, rows at or above it at x-offset 1. This is the
  discrete line of sight from the drone's cell to the hand's cell.

Sets are generated on first use and cached, so hands can grow without limit.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Point:
    """Integer grid coordinate. y grows upwards."""
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


ORIGIN = Point(0, 0)

# Hands every drone starts with: its own cell plus the column to its right
INITIAL_HANDS: Tuple[Point, ...] = (Point(0, 0), Point(1, -1), Point(1, 0), Point(1, 1))

_TRIVIAL_HANDS = frozenset(INITIAL_HANDS)

_blocker_cache: Dict[Point, Tuple[Point, ...]] = {}


def _generate_blockers(hand: Point) -> Tuple[Point, ...]:
    if hand in _TRIVIAL_HANDS:
        return (hand,)
    if hand.x != 1 or hand.y < 2:
        raise ValueError(f"No line-of-sight rule for hand offset {hand}")
    n = hand.y
    # 2*y < n+1  <=>  y below the midpoint (n+1)/2
    return tuple(Point(0 if 2 * y < n + 1 else 1, y) for y in range(1, n + 1))


def hand_blockers(hand: Point) -> Tuple[Point, ...]:
    """Cells (relative to the drone) that must be walkable for `hand` to reach."""
    blockers = _blocker_cache.get(hand)
    if blockers is None:
        blockers = _generate_blockers(hand)
        _blocker_cache[hand] = blockers
    return blockers


def next_hand(hands) -> Point:
    """Offset gained from a Hand bonus: stacks on top of the highest hand."""
    return Point(1, hands[-1].y + 1)


def is_reaching(level, pos: Point, hand: Point) -> bool:
    """Whether a drone standing at `pos` reaches `pos + hand` on `level`."""
    return all(level.is_walkable(pos + b) for b in hand_blockers(hand))
