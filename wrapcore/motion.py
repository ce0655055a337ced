"""
Step Function - movement and wrapping rules

step() answers "what happens if this drone takes this action from here":
where it ends up, which cells its hands would wrap along the way and which
walls a running drill would tunnel. It never touches the level, so the
explorer can run it on hypothetical states and the drone can apply the
result for real.

MOVEMENT RULES:
- A target cell is enterable if it was already drilled on this branch, or
  the drill is running and the cell is on the grid, or it is walkable.
- Wheels try a second cell in the same direction; if that one is not
  enterable the drone simply stops after the first.
- Jumps go straight to a placed beacon and fail if it does not exist.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Optional, Set

from wrapcore.geometry import Point, is_reaching
from wrapcore.level import Cell


class Action(Enum):
    UP = "W"
    RIGHT = "D"
    DOWN = "S"
    LEFT = "A"
    JUMP0 = "T0"
    JUMP1 = "T1"
    JUMP2 = "T2"


DIRECTIONS = {
    Action.UP: Point(0, 1),
    Action.RIGHT: Point(1, 0),
    Action.DOWN: Point(0, -1),
    Action.LEFT: Point(-1, 0),
}

JUMPS = {Action.JUMP0: 0, Action.JUMP1: 1, Action.JUMP2: 2}

# Expansion order used by the explorer
SEARCH_ORDER = (Action.LEFT, Action.RIGHT, Action.UP, Action.DOWN,
                Action.JUMP0, Action.JUMP1, Action.JUMP2)


@dataclass
class StepResult:
    """Outcome of one action on a hypothetical state."""
    position: Point
    wrapped: Set[Point] = field(default_factory=set)
    drilled: Set[Point] = field(default_factory=set)


def would_wrap(level, drone, pos: Point, wrapped: Set[Point]):
    """Add to `wrapped` every Empty cell the drone's hands reach from `pos`."""
    for hand in drone.hands:
        if is_reaching(level, pos, hand):
            target = pos + hand
            if level.grid[target.y, target.x] == Cell.EMPTY:
                wrapped.add(target)


def _enterable(level, p: Point, drill: bool, drilled: AbstractSet[Point]) -> bool:
    return p in drilled or (drill and level.valid(p)) or level.is_walkable(p)


def step_move(level, drone, start: Point, delta: Point, wheels: bool, drill: bool,
              drilled: AbstractSet[Point]) -> Optional[StepResult]:
    to = start + delta
    if not _enterable(level, to, drill, drilled):
        return None

    result = StepResult(position=to)
    would_wrap(level, drone, to, result.wrapped)
    if drill and to not in drilled and not level.is_walkable(to):
        result.drilled.add(to)

    if wheels:
        to2 = to + delta
        if _enterable(level, to2, drill, drilled):
            would_wrap(level, drone, to2, result.wrapped)
            if drill and to2 not in drilled and not level.is_walkable(to2):
                result.drilled.add(to2)
            result.position = to2
    return result


def step_jump(level, drone, beacon_idx: int) -> Optional[StepResult]:
    if beacon_idx >= len(level.beacons):
        return None
    to = level.beacons[beacon_idx]
    result = StepResult(position=to)
    would_wrap(level, drone, to, result.wrapped)
    return result


def step(level, drone, start: Point, action: Action, wheels: bool = False, drill: bool = False,
         drilled: AbstractSet[Point] = frozenset()) -> Optional[StepResult]:
    """
    Simulate one action without mutating the level.

    Args:
        level: level to read
        drone: drone whose hands do the wrapping
        start: position the action is taken from
        action: movement or jump
        wheels: whether wheels are active for this action
        drill: whether the drill is active for this action
        drilled: cells already tunneled on this hypothetical branch

    Returns:
        StepResult, or None if the action is not possible from `start`.
    """
    if action in DIRECTIONS:
        return step_move(level, drone, start, DIRECTIONS[action], wheels, drill, drilled)
    return step_jump(level, drone, JUMPS[action])
