"""
Best-First Exploration Search

Breadth-expanding frontier search over hypothetical drone states, scoring
every reached position with a pluggable rating divided by the plan length.
The best-scoring plan seen so far wins.

SEARCH STRATEGY:
- Frontier nodes carry (plan, position, wheels left, drill left, drilled)
- A position is enqueued at most once per search (global visited set)
- Depth cap starts at DEPTH_STEP; when the cap is hit with nothing found
  it grows by DEPTH_STEP, so deeper search is only paid for when the
  neighbourhood is exhausted
- Returns None only when every reachable position has been tried

RATINGS (rate(level, drone, pos) -> float >= 0):
- zone_rate: empty cell in one of the allowed zones (picking a territory)
- clone_rate / spawn_rate: find a Clone bonus / a spawn cell
- wrapping_rate: weighted count of cells wrapped from pos, bonuses dominant
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, FrozenSet, Iterable, Optional, Set, Tuple

from wrapcore.geometry import Point
from wrapcore.level import Bonus, Level, UNDECIDED_ZONE
from wrapcore.motion import Action, SEARCH_ORDER, step, would_wrap

DEPTH_STEP = 5
BONUS_SCORE = 100.0

Rate = Callable[[Level, object, Point], float]


@dataclass
class SearchNode:
    """Hypothetical drone state inside one search."""
    plan: Tuple[Action, ...]
    position: Point
    wheels: int
    drill: int
    drilled: FrozenSet[Point] = frozenset()


@dataclass
class ExploreResult:
    plan: Deque[Action]
    position: Point
    score: float = 0.0


def explore_impl(level: Level, drone, rate: Rate, depth_step: int = DEPTH_STEP) -> Optional[ExploreResult]:
    """Run the search and return the best plan with its end position and score."""
    seen: Set[Point] = {drone.pos}
    queue: Deque[SearchNode] = deque([SearchNode((), drone.pos, drone.wheels, drone.drill)])
    best: Optional[SearchNode] = None
    best_score = 0.0
    max_len = depth_step

    while queue:
        node = queue.popleft()
        if len(node.plan) >= max_len:
            if best is not None:
                break
            max_len += depth_step

        if node.plan:
            score = rate(level, drone, node.position) / len(node.plan)
            if score > best_score:
                best, best_score = node, score

        for action in SEARCH_ORDER:
            result = step(level, drone, node.position, action,
                          node.wheels > 0, node.drill > 0, node.drilled)
            if result is None or result.position in seen:
                continue
            seen.add(result.position)
            drilled = node.drilled | result.drilled if result.drilled else node.drilled
            queue.append(SearchNode(node.plan + (action,), result.position,
                                    max(node.wheels - 1, 0), max(node.drill - 1, 0), drilled))

    if best is None:
        return None
    return ExploreResult(deque(best.plan), best.position, best_score)


def explore(level: Level, drone, rate: Rate) -> Optional[Deque[Action]]:
    """Best plan for `rate`, or None if no reachable position scores above zero."""
    result = explore_impl(level, drone, rate)
    return result.plan if result is not None else None


# ── Ratings ──────────────────────────────────────────────────────────────

def zone_rate(zones: Iterable[int]) -> Rate:
    """Rate 1 for Empty cells lying in one of `zones`."""
    allowed = frozenset(zones)

    def rate(level: Level, drone, pos: Point) -> float:
        if level.is_empty(pos) and level.zone_at(pos) in allowed:
            return 1.0
        return 0.0
    return rate


def clone_rate(level: Level, drone, pos: Point) -> float:
    return 1.0 if level.bonuses.get(pos) == Bonus.CLONE else 0.0


def spawn_rate(level: Level, drone, pos: Point) -> float:
    return 1.0 if pos in level.spawns else 0.0


def wrapping_rate(level: Level, drone, pos: Point) -> float:
    """
    Value of standing at `pos`: every cell that would be wrapped counts
    max(1, obstacle weight), so wall-hugging cells are taken early.
    Positions outside the drone's zone are worth nothing; a bonus inside
    it outweighs any wrapping.
    """
    if drone.zone != UNDECIDED_ZONE and level.zone_at(pos) != drone.zone:
        return 0.0
    if pos in level.bonuses:
        return BONUS_SCORE
    wrapped: Set[Point] = set()
    would_wrap(level, drone, pos, wrapped)
    return float(sum(max(1, int(level.weights[p.y, p.x])) for p in wrapped))
