from collections import deque

import numpy as np
import pytest

from wrapcore.drone import Drone
from wrapcore.explorer import (
    BONUS_SCORE, DEPTH_STEP, clone_rate, explore, explore_impl, spawn_rate, wrapping_rate,
    zone_rate,
)
from wrapcore.geometry import Point
from wrapcore.level import Bonus
from wrapcore.motion import Action
from wrapcore.parser import parse_ascii_map

from conftest import open_level


def target_rate(*targets, value=1.0):
    wanted = set(targets)

    def rate(level, drone, pos):
        return value if pos in wanted else 0.0
    return rate


def test_plan_reaches_target_within_initial_cap():
    level = open_level(8, 1)
    drone = Drone(Point(0, 0))
    result = explore_impl(level, drone, target_rate(Point(3, 0)))
    assert result.plan == deque([Action.RIGHT] * 3)
    assert result.position == Point(3, 0)
    assert result.score == pytest.approx(1 / 3)
    assert len(result.plan) <= DEPTH_STEP


def test_unreachable_target_returns_none():
    level, drone = parse_ascii_map("@.#.")
    assert explore(level, drone, target_rate(Point(3, 0))) is None


def test_start_position_is_never_a_candidate():
    level = open_level(1, 1)
    drone = Drone(Point(0, 0))
    assert explore(level, drone, target_rate(Point(0, 0))) is None


def test_depth_cap_grows_until_something_scores():
    level = open_level(15, 1)
    drone = Drone(Point(0, 0))
    plan = explore(level, drone, target_rate(Point(12, 0)))
    assert plan == deque([Action.RIGHT] * 12)


def test_score_is_normalized_by_plan_length():
    level = open_level(8, 1)
    drone = Drone(Point(0, 0))

    def rate(level, drone, pos):
        return {Point(2, 0): 1.0, Point(4, 0): 10.0}.get(pos, 0.0)

    result = explore_impl(level, drone, rate)
    assert result.position == Point(4, 0)
    assert result.score == pytest.approx(2.5)


def test_search_leaves_level_untouched():
    level = open_level(6, 6)
    drone = Drone(Point(0, 0))
    drone.zone = 0
    drone.drill = 10
    drone.wheels = 10
    grid_before = level.grid.copy()
    explore(level, drone, wrapping_rate)
    assert np.array_equal(level.grid, grid_before)
    assert level.empty == 36


def test_running_drill_plans_through_walls():
    level, drone = parse_ascii_map("@#.")
    assert explore(level, drone, target_rate(Point(2, 0))) is None
    drone.drill = 5
    assert explore(level, drone, target_rate(Point(2, 0))) == deque([Action.RIGHT, Action.RIGHT])
    assert not level.is_walkable(Point(1, 0))


def test_search_uses_beacons():
    level = open_level(30, 1)
    drone = Drone(Point(0, 0))
    level.beacons.append(Point(25, 0))
    plan = explore(level, drone, target_rate(Point(25, 0)))
    assert plan == deque([Action.JUMP0])


def test_wrapping_rate_weights_wall_cells(room):
    level, drone = room
    drone.zone = 0
    assert wrapping_rate(level, drone, Point(1, 1)) == 4.0
    # (4,0) and (4,2) are corners, (4,1) sits on the border
    assert wrapping_rate(level, drone, Point(3, 1)) == 6.0


def test_wrapping_rate_prefers_bonuses_in_own_zone(room):
    level, drone = room
    drone.zone = 0
    level.bonuses[Point(2, 2)] = Bonus.DRILL
    assert wrapping_rate(level, drone, Point(2, 2)) == BONUS_SCORE


def test_wrapping_rate_ignores_other_zones():
    level, drone = parse_ascii_map("""
        ..C...
        @.....
    """, seed=5)
    drone.zone = level.zone_at(Point(0, 0))
    other = next(p for p in level.empty_cells() if level.zone_at(p) != drone.zone)
    assert wrapping_rate(level, drone, other) == 0.0


def test_unzoned_drone_rates_everywhere(room):
    level, drone = room
    assert wrapping_rate(level, drone, Point(1, 1)) == 4.0


def test_zone_rate_only_counts_empty_cells_in_allowed_zones(room):
    level, drone = room
    rate = zone_rate([0])
    assert rate(level, drone, Point(2, 2)) == 1.0
    level.wrap(Point(2, 2))
    assert rate(level, drone, Point(2, 2)) == 0.0
    assert zone_rate([1])(level, drone, Point(3, 2)) == 0.0


def test_clone_and_spawn_rates():
    level, drone = parse_ascii_map("@.C.X")
    assert clone_rate(level, drone, Point(2, 0)) == 1.0
    assert clone_rate(level, drone, Point(1, 0)) == 0.0
    assert spawn_rate(level, drone, Point(4, 0)) == 1.0
    assert explore(level, drone, spawn_rate) == deque([Action.RIGHT] * 4)
