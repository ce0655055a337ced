import numpy as np
import pytest

from wrapcore.errors import InvariantViolation
from wrapcore.geometry import Point
from wrapcore.level import Bonus, Cell, Level, UNDECIDED_ZONE

from conftest import open_level


def test_wrap_decrements_global_and_zone_counts():
    level = open_level(4, 4)
    zone = level.zone_at(Point(2, 2))
    before_zone = level.zones_empty[zone]

    level.wrap(Point(2, 2))

    assert level.empty == 15
    assert level.zones_empty[zone] == before_zone - 1
    assert level.cell_at(Point(2, 2)) == Cell.WRAPPED
    level.check_invariant()


def test_wrap_twice_is_an_invariant_violation():
    level = open_level(2, 2)
    level.wrap(Point(0, 0))
    with pytest.raises(InvariantViolation):
        level.wrap(Point(0, 0))
    assert level.empty == 3


def test_drill_only_converts_blocked_cells():
    grid = np.array([[Cell.EMPTY, Cell.BLOCKED]], dtype=np.int8)
    level = Level(grid)
    assert level.empty == 1

    level.drill(Point(1, 0))
    assert level.cell_at(Point(1, 0)) == Cell.WRAPPED
    assert level.empty == 1
    assert level.is_walkable(Point(1, 0))

    with pytest.raises(InvariantViolation):
        level.drill(Point(0, 0))
    with pytest.raises(InvariantViolation):
        level.drill(Point(1, 0))
    level.check_invariant()


def test_cell_access_is_bounds_checked():
    level = open_level(3, 2)
    with pytest.raises(InvariantViolation):
        level.cell_at(Point(3, 0))
    with pytest.raises(InvariantViolation):
        level.wrap(Point(-1, 0))
    assert not level.is_walkable(Point(0, 2))
    assert not level.valid(Point(0, -1))


def test_unzoned_wrap_touches_only_global_count():
    level = Level(np.zeros((1, 3), dtype=np.int8))
    assert level.zone_at(Point(0, 0)) == UNDECIDED_ZONE
    level.wrap(Point(0, 0))
    assert level.empty == 2
    assert level.zones_empty == []


def test_obstacle_weights_count_blocked_and_border_neighbours():
    grid = np.zeros((3, 3), dtype=np.int8)
    grid[1, 2] = Cell.BLOCKED
    level = Level(grid)
    assert level.weight_at(Point(0, 0)) == 2
    assert level.weight_at(Point(1, 0)) == 1
    assert level.weight_at(Point(1, 1)) == 1
    assert level.weight_at(Point(2, 0)) == 3
    assert level.weight_at(Point(0, 1)) == 1


def test_bonus_pool_is_shared_and_single_use():
    level = Level(np.zeros((1, 3), dtype=np.int8), bonuses={Point(1, 0): Bonus.WHEELS})
    assert level.on_map(Bonus.WHEELS) == 1
    assert level.pick_up(Point(0, 0)) is None
    assert level.pick_up(Point(1, 0)) == Bonus.WHEELS
    assert level.pick_up(Point(1, 0)) is None
    assert level.on_map(Bonus.WHEELS) == 0
    assert level.available(Bonus.WHEELS) == 1

    assert level.consume(Bonus.WHEELS)
    assert not level.consume(Bonus.WHEELS)
    assert level.available(Bonus.WHEELS) == 0


def test_check_invariant_detects_drift():
    level = open_level(3, 3)
    level.empty += 1
    with pytest.raises(InvariantViolation):
        level.check_invariant()


def test_empty_cells_row_major_from_bottom():
    grid = np.zeros((2, 2), dtype=np.int8)
    grid[0, 1] = Cell.BLOCKED
    level = Level(grid)
    assert level.empty_cells() == [Point(0, 0), Point(0, 1), Point(1, 1)]
