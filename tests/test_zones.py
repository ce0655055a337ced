from collections import deque

import numpy as np

from wrapcore.geometry import Point
from wrapcore.level import Bonus, Cell, Level, UNDECIDED_ZONE
from wrapcore.parser import parse_ascii_map
from wrapcore.zones import partition_zones, zone_char, zone_count

ROOMS = """
    ........#.......
    ........#...C...
    ...C............
    ........#.......
    ####.########.##
    ........#.......
    @.......#....C..
    ................
"""


def _zone_cells(level, zone):
    return {Point(int(x), int(y)) for y, x in zip(*np.nonzero(level.zones == zone))}


def test_one_zone_per_clone_plus_one():
    level, _ = parse_ascii_map(ROOMS, seed=3)
    assert zone_count(level) == 4
    assert len(level.zones_empty) == 4
    assert sum(level.zones_empty) == level.empty


def test_every_empty_cell_is_labelled_and_walls_are_not():
    level, _ = parse_ascii_map(ROOMS, seed=1)
    empty = level.grid == Cell.EMPTY
    assert np.all(level.zones[empty] != UNDECIDED_ZONE)
    assert np.all(level.zones[~empty] == UNDECIDED_ZONE)


def test_zones_are_connected_around_their_seed():
    level, _ = parse_ascii_map(ROOMS, seed=7)
    seeds = partition_zones(level, seed=7)
    for zone, seed in enumerate(seeds):
        assert level.zone_at(seed) == zone
        cells = _zone_cells(level, zone)
        reached = {seed}
        queue = deque([seed])
        while queue:
            p = queue.popleft()
            for d in (Point(0, 1), Point(0, -1), Point(1, 0), Point(-1, 0)):
                q = p + d
                if q in cells and q not in reached:
                    reached.add(q)
                    queue.append(q)
        assert reached == cells


def test_same_seed_same_partition():
    a, _ = parse_ascii_map(ROOMS, seed=42)
    b, _ = parse_ascii_map(ROOMS, seed=42)
    assert np.array_equal(a.zones, b.zones)
    assert a.zones_empty == b.zones_empty


def test_more_zones_than_cells_is_clamped():
    level = Level(np.zeros((1, 2), dtype=np.int8),
                  bonuses={Point(0, 0): Bonus.CLONE, Point(1, 0): Bonus.CLONE})
    seeds = partition_zones(level, count=5, seed=0)
    assert len(seeds) == 2
    assert sorted(level.zones_empty) == [1, 1]


def test_zone_char():
    assert zone_char(0) == "A"
    assert zone_char(2) == "C"
    assert zone_char(UNDECIDED_ZONE) == "-"
