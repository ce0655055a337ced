import numpy as np
import pytest

from wrapcore.drone import Drone
from wrapcore.geometry import Point
from wrapcore.level import Cell, Level
from wrapcore.zones import partition_zones


def open_level(width: int, height: int, seed: int = 0) -> Level:
    """Rectangular level with no walls, zones partitioned."""
    level = Level(np.full((height, width), Cell.EMPTY, dtype=np.int8))
    partition_zones(level, seed=seed)
    return level


@pytest.fixture
def room():
    """5x3 open room with a drone in the middle of the left half."""
    level = open_level(5, 3)
    return level, Drone(Point(1, 1))
