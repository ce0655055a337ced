from pathlib import Path

from wrapcore.drone import Drone
from wrapcore.geometry import Point
from wrapcore.solution import encode_solution, solution_path, solution_score


def test_paths_are_joined_per_drone():
    first, second = Drone(Point(0, 0)), Drone(Point(3, 3), drone_id=1)
    first.path = ["W", "W", "D", "F"]
    second.path = ["A", "B(1,2)", "C"]
    assert encode_solution([first, second]) == "WWDF#AB(1,2)C"
    assert encode_solution([Drone(Point(0, 0))]) == ""


def test_score_is_longest_path_in_commands():
    assert solution_score("WWDF#AB(1,2)C") == 4
    assert solution_score("T(55,1)B(1,3)#WS") == 2
    assert solution_score("") == 0


def test_solution_file_sits_next_to_description():
    assert solution_path("problems/prob-001.desc") == Path("problems/prob-001.sol")
