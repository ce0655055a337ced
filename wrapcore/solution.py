"""
Solution Encoding

Each drone emits a token string (W/A/S/D moves, F wheels, L drill,
B(x,y) hand, R beacon, T(x,y) jump, C clone, Z coast). A solution joins
all drones' strings with '#'. Its score is the length of the longest
drone path, counted in command letters.
"""

import re
from pathlib import Path
from typing import Iterable, Union

_COMMAND_RE = re.compile(r"[A-Z]")


def encode_solution(drones: Iterable) -> str:
    return "#".join(d.solution for d in drones)


def solution_score(solution: str) -> int:
    """Number of commands in the longest single-drone path."""
    return max(len(_COMMAND_RE.findall(path)) for path in solution.split("#"))


def solution_path(desc_path: Union[str, Path]) -> Path:
    """Output file for a level description: foo.desc -> foo.sol"""
    return Path(desc_path).with_suffix(".sol")
