"""
Drone - one wrapping agent and its tool state machine

A drone owns only its own state: position, hands, remaining wheels/drill
turns, its zone, its pending plan and the tokens it has emitted. The level
is passed into every call; bonus units come from the pool the level keeps
for all drones.

TOOLS:
- Wheels (F): 50 double-speed moves, only started with room to run
- Drill (L): 30 moves that tunnel through walls
- Hand (B): one more reach offset, stacked above the highest hand
- Teleport (R): drop a beacon far from every other beacon
- Clone (C): spawn a new drone, only on a spawn cell
"""

from collections import deque
from typing import Deque, List, Optional, Sequence

from wrapcore.errors import InvalidActionError, SchedulingError
from wrapcore.explorer import explore_impl, zone_rate
from wrapcore.geometry import INITIAL_HANDS, Point, next_hand
from wrapcore.level import Bonus, Level, UNDECIDED_ZONE
from wrapcore.motion import Action, DIRECTIONS, JUMPS, step, would_wrap

# Effect lengths include the activation turn, which wears off one unit
WHEELS_DURATION = 51
DRILL_DURATION = 31
WHEELS_CLEARANCE = 4
BEACON_MIN_DISTANCE = 50


class Drone:
    """
    A single wrapping agent.
    """

    def __init__(self, pos: Point, drone_id: int = 0):
        self.drone_id = drone_id
        self.pos = pos
        self.hands: List[Point] = list(INITIAL_HANDS)
        self.wheels = 0
        self.drill = 0
        self.zone = UNDECIDED_ZONE
        self.plan: Deque[Action] = deque()
        self.path: List[str] = []

    @property
    def solution(self) -> str:
        """Tokens emitted so far, as one command string."""
        return "".join(self.path)

    def wrap_here(self, level: Level):
        """Wrap whatever the drone reaches without moving (start of a solve)."""
        wrapped = set()
        would_wrap(level, self, self.pos, wrapped)
        for p in sorted(wrapped, key=lambda p: (p.y, p.x)):
            level.wrap(p)

    # ── Turn bookkeeping ─────────────────────────────────────────────────

    def collect(self, level: Level) -> Optional[Bonus]:
        """Move a bonus under the drone into the shared pool."""
        return level.pick_up(self.pos)

    def wear_off(self):
        """Count down running effects by one turn."""
        if self.wheels > 0:
            self.wheels -= 1
        if self.drill > 0:
            self.drill -= 1

    def choose_zone(self, taken: Sequence[int], level: Level) -> bool:
        """
        Pick a territory when the drone has none or its zone is finished.

        Prefers zones with empty cells that no drone holds. Adopts the plan
        leading to the nearest empty cell of such a zone.

        Returns:
            True if a new zone was chosen this turn.
        """
        if self.zone != UNDECIDED_ZONE and level.zones_empty[self.zone] > 0:
            return False

        not_empty = [z for z, left in enumerate(level.zones_empty) if left > 0]
        if not not_empty:
            # Only unzoned cells remain; wrapping_rate stops filtering by zone
            self.zone = UNDECIDED_ZONE
            return False
        not_taken = [z for z in not_empty if z not in taken]
        looking_in = not_taken or not_empty

        result = explore_impl(level, self, zone_rate(looking_in))
        if result is None:
            raise SchedulingError(f"Drone {self.drone_id}: no reachable zone among {looking_in}")
        self.zone = level.zone_at(result.position)
        self.plan = result.plan
        return True

    # ── Tools ────────────────────────────────────────────────────────────

    def has_space(self, level: Level) -> bool:
        """Whether a straight run of WHEELS_CLEARANCE free cells starts next to the drone."""
        return any(
            all(level.is_walkable(Point(self.pos.x + d.x * i, self.pos.y + d.y * i))
                for i in range(1, WHEELS_CLEARANCE + 1))
            for d in DIRECTIONS.values()
        )

    def activate_wheels(self, level: Level) -> bool:
        if self.wheels == 0 and level.available(Bonus.WHEELS) > 0 and self.has_space(level):
            level.consume(Bonus.WHEELS)
            self.wheels = WHEELS_DURATION
            self.path.append("F")
            return True
        return False

    def activate_drill(self, level: Level) -> bool:
        if self.drill == 0 and level.consume(Bonus.DRILL):
            self.drill = DRILL_DURATION
            self.path.append("L")
            return True
        return False

    def activate_hand(self, level: Level) -> bool:
        if level.consume(Bonus.HAND):
            hand = next_hand(self.hands)
            self.hands.append(hand)
            self.path.append(f"B({hand.x},{hand.y})")
            return True
        return False

    def set_beacon(self, level: Level) -> bool:
        """Place a teleport beacon here if it is far enough from all others."""
        if (level.available(Bonus.TELEPORT) > 0
                and all(b.manhattan(self.pos) >= BEACON_MIN_DISTANCE for b in level.beacons)):
            level.consume(Bonus.TELEPORT)
            level.beacons.append(self.pos)
            self.path.append("R")
            return True
        return False

    def reduplicate(self, level: Level, drone_id: int) -> Optional["Drone"]:
        """Spend a Clone unit on a spawn cell; returns the new drone."""
        if level.available(Bonus.CLONE) > 0 and self.pos in level.spawns:
            level.consume(Bonus.CLONE)
            self.path.append("C")
            return Drone(self.pos, drone_id=drone_id)
        return None

    # ── Execution ────────────────────────────────────────────────────────

    def act(self, action: Action, level: Level):
        """Execute one action for real and apply its wraps and tunnels."""
        result = step(level, self, self.pos, action, self.wheels > 0, self.drill > 0)
        if result is None:
            raise InvalidActionError(f"Drone {self.drone_id}: {action.name} not possible from {self.pos}")

        if action in JUMPS:
            self.path.append(f"T{level.beacons[JUMPS[action]]}")
        else:
            self.path.append(action.value)
        self.pos = result.position

        for p in result.wrapped:
            level.wrap(p)
        for p in result.drilled:
            level.drill(p)

    def get_status(self) -> dict:
        """Current drone status for monitoring."""
        return {
            'id': self.drone_id,
            'position': (self.pos.x, self.pos.y),
            'zone': self.zone,
            'wheels': self.wheels,
            'drill': self.drill,
            'hands': len(self.hands),
            'plan': [a.name for a in self.plan],
        }
