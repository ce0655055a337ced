"""
Drone Manager - turn scheduler for one puzzle instance

Runs scheduling turns round-robin over every drone until the level has no
empty cells left. Turns are strictly sequential: each drone sees the
bonuses, beacons and wraps of the drones that moved before it.

TURN ORDER (per drone):
1. Collect a bonus lying under the drone
2. Wear off running wheels/drill
3. Choose a zone if it has none or its zone is fully wrapped
4. With an empty plan: clone, else one tool activation (wheels, drill,
   hand, beacon), else search for a plan (clone pickup, spawn, wrapping)
5. Execute the next planned action, coast while wheels run, or fail
"""

from typing import Callable, List, Optional

from wrapcore.drone import Drone
from wrapcore.errors import SchedulingError
from wrapcore.explorer import clone_rate, explore, spawn_rate, wrapping_rate
from wrapcore.level import Bonus, Level
from wrapcore.solution import encode_solution

COVERAGE_MILESTONES = (25, 50, 75, 90, 100)

RoundCallback = Callable[[Level, List[Drone]], None]


class DroneManager:
    """
    Owns the level and all drones of a solve and schedules their turns.
    """

    def __init__(self, level: Level, drones: List[Drone], verbose: bool = False,
                 on_round: Optional[RoundCallback] = None):
        """
        Args:
            level: level to wrap, zones already partitioned
            drones: initial drones (usually one at the start point)
            verbose: print coverage milestones and clone events
            on_round: called before every round and once at the end
        """
        self.level = level
        self.drones: List[Drone] = list(drones)
        self.verbose = verbose
        self.on_round = on_round
        self.rounds = 0

        self._initial_empty = max(1, level.empty)
        self._coverage_milestones_logged = set()

    # ── Planning helpers ─────────────────────────────────────────────────

    def _explore_clone(self, drone: Drone, drone_idx: int):
        """Drone 0 fetches Clone bonuses while none is waiting in the pool."""
        if (drone_idx == 0 and self.level.on_map(Bonus.CLONE) > 0
                and self.level.available(Bonus.CLONE) == 0):
            return explore(self.level, drone, clone_rate)
        return None

    def _explore_spawn(self, drone: Drone, drone_idx: int):
        """Drone 0 carries a collected Clone to the nearest spawn."""
        if drone_idx == 0 and self.level.available(Bonus.CLONE) > 0:
            return explore(self.level, drone, spawn_rate)
        return None

    def _activate_tool(self, drone: Drone) -> bool:
        return (drone.activate_wheels(self.level)
                or drone.activate_drill(self.level)
                or drone.activate_hand(self.level)
                or drone.set_beacon(self.level))

    # ── Scheduling ───────────────────────────────────────────────────────

    def run_turn(self, drone_idx: int):
        """Run one scheduling turn for drone `drone_idx`."""
        level = self.level
        drone = self.drones[drone_idx]
        taken = [d.zone for d in self.drones]

        drone.collect(level)
        drone.wear_off()
        drone.choose_zone(taken, level)

        if not drone.plan:
            clone = drone.reduplicate(level, drone_id=len(self.drones))
            if clone is not None:
                self.drones.append(clone)
                if self.verbose:
                    print(f"DroneManager: drone {drone.drone_id} cloned drone {clone.drone_id} "
                          f"at {clone.pos}")
                return

            if self._activate_tool(drone):
                return

            plan = (self._explore_clone(drone, drone_idx)
                    or self._explore_spawn(drone, drone_idx)
                    or explore(level, drone, wrapping_rate))
            if plan:
                drone.plan = plan

        if drone.plan:
            drone.act(drone.plan.popleft(), level)
        elif drone.wheels > 0:
            drone.path.append("Z")
        else:
            raise SchedulingError(f"Drone {drone.drone_id} at {drone.pos} has nothing to do "
                                  f"with {level.empty} cells left")

    def run_round(self):
        """One turn for every drone known at the start of the round."""
        for drone_idx in range(len(self.drones)):
            if self.level.empty <= 0:
                break
            self.run_turn(drone_idx)
        self.rounds += 1
        self._log_coverage_milestones()

    def solve(self) -> str:
        """Wrap the whole level and return the encoded solution."""
        self.drones[0].wrap_here(self.level)
        while self.level.empty > 0:
            if self.on_round is not None:
                self.on_round(self.level, self.drones)
            self.run_round()
        if self.on_round is not None:
            self.on_round(self.level, self.drones)
        return encode_solution(self.drones)

    def _log_coverage_milestones(self):
        if not self.verbose:
            return
        pct = 100 * (self._initial_empty - self.level.empty) // self._initial_empty
        for milestone in COVERAGE_MILESTONES:
            if pct >= milestone and milestone not in self._coverage_milestones_logged:
                self._coverage_milestones_logged.add(milestone)
                print(f"DroneManager: {milestone}% wrapped after {self.rounds} rounds "
                      f"({len(self.drones)} drones)")

    def get_status(self) -> dict:
        return {
            'rounds': self.rounds,
            'level': self.level.get_status(),
            'drones': [d.get_status() for d in self.drones],
        }


def solve(level: Level, drones: List[Drone], verbose: bool = False,
          on_round: Optional[RoundCallback] = None) -> str:
    """Convenience wrapper: schedule `drones` on `level` until it is wrapped."""
    return DroneManager(level, drones, verbose=verbose, on_round=on_round).solve()
