"""
wrapcore — Planning and Simulation Engine for the Grid Wrapping Puzzle

Drones must wrap every empty cell of a grid. Components, leaves first:

  level.py          Level matrix, empty counters, bonus pool, beacons
  geometry.py       Points and hand line-of-sight (blocker sets)
  motion.py         step(): one action on a hypothetical state
  explorer.py       Best-first lookahead search with pluggable ratings
  zones.py          Seeded multi-source flood fill into drone territories
  drone.py          One drone and its tool state machine
  drone_manager.py  Round-robin turn scheduler, the solve loop

parser.py reads .desc level files, solution.py encodes and scores results.
"""
