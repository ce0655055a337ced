#!/usr/bin/env python3
"""
Drone Wrapping Solver - Batch Entry Point

Solves every given .desc level and writes the solution next to it as .sol.
Puzzles are independent: a pool of worker threads pulls file names from a
shared queue, and a failing puzzle is reported without stopping the rest.

Usage:
  python solve_main.py [--threads=N] [--seed=S] [--interactive] [--quiet] problems/*.desc
"""

import argparse
import queue
import sys
import threading
import time
import traceback
from pathlib import Path
from typing import List, Optional

from solver_config import CELL_SIZE, FRAME_DELAY_MS, THREADS, WINDOW_SIZE, ZONE_SEED
from wrapcore.drone_manager import DroneManager
from wrapcore.parser import parse_level
from wrapcore.solution import solution_path, solution_score


def solve_file(filename: str, seed: int = ZONE_SEED, verbose: bool = False,
               on_round=None) -> int:
    """
    Solve one level file and write its .sol.

    Returns:
        Score of the solution (commands in the longest drone path).
    """
    t_start = time.time()
    level, drone = parse_level(Path(filename).read_text(), seed=seed)
    solution = DroneManager(level, [drone], verbose=verbose, on_round=on_round).solve()
    score = solution_score(solution)
    elapsed_ms = int((time.time() - t_start) * 1000)
    print(f"{filename} \tscore {score} \ttime {elapsed_ms} ms")
    solution_path(filename).write_text(solution)
    return score


def run_batch(filenames: List[str], threads: int = THREADS, seed: int = ZONE_SEED,
              verbose: bool = False) -> List[str]:
    """
    Solve files on a fixed pool of worker threads.

    Returns:
        Names of the files that failed.
    """
    tasks: "queue.Queue[str]" = queue.Queue()
    for filename in filenames:
        tasks.put(filename)
    failed: List[str] = []
    failed_lock = threading.Lock()

    def worker():
        while True:
            try:
                filename = tasks.get_nowait()
            except queue.Empty:
                return
            try:
                solve_file(filename, seed=seed, verbose=verbose)
            except Exception as e:
                print(f"{filename} \tfailed: {e}")
                traceback.print_exc()
                with failed_lock:
                    failed.append(filename)

    workers = [threading.Thread(target=worker, daemon=True) for _ in range(max(1, threads))]
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    return failed


def run_interactive(filename: str, seed: int = ZONE_SEED):
    """Solve one file while drawing every round in a pygame window."""
    import pygame
    from viewer.graphics import GraphicsEngine

    pygame.init()
    graphics = GraphicsEngine(WINDOW_SIZE, cell_size=CELL_SIZE)
    fitted = False

    def on_round(level, drones):
        nonlocal fitted
        if not fitted:
            graphics.fit_to_level(level)
            fitted = True
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise KeyboardInterrupt
        graphics.render(level, drones)
        pygame.time.wait(FRAME_DELAY_MS)

    try:
        solve_file(filename, seed=seed, verbose=True, on_round=on_round)
    finally:
        pygame.quit()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wrap grid levels with drones.")
    parser.add_argument("files", nargs="+", help="level descriptions (*.desc)")
    parser.add_argument("--threads", type=int, default=THREADS, help="worker threads")
    parser.add_argument("--seed", type=int, default=ZONE_SEED, help="zone partition seed")
    parser.add_argument("--interactive", action="store_true",
                        help="show the solve in a window (single file, single thread)")
    parser.add_argument("--quiet", action="store_true", help="only print result lines")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    bad = [f for f in args.files if not f.endswith(".desc")]
    if bad:
        print(f"Not a .desc file: {', '.join(bad)}")
        return 2
    if args.threads < 1:
        print("--threads must be at least 1")
        return 2

    t_start = time.time()
    if args.interactive:
        try:
            for filename in args.files:
                run_interactive(filename, seed=args.seed)
        except KeyboardInterrupt:
            print("\nSolve interrupted by user.")
            return 1
        return 0

    failed = run_batch(args.files, threads=args.threads, seed=args.seed,
                       verbose=not args.quiet and len(args.files) == 1)
    if len(args.files) > 1:
        print(f"Finished {len(args.files)} tasks in {int((time.time() - t_start) * 1000)} ms")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
