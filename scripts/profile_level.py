#!/usr/bin/env python3
"""Level generation and tick-loop profiler.

Usage:
    python scripts/profile_level.py --ticks 500 --seed 42
    python scripts/profile_level.py --ticks 2000 --seed 42 --cprofile profile.prof
    python scripts/profile_level.py --levels 20 --width 256 --height 96

Reports:
    - Generation and room-labelling time per level
    - Per-tick timing statistics (min, max, mean, p50, p95, p99)
    - Pathfinding searches and path cache hit rate
    - Optional: cProfile dump for flame graph generation
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from delve.config import LevelConfig
from delve.core.rooms import RoomIndex
from delve.engine.session import GameSession
from delve.systems.floor_generator import FloorGenerator


def _profile_generation(cfg: LevelConfig, levels: int) -> dict:
    """Generate *levels* floors with consecutive seeds and time each stage."""
    generator = FloorGenerator.from_config(cfg)
    gen_times: list[float] = []
    room_times: list[float] = []
    room_counts: list[int] = []

    for i in range(levels):
        t0 = time.perf_counter()
        grid = generator.generate(cfg.seed + i, cfg.width, cfg.height, cfg.fill_probability, cfg.iterations)
        t1 = time.perf_counter()
        rooms = RoomIndex.build(grid)
        t2 = time.perf_counter()
        gen_times.append(t1 - t0)
        room_times.append(t2 - t1)
        room_counts.append(len(rooms))

    return {"gen_times": gen_times, "room_times": room_times, "room_counts": room_counts}


def _profile_ticks(cfg: LevelConfig, num_ticks: int) -> dict:
    """Run the tick loop and collect per-tick timing data."""
    session = GameSession(cfg)
    tick_times: list[float] = []
    move_counts: list[int] = []

    for _ in range(num_ticks):
        t_start = time.perf_counter()
        applied = session.tick_once()
        tick_times.append(time.perf_counter() - t_start)
        move_counts.append(len(applied))

    pathfinder = session.level.pathfinder
    return {
        "tick_times": tick_times,
        "move_counts": move_counts,
        "searches": pathfinder.search_count,
        "cache": pathfinder.cache.stats(),
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_distribution(title: str, times: list[float]) -> None:
    print(f"\n  {title:<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(times) * 1000:>10.3f}")
    if len(times) > 1:
        print(f"  {'StdDev':<16} {statistics.stdev(times) * 1000:>10.3f}")


def _print_report(gen: dict, ticks: dict, wall_time: float) -> None:
    """Print a formatted performance report."""
    print("\n" + "=" * 70)
    print("  LEVEL PERFORMANCE REPORT")
    print("=" * 70)

    gen_times = gen["gen_times"]
    if gen_times:
        print(f"\n  Levels generated:  {len(gen_times)}")
        print(f"  Rooms per level:   {statistics.mean(gen['room_counts']):.1f} avg, {max(gen['room_counts'])} max")
        _print_distribution("Generation", gen_times)
        _print_distribution("Room labelling", gen["room_times"])

    tick_times = ticks["tick_times"]
    if tick_times:
        print(f"\n  Ticks executed:    {len(tick_times)}")
        print(f"  Throughput:        {len(tick_times) / sum(tick_times):.1f} ticks/sec")
        print(f"  Moves applied:     {sum(ticks['move_counts'])}")
        _print_distribution("Tick", tick_times)

        cache = ticks["cache"]
        lookups = cache.hits + cache.misses
        hit_rate = (cache.hits / lookups * 100) if lookups else 0.0
        print(f"\n  A* searches:       {ticks['searches']}")
        print(f"  Cache hit rate:    {hit_rate:.1f}% ({cache.hits}/{lookups})")
        print(f"  Cache clears:      {cache.clears}")
        print(f"  Cache entries:     {cache.entries}/{cache.capacity}")

    print(f"\n  Wall clock time:   {wall_time:.3f}s")
    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile level generation and the tick loop")
    parser.add_argument("--ticks", type=int, default=500, help="Number of ticks to run")
    parser.add_argument("--levels", type=int, default=10, help="Number of levels to generate")
    parser.add_argument("--seed", type=int, default=42, help="Level seed")
    parser.add_argument("--width", type=int, default=180)
    parser.add_argument("--height", type=int, default=60)
    parser.add_argument("--agents", type=int, default=25, help="Agent count")
    parser.add_argument("--cache-policy", type=str, default="clear_on_full", choices=["clear_on_full", "lru"])
    parser.add_argument("--connect-caves", action="store_true")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = LevelConfig(
        seed=args.seed,
        width=args.width,
        height=args.height,
        connect_caves=args.connect_caves,
        agent_count=args.agents,
        path_cache_policy=args.cache_policy,
        log_level="WARNING",
    )

    print(f"Profiling: {args.levels} levels, {args.ticks} ticks, seed={args.seed}, "
          f"grid={args.width}x{args.height}, agents={args.agents}, cache={args.cache_policy}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    gen = _profile_generation(cfg, args.levels)
    ticks = _profile_ticks(cfg, args.ticks)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(gen, ticks, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
