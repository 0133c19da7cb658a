"""
Utility script to run a headless driving episode via EpisodeRunner.run().

Usage:
    python scripts/run_episode.py --track box_loop --ticks 5000 --silent

Pass --telemetry-out to dump one JSON record per tick, and --realtime to
pace ticks at the configured frame rate.
"""

from __future__ import annotations

import argparse
import json
import os
import sys

# Ensure repo root is on sys.path when script is executed from anywhere
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.append(REPO_ROOT)

from racer_sim.config import get_config  # noqa: E402
from racer_sim.engine import TelemetryCollector  # noqa: E402
from racer_sim.engine.track_registry import TrackRegistry  # noqa: E402
from racer_sim.policy import NetworkPolicy, RandomPolicy  # noqa: E402
from racer_sim.simulation import EpisodeRunner  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a single-vehicle track episode.")
    parser.add_argument("--track", default=get_config("track.default", "box_loop"), help="Track id to load.")
    parser.add_argument("--ticks", type=int, default=3600, help="Number of ticks to simulate.")
    parser.add_argument("--policy", choices=("network", "random"), default="network", help="Decision policy.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the policy RNG.")
    parser.add_argument("--realtime", action="store_true", help="Pace ticks at the configured FPS.")
    parser.add_argument("--telemetry-out", default=None, help="Write per-tick telemetry JSON to this path.")
    parser.add_argument("--list-tracks", action="store_true", help="List available tracks and exit.")
    parser.add_argument(
        "--silent",
        action="store_true",
        help="Suppress console output (telemetry still saves when requested).",
    )
    args = parser.parse_args()

    registry = TrackRegistry()
    if args.list_tracks:
        for track_id in registry.list_tracks():
            print(f"{track_id}\t{registry.path(track_id)}")
        return

    policy = RandomPolicy(seed=args.seed) if args.policy == "random" else NetworkPolicy(seed=args.seed)
    telemetry = TelemetryCollector() if args.telemetry_out else None
    runner = EpisodeRunner.for_track(
        args.track,
        registry=registry,
        telemetry=telemetry,
        policy=policy,
        verbose=not args.silent,
    )
    summary = runner.run(args.ticks, realtime=args.realtime)

    if telemetry is not None:
        with open(args.telemetry_out, "w", encoding="utf-8") as handle:
            json.dump(telemetry.to_dicts(), handle)

    if args.silent:
        print(f"Episode on {args.track} completed.")
    else:
        print(f"\nCrashes: {summary.crashes}  Stuck resets: {summary.stuck_resets}")


if __name__ == "__main__":
    main()
