import argparse
import json
import logging
import os
import sys
from typing import List, Tuple

# Allow running from anywhere: python scripts/run_roundabout_count.py ...
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from challenge.runner import run_challenge
from roundabouts.counter import RoundaboutCounter


def load_polyline(filepath: str) -> List[Tuple[float, float]]:
    """
    Accepts a GeoJSON LineString, a Feature wrapping one, or a bare
    [[lon, lat], ...] list.
    """
    with open(filepath, 'r') as file:
        data = json.load(file)

    if isinstance(data, dict) and data.get("type") == "Feature":
        data = data["geometry"]
    if isinstance(data, dict):
        data = data["coordinates"]
    return [(float(lon), float(lat)) for lon, lat in data]


def main():
    parser = argparse.ArgumentParser(description="Count the roundabouts a driving route goes through.")
    parser.add_argument("--from", dest="start", help="start city (with --to)")
    parser.add_argument("--to", dest="end", help="end city (with --from)")
    parser.add_argument("--polyline", help="route geometry JSON file, (lon, lat) order")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.polyline:
        result = RoundaboutCounter().count_detailed(load_polyline(args.polyline))
        print(f"Roundabouts on route: {result.count}")
        if result.degraded:
            print(f"Warning: {result.diagnostic}, the count may be low")
        return

    if not args.start or not args.end:
        parser.error("give either --polyline or both --from and --to")

    result = run_challenge(args.start, args.end)
    print(f"\n{result.start} -> {result.end}")
    print(f"Roundabouts: {result.roundabouts}")
    print(f"Distance: {result.distance_km} km")
    print(f"Ratio: {result.ratio} roundabouts / 100 km")
    if result.regions_failed:
        print(f"Warning: {result.regions_failed} route regions could not be fetched, the count may be low")


if __name__ == "__main__":
    main()
