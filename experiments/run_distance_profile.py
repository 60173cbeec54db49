#!/usr/bin/env python3
"""
Distance Profile Report.

Predicts the concentration downstream of a single source at a series of
distances and prints the risk classification at each one.  Optionally
evaluates the multi-source field at a lat/lng for a given time slot.

Usage:
    uv run python experiments/run_distance_profile.py
    uv run python experiments/run_distance_profile.py --source 15 --threshold 5 \\
        --distances 1 2 5 10 25
    uv run python experiments/run_distance_profile.py --point 43.10 5.95 --slot 2024-07 --seed 42
"""

import sys
import os
import argparse

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from config import (
    DEFAULT_SALINITY_PSU,
    DEFAULT_CURRENT_SPEED,
    DEFAULT_WIND_SPEED,
    DEFAULT_DEPTH_M,
    DEFAULT_TOXIC_THRESHOLD,
    DEFAULT_TIME_SLOT,
    DEFAULT_PROFILE_DISTANCES_KM,
)
from data.interfaces import MockDataProvider
from models.diffusion import predict_multiple_distances
from models.field import apply_time_slot, predict_at
from models.risk import assess_risk


def print_distance_profile(base: dict, distances, toxic_threshold: float):
    """Print one row per distance: concentration, factors, risk."""
    results = predict_multiple_distances(base, distances)

    print(f"\n{'='*78}")
    print(f"Distance profile  (source={base['source_concentration']}, "
          f"threshold={toxic_threshold})")
    print(f"{'='*78}")
    print(f"  {'Dist (km)':>9}  {'Conc':>10}  {'Ratio':>7}  {'Level':>5}  "
          f"{'Category':<11}  {'Margin':>6}  {'Exceeds':>7}")
    print(f"  {'-'*9}  {'-'*10}  {'-'*7}  {'-'*5}  {'-'*11}  {'-'*6}  {'-'*7}")

    for r in results:
        risk = assess_risk(r, toxic_threshold)
        ratio = r.predicted_concentration / toxic_threshold
        print(
            f"  {r.distance:>9.1f}  {r.predicted_concentration:>10.4f}  {ratio:>7.3f}  "
            f"{risk.risk_level:>5d}  {risk.risk_category:<11}  "
            f"{risk.safety_margin:>6.2f}  {str(risk.exceeds_threshold):>7}"
        )
    return results


def print_field_prediction(lat: float, lng: float, slot_id: str, seed):
    """Print the per-source breakdown at a sea point."""
    provider = MockDataProvider()
    slot = provider.get_time_slot(slot_id)
    rng = np.random.default_rng(seed)

    prediction = predict_at(
        (lat, lng),
        apply_time_slot(provider.get_point_sources(), slot),
        slot.wind_speed,
        zones=apply_time_slot(provider.get_area_sources(), slot),
        zone_level=slot.concentration_level,
        rng=rng,
    )

    print(f"\n{'='*78}")
    print(f"Field at ({lat:.4f}, {lng:.4f})  slot={slot.label}  "
          f"total={prediction.total_concentration:.6f}")
    print(f"{'='*78}")
    print(f"  {'Source':<32}  {'Dist (m)':>8}  {'Influence':>10}  {'Level':<8}  {'Contrib %':>9}")
    print(f"  {'-'*32}  {'-'*8}  {'-'*10}  {'-'*8}  {'-'*9}")
    for inf in prediction.influences:
        print(
            f"  {inf.source:<32}  {inf.distance:>8d}  {inf.influence:>10.6f}  "
            f"{inf.level:<8}  {inf.contribution:>9.2f}"
        )
    return prediction


def main():
    parser = argparse.ArgumentParser(description="Contaminant distance profile report")
    parser.add_argument("--source", type=float, default=15.0,
                        help="Source concentration")
    parser.add_argument("--temperature", type=float, default=20.0)
    parser.add_argument("--ph", type=float, default=8.1)
    parser.add_argument("--salinity", type=float, default=DEFAULT_SALINITY_PSU)
    parser.add_argument("--current", type=float, default=DEFAULT_CURRENT_SPEED,
                        help="Current speed (m/s)")
    parser.add_argument("--wind", type=float, default=DEFAULT_WIND_SPEED,
                        help="Wind speed (m/s)")
    parser.add_argument("--depth", type=float, default=DEFAULT_DEPTH_M)
    parser.add_argument("--threshold", type=float, default=DEFAULT_TOXIC_THRESHOLD,
                        help="Toxic threshold")
    parser.add_argument("--distances", type=float, nargs="+",
                        default=DEFAULT_PROFILE_DISTANCES_KM,
                        help="Distances in km")
    parser.add_argument("--point", type=float, nargs=2, metavar=("LAT", "LNG"),
                        help="Also evaluate the multi-source field at this point")
    parser.add_argument("--slot", default=DEFAULT_TIME_SLOT,
                        help="Time slot id for --point")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the field jitter")
    args = parser.parse_args()

    if args.threshold <= 0:
        parser.error("--threshold must be > 0")
    if args.point:
        try:
            MockDataProvider().get_time_slot(args.slot)
        except KeyError:
            known = ", ".join(s.id for s in MockDataProvider().get_time_slots())
            parser.error(f"unknown --slot '{args.slot}' (choose from {known})")

    base = {
        "source_concentration": args.source,
        "temperature": args.temperature,
        "ph": args.ph,
        "salinity": args.salinity,
        "current_speed": args.current,
        "wind_speed": args.wind,
        "depth": args.depth,
    }
    print_distance_profile(base, args.distances, args.threshold)

    if args.point:
        print_field_prediction(args.point[0], args.point[1], args.slot, args.seed)


if __name__ == "__main__":
    main()
