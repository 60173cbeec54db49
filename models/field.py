"""
Multi-Source Concentration Field.

Estimates the total contaminant concentration at an arbitrary sea point by
superposing the attenuated contribution of every discharge outfall, every
diffuse pollution zone, and a small natural background.

Point source contribution at distance d (meters), for d < 15 km:

    base   = base_concentration * temporal_multiplier
    C      = base * [exp(-d/2500) + 0.1*exp(-d/8000)]
                  * (1 + wind/150) * max(0.1, 1 - d/20000)
                  * (1.2 if d < 3000 else 1.0)
                  * U(0.85, 1.15)

The two exponentials give a fast near-field falloff plus a slow far-field
tail; the uniform draw stands in for natural turbulence.  Pass a seeded
``numpy.random.Generator`` for reproducible results.
"""

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import (
    SOURCE_CUTOFF_M,
    PRIMARY_ATTENUATION_M,
    SECONDARY_ATTENUATION_M,
    SECONDARY_WEIGHT,
    WIND_EFFECT_SCALE,
    DEPTH_FACTOR_RANGE_M,
    DEPTH_FACTOR_MIN,
    COASTAL_RANGE_M,
    COASTAL_EFFECT,
    NATURAL_VARIATION_RANGE,
    MIN_INFLUENCE,
    BACKGROUND_RANGE,
    BACKGROUND_SOURCE_NAME,
    BACKGROUND_LEVEL,
    ZONE_RADIUS_EXTENSION,
    ZONE_PROXIMITY_EXPONENT,
    ZONE_ATTENUATION_EXPONENT,
    ZONE_LEVELS,
    DEFAULT_ZONE_LEVEL,
)
from models.geo import haversine
from models.sources import AreaSource, FieldPrediction, Influence, PointSource, TimeSlot


def point_source_attenuation(distance_m: float, wind_speed: float) -> float:
    """
    Noise-free attenuation multiplier for a point source.

    Returns 0.0 at or beyond the 15 km cut-off.
    """
    if distance_m >= SOURCE_CUTOFF_M:
        return 0.0

    primary = np.exp(-distance_m / PRIMARY_ATTENUATION_M)
    secondary = np.exp(-distance_m / SECONDARY_ATTENUATION_M) * SECONDARY_WEIGHT
    combined = primary + secondary

    wind_effect = 1.0 + wind_speed / WIND_EFFECT_SCALE
    depth_factor = max(DEPTH_FACTOR_MIN, 1.0 - distance_m / DEPTH_FACTOR_RANGE_M)
    coastal_effect = COASTAL_EFFECT if distance_m < COASTAL_RANGE_M else 1.0

    return float(combined * wind_effect * depth_factor * coastal_effect)


def point_source_influence(
    point: Tuple[float, float],
    source: PointSource,
    wind_speed: float,
    rng: np.random.Generator,
    variation_range: Tuple[float, float] = NATURAL_VARIATION_RANGE,
) -> Optional[Influence]:
    """
    Contribution of one outfall at ``point``.

    Args:
        point: (lat, lng) of the query point.
        source: The outfall.  Its ``emission_location`` is used.
        wind_speed: Prevailing wind speed (m/s).
        rng: Random generator for the natural variation term.
        variation_range: (low, high) bounds of the multiplicative jitter.

    Returns:
        An Influence, or None when the source is out of range or its
        contribution is negligible.  No random number is drawn for
        out-of-range sources.
    """
    lat, lng = point
    src_lat, src_lng = source.emission_location
    distance = haversine(lat, lng, src_lat, src_lng)

    if distance >= SOURCE_CUTOFF_M:
        return None

    base_influence = source.base_concentration * source.temporal_multiplier
    distance_influence = base_influence * point_source_attenuation(distance, wind_speed)
    natural_variation = rng.uniform(variation_range[0], variation_range[1])
    final_influence = float(distance_influence * natural_variation)

    if final_influence <= MIN_INFLUENCE:
        return None

    return Influence(
        source=source.name,
        distance=int(round(distance)),
        influence=final_influence,
        level=source.level,
        contribution=final_influence / base_influence * 100.0,
    )


def area_source_influence(
    point: Tuple[float, float],
    zone: AreaSource,
    level: str = DEFAULT_ZONE_LEVEL,
) -> Optional[Influence]:
    """
    Contribution of a diffuse pollution zone at ``point``.

    The zone reaches 2.5x its nominal radius with a smooth falloff:

        proximity = max(0, 1 - (d / reach)^1.2)
        C         = level_concentration * multiplier * proximity^1.8

    Returns:
        An Influence (contribution = proximity in percent), or None outside
        the zone's reach or when negligible.
    """
    if level not in ZONE_LEVELS:
        raise ValueError(f"Unknown zone level '{level}'. Use one of {ZONE_LEVELS}.")

    lat, lng = point
    distance = haversine(lat, lng, zone.center[0], zone.center[1])
    reach = zone.radius * ZONE_RADIUS_EXTENSION

    if distance >= reach:
        return None

    proximity = max(0.0, 1.0 - (distance / reach) ** ZONE_PROXIMITY_EXPONENT)
    base_influence = zone.level_concentrations[level] * zone.temporal_multiplier
    final_influence = base_influence * proximity ** ZONE_ATTENUATION_EXPONENT

    if final_influence <= MIN_INFLUENCE:
        return None

    return Influence(
        source=zone.name,
        distance=int(round(distance)),
        influence=float(final_influence),
        level=level,
        contribution=proximity * 100.0,
    )


def predict_at(
    point: Tuple[float, float],
    sources: Sequence[PointSource],
    wind_speed: float,
    zones: Sequence[AreaSource] = (),
    zone_level: str = DEFAULT_ZONE_LEVEL,
    background_range: Tuple[float, float] = BACKGROUND_RANGE,
    variation_range: Tuple[float, float] = NATURAL_VARIATION_RANGE,
    rng: Optional[np.random.Generator] = None,
) -> FieldPrediction:
    """
    Estimate the total concentration at ``point``.

    Args:
        point: (lat, lng) of the query point (degrees).
        sources: Discharge outfalls with their temporal multipliers applied.
        wind_speed: Prevailing wind speed (m/s).
        zones: Diffuse pollution zones.
        zone_level: Concentration level used for every zone.
        background_range: (min, max) of the uniform natural background.
        variation_range: (low, high) bounds of the per-source jitter.
        rng: Random generator.  A fresh unseeded one is used if omitted.

    Returns:
        FieldPrediction with influences sorted by decreasing influence.  When
        nothing contributes, a single natural-background influence is
        reported.
    """
    if rng is None:
        rng = np.random.default_rng()

    total = 0.0
    influences: List[Influence] = []

    for source in sources:
        influence = point_source_influence(point, source, wind_speed, rng, variation_range)
        if influence is not None:
            total += influence.influence
            influences.append(influence)

    for zone in zones:
        influence = area_source_influence(point, zone, zone_level)
        if influence is not None:
            total += influence.influence
            influences.append(influence)

    background = float(rng.uniform(background_range[0], background_range[1]))
    total += background

    if not influences:
        influences.append(
            Influence(
                source=BACKGROUND_SOURCE_NAME,
                distance=0,
                influence=background,
                level=BACKGROUND_LEVEL,
                contribution=100.0,
            )
        )

    influences.sort(key=lambda i: i.influence, reverse=True)
    return FieldPrediction(total_concentration=max(0.0, total), influences=influences)


def apply_time_slot(sources, slot: TimeSlot):
    """Return copies of ``sources`` (point or area) scaled by the slot's multiplier."""
    return [replace(s, temporal_multiplier=slot.multiplier) for s in sources]


def concentration_grid(
    lats: np.ndarray,
    lngs: np.ndarray,
    sources: Sequence[PointSource],
    wind_speed: float,
    zones: Sequence[AreaSource] = (),
    zone_level: str = DEFAULT_ZONE_LEVEL,
    background_range: Tuple[float, float] = BACKGROUND_RANGE,
    variation_range: Tuple[float, float] = NATURAL_VARIATION_RANGE,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Evaluate ``predict_at`` over a lat/lng mesh.

    Args:
        lats, lngs: 1D coordinate axes (degrees).
        Remaining arguments as for ``predict_at``.

    Returns:
        Array of shape (len(lats), len(lngs)) of total concentrations.
    """
    if rng is None:
        rng = np.random.default_rng()

    lats = np.asarray(lats, dtype=float)
    lngs = np.asarray(lngs, dtype=float)
    grid = np.zeros((lats.size, lngs.size))

    for i, lat in enumerate(lats):
        for j, lng in enumerate(lngs):
            prediction = predict_at(
                (lat, lng),
                sources,
                wind_speed,
                zones=zones,
                zone_level=zone_level,
                background_range=background_range,
                variation_range=variation_range,
                rng=rng,
            )
            grid[i, j] = prediction.total_concentration

    return grid
