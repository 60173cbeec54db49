"""
Contaminant Diffusion Model.

Deterministic physics approximation of how a contaminant's concentration
attenuates between a source and a point of interest in seawater.

All effects combine multiplicatively against the source concentration:

    C = C0 * exp(-d / 15) * (1 + (T - 20) * 0.02) * pH_effect
           * (1 + v * 0.3) * exp(-z / 10)

Convention:
  - Distance in km, depth in m, temperature in degrees C, speeds in m/s.
  - Concentration is unit-agnostic; the result carries the source's unit.
  - Inputs are not range-checked.  Atypical values (negative distance, pH
    outside 0-14, ...) still produce a number; validation belongs to the
    request boundary (see ``api/predict.py``).
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Mapping, Sequence

import numpy as np

from config import (
    DISTANCE_DECAY_KM,
    DEPTH_DECAY_M,
    REFERENCE_TEMPERATURE_C,
    TEMPERATURE_COEFFICIENT,
    NEUTRAL_PH,
    NEUTRAL_PH_BAND,
    OFF_NEUTRAL_PH_EFFECT,
    CURRENT_COEFFICIENT,
    CONCENTRATION_FLOOR,
    PHYSICS_CONFIDENCE,
    HYDRODYNAMICS_WIND_SCALE,
    HYDRODYNAMICS_NORM,
    OFF_NEUTRAL_CHEMICAL_FACTOR,
)


@dataclass(frozen=True)
class EnvironmentalVector:
    """Environmental conditions for a single prediction.

    Args:
        source_concentration: Concentration at the source (e.g. ug/L).
        distance: Distance from the source (km).
        temperature: Water temperature (degrees C).
        ph: Water pH.
        salinity: Salinity (PSU).  Carried for completeness; not used by the
            attenuation formula.
        current_speed: Current speed (m/s).
        wind_speed: Wind speed (m/s).  Only used by the factor breakdown.
        depth: Depth of the point of interest (m).
    """

    source_concentration: float
    distance: float
    temperature: float
    ph: float
    salinity: float
    current_speed: float
    wind_speed: float
    depth: float


@dataclass(frozen=True)
class FactorBreakdown:
    """Diagnostic decomposition of a prediction, each roughly in [0, 1]."""

    distance: float
    temperature: float
    hydrodynamics: float
    chemical: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "distance": self.distance,
            "temperature": self.temperature,
            "hydrodynamics": self.hydrodynamics,
            "chemical": self.chemical,
        }


@dataclass(frozen=True)
class PredictionResult:
    """Predicted concentration at the point of interest."""

    predicted_concentration: float
    confidence: float
    factors: FactorBreakdown

    def to_dict(self) -> dict:
        return {
            "predictedConcentration": self.predicted_concentration,
            "confidence": self.confidence,
            "factors": self.factors.to_dict(),
        }


@dataclass(frozen=True)
class DistancePrediction(PredictionResult):
    """A prediction tagged with the distance it was evaluated at."""

    distance: float

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["distance"] = self.distance
        return result


def _ph_effect(ph):
    return np.where(np.abs(ph - NEUTRAL_PH) < NEUTRAL_PH_BAND, 1.0, OFF_NEUTRAL_PH_EFFECT)


def _attenuated_concentration(
    source_concentration,
    distance,
    temperature,
    ph,
    current_speed,
    depth,
):
    """Apply every attenuation term.  Works on scalars and numpy arrays."""
    distance_decay = np.exp(-np.asarray(distance, dtype=float) / DISTANCE_DECAY_KM)
    temperature_effect = 1.0 + (temperature - REFERENCE_TEMPERATURE_C) * TEMPERATURE_COEFFICIENT
    ph_effect = _ph_effect(ph)
    current_effect = 1.0 + current_speed * CURRENT_COEFFICIENT
    depth_effect = np.exp(-np.asarray(depth, dtype=float) / DEPTH_DECAY_M)

    concentration = (
        source_concentration
        * distance_decay
        * temperature_effect
        * ph_effect
        * current_effect
        * depth_effect
    )
    return np.maximum(CONCENTRATION_FLOOR, concentration)


def analyze_factors(vector: EnvironmentalVector) -> FactorBreakdown:
    """
    Break a prediction down into its main influences.

    The breakdown is diagnostic: it is reported alongside a prediction but
    never feeds back into the predicted concentration.

        distance      = exp(-d / 15)              higher = closer
        temperature   = 1 - |T - 20| / 20         peaks at 20 C
        hydrodynamics = (v + wind / 10) / 3       higher = more mixing
        chemical      = 1 if |pH - 7| < 1 else 0.5
    """
    distance_factor = float(np.exp(-vector.distance / DISTANCE_DECAY_KM))
    temperature_factor = 1.0 - abs(vector.temperature - REFERENCE_TEMPERATURE_C) / REFERENCE_TEMPERATURE_C
    hydrodynamics_factor = (
        vector.current_speed + vector.wind_speed / HYDRODYNAMICS_WIND_SCALE
    ) / HYDRODYNAMICS_NORM
    if abs(vector.ph - NEUTRAL_PH) < NEUTRAL_PH_BAND:
        chemical_factor = 1.0
    else:
        chemical_factor = OFF_NEUTRAL_CHEMICAL_FACTOR

    return FactorBreakdown(
        distance=distance_factor,
        temperature=temperature_factor,
        hydrodynamics=hydrodynamics_factor,
        chemical=chemical_factor,
    )


def predict(vector: EnvironmentalVector) -> PredictionResult:
    """
    Predict the concentration at the point described by ``vector``.

    Args:
        vector: Fully populated environmental conditions.

    Returns:
        PredictionResult with the concentration floored at 0.001, the fixed
        confidence of the physics estimator (0.7) and a factor breakdown.
    """
    concentration = _attenuated_concentration(
        vector.source_concentration,
        vector.distance,
        vector.temperature,
        vector.ph,
        vector.current_speed,
        vector.depth,
    )
    return PredictionResult(
        predicted_concentration=float(concentration),
        confidence=PHYSICS_CONFIDENCE,
        factors=analyze_factors(vector),
    )


def _vector_at(base: Mapping[str, float], distance: float) -> EnvironmentalVector:
    values = dict(base)
    values["distance"] = distance
    return EnvironmentalVector(**values)


def predict_multiple_distances(
    base: Mapping[str, float],
    distances: Sequence[float],
) -> List[DistancePrediction]:
    """
    Predict at each distance in turn, holding all other conditions fixed.

    Args:
        base: Every ``EnvironmentalVector`` field except ``distance``.
        distances: Distances (km).  Order is preserved; duplicates are kept.

    Returns:
        One DistancePrediction per input distance.
    """
    results = []
    for distance in distances:
        prediction = predict(_vector_at(base, distance))
        results.append(
            DistancePrediction(
                predicted_concentration=prediction.predicted_concentration,
                confidence=prediction.confidence,
                factors=prediction.factors,
                distance=distance,
            )
        )
    return results


def concentration_profile(
    base: Mapping[str, float],
    distances: np.ndarray,
) -> np.ndarray:
    """
    Vectorised concentration curve over many distances.

    Same values as ``predict_multiple_distances`` without the per-point
    factor breakdown, for drawing dense profiles.

    Args:
        base: Every ``EnvironmentalVector`` field except ``distance``.
        distances: Array of distances (km), any shape.

    Returns:
        Array of predicted concentrations, same shape as ``distances``.
    """
    allowed = {f.name for f in fields(EnvironmentalVector)} - {"distance"}
    missing = allowed - set(base.keys())
    if missing:
        raise ValueError(f"Base conditions missing fields: {sorted(missing)}")

    return _attenuated_concentration(
        base["source_concentration"],
        np.asarray(distances, dtype=float),
        base["temperature"],
        base["ph"],
        base["current_speed"],
        base["depth"],
    )
