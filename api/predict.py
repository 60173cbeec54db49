"""
Request boundary for the prediction endpoints.

Validates JSON-style request bodies, fills optional fields from ``config``
defaults, warns about physically atypical input, and shapes responses.
The models behind it never validate; everything that can be rejected is
rejected here.

Request (``POST /predict``)::

    {"sourceConcentration": 5.0, "distance": 10, "temperature": 20,
     "pH": 7.5, "salinity": 35, "currentSpeed": 0.5, "windSpeed": 10,
     "depth": 5, "toxicThreshold": 10}

Response::

    {"prediction": {...}, "riskAssessment": {...}}
"""

import math
import numbers
import warnings
from typing import List, Optional, Tuple

import numpy as np

from config import (
    DEFAULT_SALINITY_PSU,
    DEFAULT_CURRENT_SPEED,
    DEFAULT_WIND_SPEED,
    DEFAULT_DEPTH_M,
    DEFAULT_TOXIC_THRESHOLD,
    DEFAULT_TIME_SLOT,
    DEFAULT_ZONE_LEVEL,
    ZONE_LEVELS,
    PH_RANGE,
)
from data.interfaces import DataProvider, MockDataProvider
from models.diffusion import EnvironmentalVector, predict
from models.field import apply_time_slot, predict_at
from models.risk import assess_risk


class ValidationError(ValueError):
    """A request field is missing or not a usable number."""


class DomainWarning(UserWarning):
    """Input is outside typical physical ranges; a result is still computed."""


# request key -> EnvironmentalVector field
REQUIRED_FIELDS = {
    "sourceConcentration": "source_concentration",
    "distance": "distance",
    "temperature": "temperature",
    "pH": "ph",
}

OPTIONAL_FIELDS = {
    "salinity": ("salinity", DEFAULT_SALINITY_PSU),
    "currentSpeed": ("current_speed", DEFAULT_CURRENT_SPEED),
    "windSpeed": ("wind_speed", DEFAULT_WIND_SPEED),
    "depth": ("depth", DEFAULT_DEPTH_M),
}


def _as_number(body: dict, key: str) -> float:
    """Parse ``body[key]`` as a finite float.  Numeric strings are accepted."""
    value = body[key]
    if isinstance(value, bool):
        raise ValidationError(f"Field '{key}' must be numeric, got a boolean")
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(f"Field '{key}' must be numeric, got '{value}'") from None
    else:
        raise ValidationError(f"Field '{key}' must be numeric, got {type(value).__name__}")
    if not math.isfinite(number):
        raise ValidationError(f"Field '{key}' must be finite")
    return number


def _require_mapping(body) -> None:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")


def check_domain(vector: EnvironmentalVector) -> List[str]:
    """
    List the ways ``vector`` falls outside typical physical ranges.

    Atypical input is allowed; the model computes a result regardless.
    """
    problems = []
    if vector.source_concentration <= 0:
        problems.append(f"sourceConcentration {vector.source_concentration} is not positive")
    if vector.distance < 0:
        problems.append(f"distance {vector.distance} is negative")
    if not PH_RANGE[0] <= vector.ph <= PH_RANGE[1]:
        problems.append(f"pH {vector.ph} is outside {PH_RANGE[0]:g}-{PH_RANGE[1]:g}")
    if vector.current_speed < 0:
        problems.append(f"currentSpeed {vector.current_speed} is negative")
    if vector.wind_speed < 0:
        problems.append(f"windSpeed {vector.wind_speed} is negative")
    if vector.depth < 0:
        problems.append(f"depth {vector.depth} is negative")
    return problems


def parse_predict_request(body: dict) -> Tuple[EnvironmentalVector, float]:
    """
    Turn a ``/predict`` request body into model input.

    Returns:
        (vector, toxic_threshold).

    Raises:
        ValidationError: Missing or non-numeric fields, or a non-positive
            toxic threshold.

    Warns:
        DomainWarning: Once per atypical value.
    """
    _require_mapping(body)

    missing = [key for key in REQUIRED_FIELDS if body.get(key) is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    values = {name: _as_number(body, key) for key, name in REQUIRED_FIELDS.items()}
    for key, (name, default) in OPTIONAL_FIELDS.items():
        values[name] = _as_number(body, key) if body.get(key) is not None else default

    if body.get("toxicThreshold") is not None:
        toxic_threshold = _as_number(body, "toxicThreshold")
    else:
        toxic_threshold = DEFAULT_TOXIC_THRESHOLD
    if toxic_threshold <= 0:
        raise ValidationError("Field 'toxicThreshold' must be > 0")

    vector = EnvironmentalVector(**values)
    for problem in check_domain(vector):
        warnings.warn(problem, DomainWarning, stacklevel=2)

    return vector, toxic_threshold


def handle_predict_request(body: dict) -> Tuple[int, dict]:
    """
    Serve ``POST /predict``.

    Returns:
        (HTTP status, JSON-ready payload).  400 with ``{"error": ...}`` on
        validation failure.
    """
    try:
        vector, toxic_threshold = parse_predict_request(body)
    except ValidationError as exc:
        return 400, {"error": str(exc)}

    prediction = predict(vector)
    risk = assess_risk(prediction, toxic_threshold)
    return 200, {
        "prediction": prediction.to_dict(),
        "riskAssessment": risk.to_dict(),
    }


def handle_field_request(
    body: dict,
    provider: Optional[DataProvider] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[int, dict]:
    """
    Serve a map click: total concentration at a lat/lng.

    Request keys: ``latitude``, ``longitude`` (required), ``timeSlot``
    (slot id, default December 2024), ``concentrationLevel`` for pollution
    zones (``low``/``medium``/``high``; defaults to the requested slot's
    level, or ``medium`` when no slot is given).

    Returns:
        (HTTP status, JSON-ready payload).
    """
    if provider is None:
        provider = MockDataProvider()

    try:
        _require_mapping(body)
        missing = [key for key in ("latitude", "longitude") if body.get(key) is None]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        lat = _as_number(body, "latitude")
        lng = _as_number(body, "longitude")
        if not -90.0 <= lat <= 90.0:
            raise ValidationError(f"Field 'latitude' out of range: {lat}")
        if not -180.0 <= lng <= 180.0:
            raise ValidationError(f"Field 'longitude' out of range: {lng}")

        slot_id = body.get("timeSlot") or DEFAULT_TIME_SLOT
        try:
            slot = provider.get_time_slot(slot_id)
        except KeyError:
            raise ValidationError(f"Unknown time slot '{slot_id}'") from None

        # A chosen slot brings its own zone level; with neither given, "medium"
        zone_level = body.get("concentrationLevel")
        if not zone_level:
            zone_level = slot.concentration_level if body.get("timeSlot") else DEFAULT_ZONE_LEVEL
        if zone_level not in ZONE_LEVELS:
            raise ValidationError(
                f"Field 'concentrationLevel' must be one of {', '.join(ZONE_LEVELS)}"
            )
    except ValidationError as exc:
        return 400, {"error": str(exc)}

    field_prediction = predict_at(
        (lat, lng),
        apply_time_slot(provider.get_point_sources(), slot),
        slot.wind_speed,
        zones=apply_time_slot(provider.get_area_sources(), slot),
        zone_level=zone_level,
        rng=rng,
    )
    payload = field_prediction.to_dict()
    payload["timeSlot"] = slot.id
    return 200, payload
