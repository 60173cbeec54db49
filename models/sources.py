"""
Contaminant source and field-prediction data models.

Point sources are discharge outfalls; area sources are diffuse pollution
zones.  Both are immutable: scenario changes (a new time slot) produce new
instances via ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from config import ZONE_LEVELS


@dataclass(frozen=True)
class PointSource:
    """A fixed discharge point.

    Args:
        name: Display name, reported in influences.
        location: (lat, lng) of the discharge point (degrees).
        base_concentration: Concentration released at the source.
        level: Informational tag (e.g. "low", "medium", "high").
        temporal_multiplier: Scenario scaling of the source's output.
        outlet: Optional (lat, lng) where the effluent actually reaches the
            sea, e.g. a river mouth downstream of the discharge.
        id: Optional short identifier.
    """

    name: str
    location: Tuple[float, float]
    base_concentration: float
    level: str = "medium"
    temporal_multiplier: float = 1.0
    outlet: Optional[Tuple[float, float]] = None
    id: Optional[str] = None

    def __post_init__(self):
        if self.base_concentration <= 0:
            raise ValueError(f"base_concentration must be > 0 for source '{self.name}'")
        if self.temporal_multiplier <= 0:
            raise ValueError(f"temporal_multiplier must be > 0 for source '{self.name}'")
        if len(self.location) != 2:
            raise ValueError(f"location must be (lat, lng) for source '{self.name}'")
        if self.outlet is not None and len(self.outlet) != 2:
            raise ValueError(f"outlet must be (lat, lng) for source '{self.name}'")

    @property
    def emission_location(self) -> Tuple[float, float]:
        """Where the contaminant enters the water."""
        if self.outlet is not None:
            return self.outlet
        return self.location


@dataclass(frozen=True)
class AreaSource:
    """A diffuse pollution zone (harbour, arsenal, ...).

    Args:
        name: Display name.
        center: (lat, lng) of the zone centre (degrees).
        radius: Nominal zone radius (meters).
        level_concentrations: Concentration per level, keys low/medium/high.
        temporal_multiplier: Scenario scaling.
        id: Optional short identifier.
    """

    name: str
    center: Tuple[float, float]
    radius: float
    level_concentrations: Dict[str, float]
    temporal_multiplier: float = 1.0
    id: Optional[str] = None

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"radius must be > 0 for zone '{self.name}'")
        missing = set(ZONE_LEVELS) - set(self.level_concentrations)
        if missing:
            raise ValueError(f"Zone '{self.name}' missing levels {sorted(missing)}")
        if self.temporal_multiplier <= 0:
            raise ValueError(f"temporal_multiplier must be > 0 for zone '{self.name}'")


@dataclass(frozen=True)
class TimeSlot:
    """A seasonal scenario: how strongly sources emit and the prevailing wind."""

    id: str
    label: str
    multiplier: float
    wind_speed: float           # m/s
    wind_direction: float       # Meteorological degrees
    concentration_level: str = "medium"

    def __post_init__(self):
        if self.multiplier <= 0:
            raise ValueError(f"multiplier must be > 0 for time slot '{self.id}'")
        if self.wind_speed < 0:
            raise ValueError(f"wind_speed must be >= 0 for time slot '{self.id}'")
        if self.concentration_level not in ZONE_LEVELS:
            raise ValueError(
                f"Invalid concentration level '{self.concentration_level}' "
                f"for time slot '{self.id}'"
            )


@dataclass(frozen=True)
class Influence:
    """One source's contribution at a queried point."""

    source: str
    distance: int               # meters, rounded
    influence: float
    level: str
    contribution: float         # percent of the source's scaled base

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "distance": self.distance,
            "influence": self.influence,
            "level": self.level,
            "contribution": self.contribution,
        }


@dataclass(frozen=True)
class FieldPrediction:
    """Total concentration at a point and its per-source breakdown."""

    total_concentration: float
    influences: List[Influence] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalConcentration": self.total_concentration,
            "influences": [i.to_dict() for i in self.influences],
        }
