"""
Global configuration and constants for the Marine Contaminant Diffusion Engine.
"""

# --- Diffusion Model (single-source attenuation) ---
DISTANCE_DECAY_KM = 15.0        # Characteristic length of distance decay (km)
DEPTH_DECAY_M = 10.0            # Characteristic length of depth decay (m)
REFERENCE_TEMPERATURE_C = 20.0  # Baseline for the linear temperature correction
TEMPERATURE_COEFFICIENT = 0.02  # Fractional change per degree away from baseline
NEUTRAL_PH = 7.0
NEUTRAL_PH_BAND = 1.0           # |pH - 7| strictly below this counts as near-neutral
OFF_NEUTRAL_PH_EFFECT = 0.8     # Multiplier applied outside the near-neutral band
CURRENT_COEFFICIENT = 0.3       # Apparent concentration gain per m/s of current
CONCENTRATION_FLOOR = 0.001     # Predictions never drop below this
PHYSICS_CONFIDENCE = 0.7        # Fixed confidence of the deterministic estimator

# Factor breakdown (diagnostic only)
HYDRODYNAMICS_WIND_SCALE = 10.0  # Wind speed is divided by this before mixing with current
HYDRODYNAMICS_NORM = 3.0
OFF_NEUTRAL_CHEMICAL_FACTOR = 0.5

# --- Risk Classification ---
# (ratio lower bound, level, category), evaluated top-down with strict ">"
RISK_BANDS = [
    (1.0, 5, "Critical"),
    (0.8, 4, "High"),
    (0.6, 3, "Medium"),
    (0.3, 2, "Low-Medium"),
]
BASE_RISK_LEVEL = 1
BASE_RISK_CATEGORY = "Low"

# --- Geography ---
EARTH_RADIUS_M = 6371000.0

# --- Multi-Source Field Estimator (point sources / outfalls) ---
SOURCE_CUTOFF_M = 15000.0        # Sources at or beyond this distance are ignored
PRIMARY_ATTENUATION_M = 2500.0   # Near-field exponential falloff
SECONDARY_ATTENUATION_M = 8000.0  # Far-field tail
SECONDARY_WEIGHT = 0.1
WIND_EFFECT_SCALE = 150.0        # windEffect = 1 + wind_speed / scale
DEPTH_FACTOR_RANGE_M = 20000.0
DEPTH_FACTOR_MIN = 0.1
COASTAL_RANGE_M = 3000.0
COASTAL_EFFECT = 1.2
NATURAL_VARIATION_RANGE = (0.85, 1.15)  # +/-15% turbulence jitter
MIN_INFLUENCE = 0.0001           # Contributions at or below this are dropped
BACKGROUND_RANGE = (0.001, 0.003)
BACKGROUND_SOURCE_NAME = "Natural marine background"
BACKGROUND_LEVEL = "natural"

# --- Area Sources (diffuse pollution zones) ---
ZONE_RADIUS_EXTENSION = 2.5      # Zone influence reaches this multiple of its radius
ZONE_PROXIMITY_EXPONENT = 1.2
ZONE_ATTENUATION_EXPONENT = 1.8
ZONE_LEVELS = ("low", "medium", "high")
DEFAULT_ZONE_LEVEL = "medium"

# --- Request Defaults (applied at the boundary, never inside the model) ---
DEFAULT_SALINITY_PSU = 35.0
DEFAULT_CURRENT_SPEED = 0.5     # m/s
DEFAULT_WIND_SPEED = 10.0       # m/s
DEFAULT_DEPTH_M = 5.0
DEFAULT_TOXIC_THRESHOLD = 10.0  # Same unit as the source concentration
DEFAULT_TIME_SLOT = "2024-12"

# Typical physical ranges; values outside only raise a DomainWarning
PH_RANGE = (0.0, 14.0)

# --- Distance Profiles ---
DEFAULT_PROFILE_DISTANCES_KM = [1.0, 2.0, 5.0, 10.0, 15.0, 20.0, 25.0]

# --- Map View ---
MAP_CENTER = (43.1167, 5.9289)   # Toulon harbour
MAP_HALF_SPAN_DEG = 0.12
MAP_GRID_POINTS = 41
