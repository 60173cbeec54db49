"""
Abstract Data Provider interface for pluggable data sources.

Allows swapping the mock Toulon data for real outfall inventories without
changing downstream code.
"""

import json
from abc import ABC, abstractmethod
from typing import List, Optional

from models.sources import AreaSource, PointSource, TimeSlot


class DataProvider(ABC):
    """Abstract base class for data sources.

    Sources and time slots are frozen dataclasses, so callers can share
    them freely; scenario changes go through ``dataclasses.replace``.
    """

    @abstractmethod
    def get_point_sources(self) -> List[PointSource]:
        """Return the discharge outfalls, with temporal_multiplier 1.0."""
        ...

    @abstractmethod
    def get_area_sources(self) -> List[AreaSource]:
        """Return the diffuse pollution zones (may be empty)."""
        ...

    @abstractmethod
    def get_time_slots(self) -> List[TimeSlot]:
        """Return the seasonal scenarios, in chronological order."""
        ...

    def get_time_slot(self, slot_id: str) -> TimeSlot:
        """Look up a time slot by id.

        Raises:
            KeyError: If no slot has this id.
        """
        for slot in self.get_time_slots():
            if slot.id == slot_id:
                return slot
        raise KeyError(f"Unknown time slot '{slot_id}'")


class MockDataProvider(DataProvider):
    """Wraps existing mock_data.py functions."""

    def get_point_sources(self) -> List[PointSource]:
        from data.mock_data import get_point_sources
        return get_point_sources()

    def get_area_sources(self) -> List[AreaSource]:
        from data.mock_data import get_area_sources
        return get_area_sources()

    def get_time_slots(self) -> List[TimeSlot]:
        from data.mock_data import get_time_slots
        return get_time_slots()


class FileDataProvider(DataProvider):
    """Load site data from JSON files on disk.

    Args:
        sources_path: JSON array of outfalls.  Required keys: ``name``,
            ``lat``, ``lng``, ``base_concentration``.  Optional: ``id``,
            ``level``, ``outlet`` ([lat, lng]).
        time_slots_path: JSON array of time slots.  Required keys: ``id``,
            ``label``, ``multiplier``, ``wind_speed``, ``wind_direction``.
            Optional: ``concentration_level``.
        zones_path: Optional JSON array of pollution zones.  Required keys:
            ``name``, ``lat``, ``lng``, ``radius``, ``levels``.  Without it
            there are no area sources.

    Raises:
        ValueError: If required keys are missing or data is invalid.
        FileNotFoundError: If any file does not exist.
    """

    _REQUIRED_SOURCE_KEYS = {"name", "lat", "lng", "base_concentration"}
    _REQUIRED_TIME_SLOT_KEYS = {"id", "label", "multiplier", "wind_speed", "wind_direction"}
    _REQUIRED_ZONE_KEYS = {"name", "lat", "lng", "radius", "levels"}

    def __init__(
        self,
        sources_path: str,
        time_slots_path: str,
        zones_path: Optional[str] = None,
    ):
        self._sources = self._load_sources(sources_path)
        self._time_slots = self._load_time_slots(time_slots_path)
        if zones_path:
            self._zones = self._load_zones(zones_path)
        else:
            self._zones = []

    # -- loaders with validation ------------------------------------------

    @staticmethod
    def _load_array(path: str, what: str, required: set) -> List[dict]:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, list) or len(data) == 0:
            raise ValueError(f"{what} file must contain a non-empty JSON array: {path}")
        for i, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise ValueError(f"{what} #{i} must be a JSON object in {path}")
            missing = required - set(entry.keys())
            if missing:
                raise ValueError(
                    f"{what} #{i} missing required keys {sorted(missing)} in {path}"
                )
        return data

    @staticmethod
    def _number(entry: dict, key: str, where: str) -> float:
        """Parse ``entry[key]`` as a float, naming the entry on failure."""
        value = entry[key]
        if isinstance(value, bool):
            raise ValueError(f"{where}: '{key}' must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{where}: '{key}' must be a number, got {value!r}") from None

    @classmethod
    def _load_sources(cls, path: str) -> List[PointSource]:
        data = cls._load_array(path, "Source", cls._REQUIRED_SOURCE_KEYS)
        sources = []
        for i, entry in enumerate(data):
            where = f"Source #{i} in {path}"
            outlet = entry.get("outlet")
            if outlet is not None:
                if not isinstance(outlet, list) or len(outlet) != 2:
                    raise ValueError(f"{where}: 'outlet' must be a [lat, lng] array")
                outlet = dict(zip(("lat", "lng"), outlet))
                outlet = (cls._number(outlet, "lat", where), cls._number(outlet, "lng", where))
            sources.append(
                PointSource(
                    name=entry["name"],
                    location=(cls._number(entry, "lat", where), cls._number(entry, "lng", where)),
                    base_concentration=cls._number(entry, "base_concentration", where),
                    level=entry.get("level", "medium"),
                    outlet=outlet,
                    id=entry.get("id"),
                )
            )
        return sources

    @classmethod
    def _load_time_slots(cls, path: str) -> List[TimeSlot]:
        data = cls._load_array(path, "Time slot", cls._REQUIRED_TIME_SLOT_KEYS)
        slots = []
        for i, entry in enumerate(data):
            where = f"Time slot #{i} in {path}"
            slots.append(
                TimeSlot(
                    id=entry["id"],
                    label=entry["label"],
                    multiplier=cls._number(entry, "multiplier", where),
                    wind_speed=cls._number(entry, "wind_speed", where),
                    wind_direction=cls._number(entry, "wind_direction", where),
                    concentration_level=entry.get("concentration_level", "medium"),
                )
            )
        ids = [s.id for s in slots]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate time slot ids in {path}")
        return slots

    @classmethod
    def _load_zones(cls, path: str) -> List[AreaSource]:
        data = cls._load_array(path, "Zone", cls._REQUIRED_ZONE_KEYS)
        zones = []
        for i, entry in enumerate(data):
            where = f"Zone #{i} in {path}"
            levels = entry["levels"]
            if not isinstance(levels, dict):
                raise ValueError(f"{where}: 'levels' must be a JSON object of level -> concentration")
            zones.append(
                AreaSource(
                    name=entry["name"],
                    center=(cls._number(entry, "lat", where), cls._number(entry, "lng", where)),
                    radius=cls._number(entry, "radius", where),
                    level_concentrations={k: cls._number(levels, k, where) for k in levels},
                    id=entry.get("id"),
                )
            )
        return zones

    # -- DataProvider interface -------------------------------------------

    def get_point_sources(self) -> List[PointSource]:
        return list(self._sources)

    def get_area_sources(self) -> List[AreaSource]:
        return list(self._zones)

    def get_time_slots(self) -> List[TimeSlot]:
        return list(self._time_slots)
