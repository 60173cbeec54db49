"""
Mock Data for the Marine Contaminant Diffusion Engine.

Provides the Toulon (France) wastewater outfalls, seasonal time slots and
diffuse pollution zones used by the field estimator.  Designed to be
swapped out for real monitoring data later.
"""

from typing import List

from models.sources import AreaSource, PointSource, TimeSlot


def get_point_sources() -> List[PointSource]:
    """
    Return the wastewater treatment plant discharge points around Toulon.

    Locations are the sea rejection points, not the plants themselves.  The
    Gapeau plant discharges into the river; its effluent reaches the sea at
    the river mouth, which is recorded as the outlet.

    Returns:
        List of PointSource with temporal_multiplier 1.0.  Concentrations in ng/L.
    """
    return [
        PointSource(
            id="cap-sicie",
            name="Cap Sicie - Amphitria WWTP",
            location=(43.0488707588, 5.850754425619892),
            base_concentration=0.8,
            level="low",
        ),
        PointSource(
            id="la-garde",
            name="La Garde Pont de la Clue WWTP",
            location=(43.088933513, 5.986681139241),
            base_concentration=3.2,
            level="medium",
        ),
        PointSource(
            id="gapeau",
            name="La Crau Vallee du Gapeau WWTP",
            location=(43.14518403433659, 6.0921143363889385),
            base_concentration=1.9,
            level="medium",
            outlet=(43.0989, 6.1534),
        ),
        PointSource(
            id="almanarre",
            name="Almanarre WWTP",
            location=(43.078633267379644, 6.1002445220947275),
            base_concentration=3.1,
            level="high",
        ),
    ]


def get_time_slots() -> List[TimeSlot]:
    """
    Return the 2024 seasonal scenarios, in calendar order.

    The multiplier scales every source; December has the heaviest load.
    """
    return [
        TimeSlot("2024-01", "January 2024", 0.3, wind_speed=15.0, wind_direction=45.0,
                 concentration_level="low"),
        TimeSlot("2024-04", "April 2024", 0.9, wind_speed=12.0, wind_direction=180.0,
                 concentration_level="medium"),
        TimeSlot("2024-07", "July 2024", 0.7, wind_speed=8.0, wind_direction=315.0,
                 concentration_level="low"),
        TimeSlot("2024-10", "October 2024", 1.0, wind_speed=18.0, wind_direction=90.0,
                 concentration_level="medium"),
        TimeSlot("2024-12", "December 2024", 1.6, wind_speed=22.0, wind_direction=225.0,
                 concentration_level="high"),
    ]


def get_area_sources() -> List[AreaSource]:
    """Return the diffuse pollution zones (currently the naval arsenal)."""
    return [
        AreaSource(
            id="port-militaire",
            name="Toulon Arsenal",
            center=(43.1167, 5.9289),
            radius=2000.0,
            level_concentrations={"low": 2.1, "medium": 3.8, "high": 4.5},
        ),
    ]
