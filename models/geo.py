"""
Geographic helpers.

Great-circle distances on a spherical Earth (radius 6,371,000 m).  Inputs
are decimal degrees and may be floats or numpy arrays (broadcast).
"""

import numpy as np

from config import EARTH_RADIUS_M


def haversine(lat1, lng1, lat2, lng2):
    """
    Great-circle distance between two points.

    Args:
        lat1, lng1: First point (degrees).
        lat2, lng2: Second point (degrees).

    Returns:
        Distance in meters.  A float for scalar input, an array otherwise.
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    dphi = np.radians(np.subtract(lat2, lat1))
    dlambda = np.radians(np.subtract(lng2, lng1))

    a = (np.sin(dphi / 2.0) ** 2
         + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2.0) ** 2)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))

    distance = EARTH_RADIUS_M * c
    if np.ndim(distance) == 0:
        return float(distance)
    return distance
