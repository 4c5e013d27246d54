"""
Spherical Earth geometry for trilateration.

Converts between geodetic latitude/longitude and Earth-Centered-Rotational
(ECR) Cartesian vectors on a fixed-radius, zero-elevation sphere, and
handles distance unit conversion.
"""
import math
from typing import Tuple

from trilateration.core.vector import Vector
from trilateration.utils.error_handling import ensure_finite
from trilateration.utils.exceptions import InvalidReferencePointError, NoIntersectionError


# Earth's mean radius in kilometers (elevation assumed 0)
EARTH_RADIUS_KM = 6371.0

# International mile
KM_PER_MILE = 1.609344


def miles_to_km(distance: float) -> float:
    """
    Convert a distance in miles to kilometers.

    Example:
        >>> miles_to_km(1.0)
        1.609344
    """
    return distance * KM_PER_MILE


def to_ecr_vector(lat: float, lng: float, earth_radius_km: float = EARTH_RADIUS_KM) -> Vector:
    """
    Convert geodetic latitude/longitude to an ECR vector.

    Args:
        lat: Latitude (decimal degrees)
        lng: Longitude (decimal degrees)
        earth_radius_km: Sphere radius (kilometers)

    Returns:
        3-D Vector (x, y, z) in kilometers, origin at Earth's center,
        x towards (0, 0), z towards the north pole

    Raises:
        InvalidReferencePointError: If lat or lng is NaN or infinite

    Example:
        >>> to_ecr_vector(0.0, 0.0)
        Vector([6371.0, 0.0, 0.0])
    """
    lat_rad = math.radians(ensure_finite(lat, "latitude", InvalidReferencePointError))
    lng_rad = math.radians(ensure_finite(lng, "longitude", InvalidReferencePointError))

    x = earth_radius_km * math.cos(lat_rad) * math.cos(lng_rad)
    y = earth_radius_km * math.cos(lat_rad) * math.sin(lng_rad)
    z = earth_radius_km * math.sin(lat_rad)

    return Vector([x, y, z])


def from_ecr_vector(vector: Vector, earth_radius_km: float = EARTH_RADIUS_KM) -> Tuple[float, float]:
    """
    Convert an ECR vector back to latitude/longitude.

    Latitude is taken from the z component relative to the sphere radius, so
    the point is projected along the polar axis rather than radially.

    Args:
        vector: 3-D ECR vector (kilometers)
        earth_radius_km: Sphere radius (kilometers)

    Returns:
        Tuple of (latitude_degrees, longitude_degrees)

    Raises:
        NoIntersectionError: If |z| exceeds the sphere radius
    """
    x, y, z = vector.element(0), vector.element(1), vector.element(2)

    ratio = z / earth_radius_km
    if abs(ratio) > 1.0:
        raise NoIntersectionError(
            f"Solution lies outside the Earth model (z={z:.3f} km, R={earth_radius_km} km)"
        )

    lat = math.degrees(math.asin(ratio))
    lng = math.degrees(math.atan2(y, x))

    return lat, lng


def chord_distance(lat1: float, lng1: float, lat2: float, lng2: float,
                   earth_radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Straight-line distance between two surface points through the ECR frame.

    This is the distance model the trilateration solve assumes for its radii.
    For separations of a few kilometers it is indistinguishable from the
    great-circle distance.

    Returns:
        Distance in kilometers

    Example:
        >>> round(chord_distance(0.0, 0.0, 0.0, 180.0), 1)
        12742.0
    """
    p1 = to_ecr_vector(lat1, lng1, earth_radius_km)
    p2 = to_ecr_vector(lat2, lng2, earth_radius_km)
    return (p2 - p1).length()
