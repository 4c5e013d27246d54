"""
Reference point (anchor) value object.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ReferencePoint:
    """
    A known anchor and its measured distance to the unknown point.

    Values are stored as given; range checks live in
    ``trilateration.data.schemas.AnchorInput``.

    Attributes:
        latitude: Anchor latitude (decimal degrees)
        longitude: Anchor longitude (decimal degrees)
        radius: Distance to the unknown point (kilometers)
    """
    latitude: float
    longitude: float
    radius: float
