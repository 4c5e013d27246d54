"""
Pydantic schemas for anchor input validation.

Defines the validated form of a reference point as supplied by callers or
configuration files, with range checks for coordinates and distance.
"""
import math

from pydantic import BaseModel, Field, field_validator

from trilateration.core.reference_point import ReferencePoint


class AnchorInput(BaseModel):
    """
    Schema for one anchor: location and measured distance.

    ``distance`` is in the caller's unit (kilometers, or miles when the
    solver runs in miles mode); conversion happens in the solver.

    Example:
        >>> anchor = AnchorInput(
        ...     latitude=0.0,
        ...     longitude=9.998,
        ...     distance=0.2279422
        ... )
    """
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    distance: float = Field(..., ge=0, description="Distance to the unknown point")

    @field_validator('latitude', 'longitude', 'distance')
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """Reject NaN and infinity."""
        if not math.isfinite(v):
            raise ValueError(f"Value must be finite, got {v}")
        return v

    def to_reference_point(self, radius_km: float = None) -> ReferencePoint:
        """Build a ReferencePoint, optionally with an already converted radius."""
        return ReferencePoint(
            latitude=self.latitude,
            longitude=self.longitude,
            radius=self.distance if radius_km is None else radius_km,
        )

    model_config = {
        "frozen": True,
    }
