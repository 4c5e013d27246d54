"""
Spherical trilateration from three reference points.

Locates an unknown point from three anchors and the measured distance from
each anchor to it. The anchors are projected onto a spherical Earth as ECR
vectors, a local orthonormal basis is built at the first anchor, the
closed-form sphere intersection is solved in that basis and the result is
projected back to latitude/longitude.

Only the non-negative root of the local z coordinate is produced; the
mirror solution on the other side of the anchor plane is never computed.

References:
    https://en.wikipedia.org/wiki/Trilateration
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Dict

from pydantic import ValidationError

from trilateration.core.vector import Vector
from trilateration.core.reference_point import ReferencePoint
from trilateration.core.geometry import (
    EARTH_RADIUS_KM,
    miles_to_km,
    to_ecr_vector,
    from_ecr_vector,
    chord_distance,
)
from trilateration.data.schemas import AnchorInput
from trilateration.utils.config import SolverSettings, TrilaterationConfig
from trilateration.utils.error_handling import ensure_finite
from trilateration.utils.exceptions import (
    DegenerateGeometryError,
    NoIntersectionError,
    IndexOutOfRangeError,
    InvalidReferencePointError,
)
from trilateration.utils.logging_config import get_logger

logger = get_logger(__name__)

# Relative limit below which anchors count as coincident (to |P1|, |P2|)
# or P3 counts as lying on the P1-P2 line (to |P3 - P1|)
COLLINEARITY_TOLERANCE = 1e-9


@dataclass(frozen=True)
class IntersectionResult:
    """Located point, in decimal degrees."""
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        """Return ``{'lat': ..., 'lng': ...}``."""
        return {'lat': self.latitude, 'lng': self.longitude}


@dataclass(frozen=True)
class _LocalBasis:
    """Orthonormal frame anchored at point 1 plus the scalars of the solve."""
    origin: Vector
    ex: Vector
    ey: Vector
    ez: Vector
    d: float
    i: float
    j: float


def _build_basis(p1: Vector, p2: Vector, p3: Vector) -> _LocalBasis:
    """
    Build the local frame: ex towards P2, ey towards P3 (Gram-Schmidt), ez = ex x ey.

    Raises:
        DegenerateGeometryError: If P1/P2 coincide or P3 lies on the P1-P2 line
    """
    p2_p1 = p2 - p1
    d = p2_p1.length()

    # The same place written two ways (a pole at any longitude, +180 vs -180)
    # differs only by rounding, relative to the vectors' magnitude
    if d <= COLLINEARITY_TOLERANCE * max(p1.length(), p2.length()):
        raise DegenerateGeometryError(f"Point 1 and point 2 coincide (d={d:.3g} km)")
    ex = p2_p1.normalize()

    p3_p1 = p3 - p1
    i = ex.dot_product(p3_p1)

    # Rounding leaves a tiny residue when P3 lies exactly on the P1-P2 line
    ey_raw = p3_p1 - ex * i
    j = ey_raw.length()
    if j <= COLLINEARITY_TOLERANCE * p3_p1.length():
        raise DegenerateGeometryError(
            "Point 3 is coincident with point 1 or collinear with points 1 and 2"
        )
    ey = ey_raw.normalize()

    ez = ex.cross_product(ey)

    return _LocalBasis(origin=p1, ex=ex, ey=ey, ez=ez, d=d, i=i, j=j)


def _solve_local(basis: _LocalBasis, r1: float, r2: float, r3: float,
                 tolerance_km: float = 0.0) -> Tuple[float, float, float]:
    """
    Closed-form sphere intersection in the local frame.

    Returns:
        Tuple of (x, y, z) local coordinates, z >= 0

    Raises:
        NoIntersectionError: If the spheres do not meet in a real point
    """
    d, i, j = basis.d, basis.i, basis.j

    x = (r1 ** 2 - r2 ** 2 + d ** 2) / (2 * d)
    y = (r1 ** 2 - r3 ** 2 + i ** 2 + j ** 2) / (2 * j) - (i / j) * x

    discriminant = r1 ** 2 - x ** 2 - y ** 2
    if discriminant < 0:
        if discriminant >= -(tolerance_km ** 2):
            discriminant = 0.0
        else:
            raise NoIntersectionError(
                "The anchor spheres do not intersect for the given radii",
                discriminant=discriminant,
            )

    z = math.sqrt(discriminant)

    return x, y, z


def _solve_points(point1: ReferencePoint, point2: ReferencePoint, point3: ReferencePoint,
                  earth_radius_km: float = EARTH_RADIUS_KM,
                  tolerance_km: float = 0.0) -> IntersectionResult:
    p1 = to_ecr_vector(point1.latitude, point1.longitude, earth_radius_km)
    p2 = to_ecr_vector(point2.latitude, point2.longitude, earth_radius_km)
    p3 = to_ecr_vector(point3.latitude, point3.longitude, earth_radius_km)

    basis = _build_basis(p1, p2, p3)
    logger.debug("local_basis_built", d=basis.d, i=basis.i, j=basis.j)

    x, y, z = _solve_local(basis, point1.radius, point2.radius, point3.radius, tolerance_km)
    logger.debug("local_coordinates_solved", x=x, y=y, z=z)

    point = basis.origin + basis.ex * x + basis.ey * y + basis.ez * z

    lat, lng = from_ecr_vector(point, earth_radius_km)
    result = IntersectionResult(
        latitude=ensure_finite(lat, "latitude", NoIntersectionError),
        longitude=ensure_finite(lng, "longitude", NoIntersectionError),
    )

    logger.debug("intersection_computed", lat=result.latitude, lng=result.longitude)
    return result


def trilaterate(point1: ReferencePoint, point2: ReferencePoint, point3: ReferencePoint,
                earth_radius_km: float = EARTH_RADIUS_KM) -> IntersectionResult:
    """
    Locate the point at the given distances from three anchors.

    Radii must already be in kilometers.

    Args:
        point1: First anchor, origin of the local frame
        point2: Second anchor, defines the local x axis
        point3: Third anchor, fixes the local x-y plane
        earth_radius_km: Sphere radius (kilometers)

    Returns:
        IntersectionResult with latitude/longitude in degrees

    Raises:
        DegenerateGeometryError: If anchors coincide or are collinear
        NoIntersectionError: If the radii admit no real solution

    Example:
        >>> result = trilaterate(
        ...     ReferencePoint(0.0, 9.998, 0.2279422),
        ...     ReferencePoint(0.0, 10.002, 0.2279422),
        ...     ReferencePoint(0.002, 10.0, 0.2279422),
        ... )
        >>> round(result.latitude, 6), round(result.longitude, 6)
        (0.0, 10.0)
    """
    return _solve_points(point1, point2, point3, earth_radius_km)


@dataclass(frozen=True)
class TrilaterationProblem:
    """
    Three fully configured anchors, radii in kilometers.

    Immutable counterpart of TrilaterationSolver: it is always complete, so
    solving it never yields a "not ready" result, and it can be shared
    between threads.
    """
    point1: ReferencePoint
    point2: ReferencePoint
    point3: ReferencePoint
    earth_radius_km: float = EARTH_RADIUS_KM

    def solve(self, tolerance_km: float = 0.0) -> IntersectionResult:
        """Solve the problem; see ``trilaterate``."""
        return _solve_points(self.point1, self.point2, self.point3,
                             self.earth_radius_km, tolerance_km)


class TrilaterationSolver:
    """
    Staged trilateration solver.

    Anchors are set one slot at a time and may be overwritten. Distances are
    converted from miles when the point is set, according to the unit flag
    at that moment; flipping the flag later leaves stored points untouched.

    Example:
        >>> solver = TrilaterationSolver()
        >>> solver.set_point(1, 0.0, 9.998, 0.2279422)
        >>> solver.set_point(2, 0.0, 10.002, 0.2279422)
        >>> solver.solve() is None
        True
        >>> solver.set_point(3, 0.002, 10.0, 0.2279422)
        >>> solver.solve().to_dict()
        {'lat': 0.0..., 'lng': 10.0...}
    """

    def __init__(self, settings: Optional[SolverSettings] = None):
        self.settings = settings or SolverSettings()
        self.earth_radius_km = self.settings.earth_radius_km
        self.in_miles = self.settings.use_miles
        self._points: Dict[int, ReferencePoint] = {}

    @classmethod
    def from_problem(cls, problem: TrilaterationProblem,
                     settings: Optional[SolverSettings] = None) -> 'TrilaterationSolver':
        """Create a ready solver from an immutable problem (radii in km)."""
        settings = (settings or SolverSettings()).model_copy(
            update={'earth_radius_km': problem.earth_radius_km, 'use_miles': False}
        )
        solver = cls(settings)
        for index, point in enumerate((problem.point1, problem.point2, problem.point3), start=1):
            solver.set_point(index, point.latitude, point.longitude, point.radius)
        return solver

    @classmethod
    def from_config(cls, config: TrilaterationConfig) -> 'TrilaterationSolver':
        """Create a solver from configuration, setting any configured anchors in order."""
        solver = cls(config.solver)
        for index, anchor in enumerate(config.anchors, start=1):
            solver.set_point(index, anchor.latitude, anchor.longitude, anchor.distance)
        return solver

    def set_unit_miles(self, in_miles: bool) -> None:
        """Treat distances passed to later ``set_point`` calls as miles."""
        self.in_miles = bool(in_miles)

    def set_point(self, index: int, lat: float, lng: float, distance: float) -> None:
        """
        Store anchor ``index`` (1-3).

        Args:
            index: Slot number, 1, 2 or 3
            lat: Latitude (decimal degrees)
            lng: Longitude (decimal degrees)
            distance: Distance to the unknown point, in miles if the unit
                flag is set, else kilometers

        Raises:
            IndexOutOfRangeError: If index is not 1, 2 or 3
            InvalidReferencePointError: If validation is enabled and a value
                is out of range
        """
        if index not in (1, 2, 3):
            raise IndexOutOfRangeError(f"Point index must be 1, 2 or 3, got {index}")

        radius_km = miles_to_km(distance) if self.in_miles else distance
        if self.settings.validate_coordinates:
            anchor = self._validate(index, lat, lng, distance)
            point = anchor.to_reference_point(radius_km)
        else:
            point = ReferencePoint(latitude=lat, longitude=lng, radius=radius_km)
        self._points[index] = point

        logger.debug("point_set", index=index, lat=lat, lng=lng, radius_km=radius_km,
                     in_miles=self.in_miles)

    def set_point1(self, lat: float, lng: float, distance: float) -> None:
        self.set_point(1, lat, lng, distance)

    def set_point2(self, lat: float, lng: float, distance: float) -> None:
        self.set_point(2, lat, lng, distance)

    def set_point3(self, lat: float, lng: float, distance: float) -> None:
        self.set_point(3, lat, lng, distance)

    @property
    def point1(self) -> Optional[ReferencePoint]:
        return self._points.get(1)

    @property
    def point2(self) -> Optional[ReferencePoint]:
        return self._points.get(2)

    @property
    def point3(self) -> Optional[ReferencePoint]:
        return self._points.get(3)

    @property
    def is_ready(self) -> bool:
        """True once all three anchors are set."""
        return len(self._points) == 3

    def to_problem(self) -> Optional[TrilaterationProblem]:
        """Snapshot the stored anchors as an immutable problem, or None if not ready."""
        if not self.is_ready:
            return None
        return TrilaterationProblem(
            point1=self._points[1],
            point2=self._points[2],
            point3=self._points[3],
            earth_radius_km=self.earth_radius_km,
        )

    def solve(self) -> Optional[IntersectionResult]:
        """
        Compute the intersection point from the three stored anchors.

        Returns:
            IntersectionResult, or None if fewer than three anchors are set

        Raises:
            DegenerateGeometryError: If anchors coincide or are collinear
            NoIntersectionError: If the radii admit no real solution
        """
        problem = self.to_problem()
        if problem is None:
            logger.debug("solve_not_ready", points_set=sorted(self._points))
            return None

        return problem.solve(self.settings.intersection_tolerance_km)

    def residuals(self, result: IntersectionResult) -> Tuple[float, ...]:
        """
        Chord distance from ``result`` to each stored anchor minus its radius (km).

        Useful to judge how consistent the measured radii are with the
        located point. Only anchors that are set are reported, in slot order.
        """
        return tuple(
            chord_distance(result.latitude, result.longitude,
                           point.latitude, point.longitude,
                           self.earth_radius_km) - point.radius
            for _, point in sorted(self._points.items())
        )

    def _validate(self, index: int, lat: float, lng: float, distance: float) -> AnchorInput:
        try:
            return AnchorInput(latitude=lat, longitude=lng, distance=distance)
        except ValidationError as e:
            details = {
                '.'.join(str(p) for p in err['loc']): err['msg']
                for err in e.errors()
            }
            raise InvalidReferencePointError(
                f"Invalid reference point: {details}",
                index=index,
                details=details,
            ) from e
