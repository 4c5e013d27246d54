"""
Core algorithm modules for trilateration.

Contains the vector algebra engine, spherical Earth geometry and the
three-anchor trilateration solver.
"""
from trilateration.core.vector import Vector
from trilateration.core.reference_point import ReferencePoint
from trilateration.core.geometry import (
    EARTH_RADIUS_KM,
    KM_PER_MILE,
    miles_to_km,
    to_ecr_vector,
    from_ecr_vector,
    chord_distance,
)
from trilateration.core.solver import (
    IntersectionResult,
    TrilaterationProblem,
    TrilaterationSolver,
    trilaterate,
)

__all__ = [
    'Vector',
    'ReferencePoint',
    'EARTH_RADIUS_KM',
    'KM_PER_MILE',
    'miles_to_km',
    'to_ecr_vector',
    'from_ecr_vector',
    'chord_distance',
    'IntersectionResult',
    'TrilaterationProblem',
    'TrilaterationSolver',
    'trilaterate',
]
