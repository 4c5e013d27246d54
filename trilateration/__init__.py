"""
Spherical trilateration of a geographic point from three anchors.

Example:
    >>> from trilateration import TrilaterationSolver
    >>> solver = TrilaterationSolver()
    >>> solver.set_point(1, 0.0, 9.998, 0.2279422)
    >>> solver.set_point(2, 0.0, 10.002, 0.2279422)
    >>> solver.set_point(3, 0.002, 10.0, 0.2279422)
    >>> result = solver.solve()
"""
from trilateration.core import (
    Vector,
    ReferencePoint,
    IntersectionResult,
    TrilaterationProblem,
    TrilaterationSolver,
    trilaterate,
)

__version__ = "0.1.0"

__all__ = [
    'Vector',
    'ReferencePoint',
    'IntersectionResult',
    'TrilaterationProblem',
    'TrilaterationSolver',
    'trilaterate',
]
