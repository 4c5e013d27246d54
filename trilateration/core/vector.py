"""
Immutable n-dimensional vector algebra.

Provides the Vector value object used by the trilateration solver for
Earth-Centered-Rotational (ECR) arithmetic: element-wise addition and
division, dot/cross/triple products, scaling, normalization, projection and
angles.

Every operation returns a new Vector; operands are never mutated. Binary
operations require both operands to live in the same vector space (same
dimension); mixing spaces raises VectorSpaceMismatchError instead of
truncating or padding.
"""
import math
from typing import Iterable, Iterator, Tuple

from trilateration.utils.exceptions import (
    InvalidDimensionError,
    IndexOutOfRangeError,
    VectorSpaceMismatchError,
    DimensionalityError,
    DivideByZeroError,
)


class Vector:
    """
    Immutable ordered tuple of real numbers.

    Equality is exact and element-wise; there is no epsilon tolerance, so
    results of floating point arithmetic should be compared with
    ``pytest.approx`` or ``math.isclose`` on the components.

    Example:
        >>> a = Vector([1.0, 0.0, 0.0])
        >>> b = Vector([0.0, 1.0, 0.0])
        >>> a.cross_product(b)
        Vector([0.0, 0.0, 1.0])
        >>> (a + b).length()
        1.4142135623730951
    """

    __slots__ = ('_elements',)

    def __init__(self, elements: Iterable[float]):
        """
        Initialize the vector with its components.

        Args:
            elements: Components of the vector, in position order
        """
        self._elements: Tuple[float, ...] = tuple(float(c) for c in elements)

    @classmethod
    def zero(cls, dimension: int) -> 'Vector':
        """
        Create a null (zero-length) vector of the given dimension.

        Args:
            dimension: Number of components, must be at least 0

        Returns:
            Vector with ``dimension`` zero components

        Raises:
            InvalidDimensionError: If dimension is negative
        """
        if dimension < 0:
            raise InvalidDimensionError(
                f"Dimension must be zero or greater, got {dimension}"
            )
        return cls([0.0] * dimension)

    @property
    def elements(self) -> Tuple[float, ...]:
        """Components of the vector as a tuple."""
        return self._elements

    def element(self, position: int) -> float:
        """
        Get a single component.

        Args:
            position: Index in 0..dimension-1

        Returns:
            Component value

        Raises:
            IndexOutOfRangeError: If position is outside 0..dimension-1
        """
        if not 0 <= position < len(self._elements):
            raise IndexOutOfRangeError(
                f"Position {position} out of range for vector of dimension "
                f"{len(self._elements)}"
            )
        return self._elements[position]

    def dimension(self) -> int:
        """Number of components."""
        return len(self._elements)

    def length(self) -> float:
        """Euclidean magnitude: square root of the sum of squared components."""
        return math.sqrt(sum(c * c for c in self._elements))

    def equals(self, other: 'Vector') -> bool:
        """True if both vectors have identical components in identical positions."""
        return self._elements == other._elements

    def same_dimension(self, other: 'Vector') -> bool:
        """True if both vectors have the same number of components."""
        return self.dimension() == other.dimension()

    def same_vector_space(self, other: 'Vector') -> bool:
        """True if both vectors are indexed by the same positions."""
        return range(self.dimension()) == range(other.dimension())

    def add(self, other: 'Vector') -> 'Vector':
        """
        Add two vectors element-wise.

        Raises:
            VectorSpaceMismatchError: If the vectors are not in the same space
        """
        self._check_vector_space(other)
        return Vector(a + b for a, b in zip(self._elements, other._elements))

    def divide(self, other: 'Vector') -> 'Vector':
        """
        Divide two vectors element-wise.

        Raises:
            VectorSpaceMismatchError: If the vectors are not in the same space
            DivideByZeroError: If any component of ``other`` is zero
        """
        self._check_vector_space(other)
        if any(b == 0 for b in other._elements):
            raise DivideByZeroError("Cannot divide by a vector with a zero component")
        return Vector(a / b for a, b in zip(self._elements, other._elements))

    def subtract(self, other: 'Vector') -> 'Vector':
        """Subtract ``other`` from this vector."""
        return self.add(other.multiply_by_scalar(-1))

    def dot_product(self, other: 'Vector') -> float:
        """
        Dot (scalar) product of two vectors.

        Raises:
            VectorSpaceMismatchError: If the vectors are not in the same space
        """
        self._check_vector_space(other)
        return sum(a * b for a, b in zip(self._elements, other._elements))

    def cross_product(self, other: 'Vector') -> 'Vector':
        """
        Cross (vector) product following the right-hand rule.

        Raises:
            VectorSpaceMismatchError: If the vectors are not in the same space
            DimensionalityError: If the vectors are not 3-dimensional
        """
        self._check_vector_space(other)
        if self.dimension() != 3:
            raise DimensionalityError(
                f"Both vectors must be 3-dimensional, got {self.dimension()}"
            )

        a0, a1, a2 = self._elements
        b0, b1, b2 = other._elements
        return Vector([
            a1 * b2 - a2 * b1,
            a2 * b0 - a0 * b2,
            a0 * b1 - a1 * b0,
        ])

    def scalar_triple_product(self, b: 'Vector', c: 'Vector') -> float:
        """Compute ``self . (b x c)``."""
        return self.dot_product(b.cross_product(c))

    def vector_triple_product(self, b: 'Vector', c: 'Vector') -> 'Vector':
        """Compute ``self x (b x c)``."""
        return self.cross_product(b.cross_product(c))

    def multiply_by_scalar(self, scalar: float) -> 'Vector':
        """Scale every component by ``scalar``."""
        return Vector(c * scalar for c in self._elements)

    def divide_by_scalar(self, scalar: float) -> 'Vector':
        """
        Divide every component by ``scalar``.

        Raises:
            DivideByZeroError: If scalar is 0
        """
        if scalar == 0:
            raise DivideByZeroError("Cannot divide by zero")
        return self.multiply_by_scalar(1.0 / scalar)

    def normalize(self) -> 'Vector':
        """
        Unit vector with the same direction.

        Raises:
            DivideByZeroError: If the vector has zero length
        """
        return self.divide_by_scalar(self.length())

    def project_onto(self, other: 'Vector') -> 'Vector':
        """
        Vector projection of this vector onto ``other``.

        Raises:
            DivideByZeroError: If ``other`` has zero length
            VectorSpaceMismatchError: If the vectors are not in the same space
        """
        unit = other.normalize()
        return unit.multiply_by_scalar(self.dot_product(unit))

    def angle_between(self, other: 'Vector') -> float:
        """
        Angle between two vectors, in radians.

        Raises:
            DivideByZeroError: If either vector has zero length
            VectorSpaceMismatchError: If the vectors are not in the same space
        """
        denominator = self.length() * other.length()
        if denominator == 0:
            raise DivideByZeroError("Cannot compute an angle with a zero-length vector")

        cosine = self.dot_product(other) / denominator
        # Rounding can push parallel vectors just past +/-1
        return math.acos(max(-1.0, min(1.0, cosine)))

    def _check_vector_space(self, other: 'Vector') -> None:
        if not self.same_dimension(other):
            raise VectorSpaceMismatchError(
                f"The vectors must be of the same dimension "
                f"({self.dimension()} != {other.dimension()})"
            )
        if not self.same_vector_space(other):
            raise VectorSpaceMismatchError("The vectors' elements must have the same positions")

    def __add__(self, other: 'Vector') -> 'Vector':
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'Vector') -> 'Vector':
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: float) -> 'Vector':
        if isinstance(scalar, Vector):
            return NotImplemented
        return self.multiply_by_scalar(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> 'Vector':
        if isinstance(scalar, Vector):
            return NotImplemented
        return self.divide_by_scalar(scalar)

    def __neg__(self) -> 'Vector':
        return self.multiply_by_scalar(-1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[float]:
        return iter(self._elements)

    def __getitem__(self, position: int) -> float:
        return self.element(position)

    def __repr__(self) -> str:
        return f"Vector({list(self._elements)})"
