"""
Custom exception hierarchy for trilateration.

All custom exceptions inherit from TrilaterationError for easy catching.
Vector engine errors (VectorError) signal contract violations by the caller;
geometry errors (GeometryError) signal anchor configurations that have no
usable solution.
"""


class TrilaterationError(Exception):
    """Base exception for all trilateration errors."""
    pass


class ConfigurationError(TrilaterationError):
    """Configuration-related errors.

    Raised when configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("Invalid config: 'anchors' must be a list")
    """
    pass


class InvalidReferencePointError(TrilaterationError):
    """Reference point validation errors.

    Raised when an anchor's latitude, longitude or distance is out of range.

    Attributes:
        index: Slot of the offending point (1-3), if known
        details: Dictionary with validation error details
    """

    def __init__(self, message: str, index: int = None, details: dict = None):
        super().__init__(message)
        self.index = index
        self.details = details or {}

    def __str__(self):
        base = super().__str__()
        if self.index is not None:
            return f"{base} (point={self.index})"
        return base


class VectorError(TrilaterationError):
    """Base class for vector algebra contract errors."""
    pass


class InvalidDimensionError(VectorError):
    """Raised when a vector is requested with a negative dimension."""
    pass


class IndexOutOfRangeError(VectorError, IndexError):
    """Raised when a component position is outside 0..n-1."""
    pass


class VectorSpaceMismatchError(VectorError):
    """Raised when a binary operation mixes vectors of different spaces.

    Example:
        >>> raise VectorSpaceMismatchError("The vectors must be of the same dimension")
    """
    pass


class DimensionalityError(VectorError):
    """Raised when an operation needs a specific rank (cross/triple products)."""
    pass


class DivideByZeroError(VectorError, ZeroDivisionError):
    """Raised on division by a zero scalar, component or zero-length vector."""
    pass


class GeometryError(TrilaterationError):
    """Geometric calculation errors.

    Raised when the anchor geometry admits no usable solution.
    """
    pass


class DegenerateGeometryError(GeometryError):
    """Coincident or collinear anchors.

    Example:
        >>> raise DegenerateGeometryError("Point 1 and point 2 coincide (d=0)")
    """
    pass


class NoIntersectionError(GeometryError):
    """The three spheres do not meet in a real point.

    Attributes:
        discriminant: Value found under the square root (km^2), if known
    """

    def __init__(self, message: str, discriminant: float = None):
        super().__init__(message)
        self.discriminant = discriminant

    def __str__(self):
        base = super().__str__()
        if self.discriminant is not None:
            return f"{base} (discriminant={self.discriminant:.6g})"
        return base
