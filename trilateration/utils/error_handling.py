"""
Error handling utilities for trilateration.

Provides a guard that keeps NaN/infinity out of the values flowing into and
out of the solver.
"""
import math
from typing import Type

from trilateration.utils.logging_config import get_logger
from trilateration.utils.exceptions import TrilaterationError

logger = get_logger(__name__)


def ensure_finite(
    value: float,
    name: str,
    error: Type[TrilaterationError] = TrilaterationError
) -> float:
    """
    Validate that a value is a finite number.

    Parameters
    ----------
    value : float
        Value to check
    name : str
        Name of the value for the error message
    error : Type[TrilaterationError]
        Exception type to raise

    Returns
    -------
    float
        The value, unchanged

    Raises
    ------
    TrilaterationError
        (or the given subclass) if value is NaN or infinite

    Example
    -------
    >>> ensure_finite(37.4, "latitude")
    37.4
    """
    if not math.isfinite(value):
        logger.debug("Non-finite value rejected", name=name, value=value,
                     error=error.__name__)
        raise error(f"{name} is not finite: {value}")
    return value
