"""
Unit tests for error handling utilities.

Tests the finiteness guard.
"""
import math

import pytest
from trilateration.utils.error_handling import ensure_finite
from trilateration.utils.exceptions import (
    TrilaterationError,
    InvalidReferencePointError,
    NoIntersectionError,
)


class TestEnsureFinite:
    """Test ensure_finite guard."""

    def test_returns_finite_value(self):
        """Should return finite values unchanged."""
        assert ensure_finite(37.4, "latitude") == 37.4
        assert ensure_finite(-0.0, "longitude") == 0.0

    def test_raises_on_nan(self):
        """Should raise the base error for NaN by default."""
        with pytest.raises(TrilaterationError) as exc_info:
            ensure_finite(math.nan, "latitude")

        assert "latitude" in str(exc_info.value)

    def test_raises_on_infinity(self):
        """Should reject both infinities."""
        with pytest.raises(TrilaterationError):
            ensure_finite(math.inf, "longitude")
        with pytest.raises(TrilaterationError):
            ensure_finite(-math.inf, "longitude")

    def test_custom_error_type(self):
        """Should raise the requested exception type."""
        with pytest.raises(NoIntersectionError):
            ensure_finite(math.nan, "latitude", NoIntersectionError)

    def test_error_type_with_optional_fields(self):
        """Errors with extra optional attributes are built from the message alone."""
        with pytest.raises(InvalidReferencePointError) as exc_info:
            ensure_finite(math.inf, "longitude", InvalidReferencePointError)

        assert exc_info.value.index is None
