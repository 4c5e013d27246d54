"""
Input validation module.

Provides Pydantic schemas for anchor data supplied by callers and
configuration files.
"""
from trilateration.data.schemas import AnchorInput

__all__ = [
    'AnchorInput',
]
