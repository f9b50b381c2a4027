"""Hold common label types for easier importing."""

from __future__ import annotations

# Standard Library Imports
from enum import Enum


class CoefficientFormat(str, Enum):
    """Defines valid labels for text coefficient file formats."""

    ICGEM: str = "icgem"
    """``str``: whitespace-delimited ``gfc`` records, International Centre for Global Earth Models."""

    PGDA: str = "pgda"
    """``str``: comma-delimited records, Planetary Geodesy Data Archive."""
