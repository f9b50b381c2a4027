"""Subpackage parsing text coefficient files & converting them to binary artifacts."""

from __future__ import annotations

# Local Imports
from .assembler import DenseCoefficients, coefficientsToMatrices, countInvalidOrders
from .binary import ArtifactHeader, readArtifactHeader, readBinaryCoefficients, writeBinaryCoefficients
from .parsers import (
    COEFFICIENT_PARSERS,
    CoefficientTable,
    readCoefficientFile,
    readICGEMCoefficientFile,
    readPGDACoefficientFile,
)

__all__ = [
    "COEFFICIENT_PARSERS",
    "ArtifactHeader",
    "CoefficientTable",
    "DenseCoefficients",
    "coefficientsToMatrices",
    "countInvalidOrders",
    "readArtifactHeader",
    "readBinaryCoefficients",
    "readCoefficientFile",
    "readICGEMCoefficientFile",
    "readPGDACoefficientFile",
    "writeBinaryCoefficients",
]
