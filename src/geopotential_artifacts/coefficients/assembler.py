"""Assemble sparse ``(degree, order)`` coefficient tables into dense C/S matrices."""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import float64, zeros

# Local Imports
from ..common.exceptions import CoefficientAssemblyError
from ..common.logger import artifactsLogWarning

# Type Checking Imports
if TYPE_CHECKING:
    # Third Party Imports
    from numpy import ndarray

    # Local Imports
    from .parsers import CoefficientTable


@dataclass(frozen=True)
class DenseCoefficients:
    """Dense cosine & sine coefficient matrices.

    Cell ``(l, m)`` is stored at ``c[l, m]``/``s[l, m]``, i.e. position ``(l+1, m+1)`` in 1-based
    addressing. Cells never present in the source, including ``m > l`` cells, are zero.
    """

    l_max: int
    """``int``: maximum degree over all entries."""

    m_max: int
    """``int``: maximum order over all entries."""

    c: ndarray
    """``ndarray``: (l_max+1 x m_max+1) cosine coefficients."""

    s: ndarray
    """``ndarray``: (l_max+1 x m_max+1) sine coefficients."""

    @property
    def shape(self) -> tuple[int, int]:
        """``tuple``: shape of both coefficient matrices."""
        return (self.l_max + 1, self.m_max + 1)


def countInvalidOrders(coefficients: CoefficientTable) -> int:
    """Count entries whose order exceeds their degree.

    A large count usually means the wrong parser was selected for the file.

    Args:
        coefficients (:data:`.CoefficientTable`): parsed coefficients.

    Returns:
        ``int``: number of keys with ``m > l``.
    """
    return sum(1 for degree, order in coefficients if order > degree)


def coefficientsToMatrices(coefficients: CoefficientTable) -> DenseCoefficients:
    """Convert a coefficient table to dense C & S matrices.

    The matrix extent uses the maximum degree & maximum order over all keys, computed
    independently of one another.

    Args:
        coefficients (:data:`.CoefficientTable`): parsed coefficients keyed by ``(degree, order)``.

    Raises:
        :class:`.CoefficientAssemblyError`: if `coefficients` is empty.

    Returns:
        :class:`.DenseCoefficients`: freshly allocated matrices owned by the caller.
    """
    if not coefficients:
        raise CoefficientAssemblyError("Cannot assemble matrices from an empty coefficient table")

    if min(min(key) for key in coefficients) < 0:
        raise CoefficientAssemblyError("Coefficient degree & order must be non-negative")

    l_max = max(degree for degree, _ in coefficients)
    m_max = max(order for _, order in coefficients)

    # [NOTE]: m > l entries are kept as-is; only warn about them.
    if invalid := countInvalidOrders(coefficients):
        artifactsLogWarning(f"{invalid} coefficient(s) have order greater than degree")

    cos_terms = zeros((l_max + 1, m_max + 1), dtype=float64)
    sin_terms = zeros((l_max + 1, m_max + 1), dtype=float64)
    for (degree, order), (cos_term, sin_term) in coefficients.items():
        cos_terms[degree, order] = cos_term
        sin_terms[degree, order] = sin_term

    return DenseCoefficients(l_max=l_max, m_max=m_max, c=cos_terms, s=sin_terms)
