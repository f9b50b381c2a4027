"""Parsers for text-based spherical harmonic gravity coefficient files.

Two formats are supported:

* ICGEM (``.gfc``): whitespace-delimited records tagged ``gfc``, e.g.::

    gfc    2    0  -4.84165143790815e-04  0.00000000000000e+00  7.48e-12  0.00e+00

* PGDA (``.tab``): comma-delimited records, e.g.::

    2,    1, 5.9031495993080755e-10,-4.9433617424482412e-11, 5.2065234840578776e-12, 5.2324542200737978e-12

Both parsers return a :data:`.CoefficientTable` mapping ``(degree, order)`` to ``(C, S)``.
"""

from __future__ import annotations

# Standard Library Imports
import re
from typing import TYPE_CHECKING

# Local Imports
from ..common.exceptions import CoefficientParseError
from ..common.labels import CoefficientFormat
from ..common.logger import artifactsLogDebug, artifactsLogError, artifactsLogWarning

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable, Iterator
    from os import PathLike
    from typing import TextIO

    # Third Party Imports
    from typing_extensions import TypeAlias

    # Local Imports
    from ..config.model_config import ModelConfig


CoefficientTable: TypeAlias = dict[tuple[int, int], tuple[float, float]]
"""Mapping of ``(degree, order)`` to ``(C, S)`` built while parsing a coefficient file."""

ICGEM_RECORD_TAG: str = "gfc"
"""``str``: prefix identifying ICGEM coefficient records, also matches ``gfct``."""

ICGEM_MIN_FIELDS: int = 5
"""``int``: tag, degree, order, C & S."""

PGDA_MIN_FIELDS: int = 4
"""``int``: degree, order, C & S."""

_FORTRAN_EXPONENT = re.compile(r"[dD]")


def _openCoefficientFile(filename: str | PathLike) -> TextIO:
    """Open a coefficient file for reading, logging a missing file.

    Args:
        filename (``str``): path to the coefficient file.

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames

    Returns:
        ``TextIO``: open text file handle, owned by the caller.
    """
    try:
        return open(filename, encoding="utf-8", errors="replace")  # noqa: SIM115
    except FileNotFoundError as err:
        artifactsLogError(f"Could not find coefficient file: {filename}")
        raise err


def _iterDataLines(coeff_file: TextIO, start_line: int) -> Iterator[tuple[int, str]]:
    """Yield stripped, non-empty, non-comment lines at or after `start_line`.

    Args:
        coeff_file (``TextIO``): open coefficient file.
        start_line (``int``): 1-based line number at which to start yielding lines.

    Yields:
        ``tuple``: 1-based line number & stripped line contents.
    """
    for line_number, line in enumerate(coeff_file, start=1):
        if line_number < start_line:
            continue

        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        yield line_number, stripped


def parseFortranFloat(value: str) -> float:
    """Parse a float that may use Fortran ``D`` exponent notation, e.g. ``1.0D-05``.

    Args:
        value (``str``): numeric literal.

    Returns:
        ``float``: parsed value.
    """
    return float(_FORTRAN_EXPONENT.sub("e", value))


def readICGEMCoefficientFile(filename: str | PathLike, start_line: int) -> CoefficientTable:
    """Parse an ICGEM format coefficient file (``.gfc``), used by Earth models.

    Lines beginning with ``gfc`` (including ``gfct``) are coefficient records with fields
    tag, degree, order, C, S followed by optional error terms. Records with fewer than five
    fields are ignored.

    Args:
        filename (``str``): path to the ``.gfc`` file.
        start_line (``int``): 1-based line number at which coefficient parsing begins.

    Raises:
        :class:`.CoefficientParseError`: a record has a malformed numeric field, meaning the file
            doesn't follow the ICGEM format.

    Returns:
        :data:`.CoefficientTable`: coefficients keyed by ``(degree, order)``.
    """
    coefficients: CoefficientTable = {}
    with _openCoefficientFile(filename) as coeff_file:
        for line_number, line in _iterDataLines(coeff_file, start_line):
            if not line.startswith(ICGEM_RECORD_TAG):
                continue

            parts = line.split()
            if len(parts) < ICGEM_MIN_FIELDS:
                continue

            try:
                degree, order = int(parts[1]), int(parts[2])
                cos_term = parseFortranFloat(parts[3])
                sin_term = parseFortranFloat(parts[4])
            except ValueError as err:
                artifactsLogError(f"Malformed ICGEM record at {filename}:{line_number}")
                raise CoefficientParseError(str(filename), line_number, str(err)) from err

            coefficients[(degree, order)] = (cos_term, sin_term)

    return coefficients


def readPGDACoefficientFile(filename: str | PathLike, start_line: int) -> CoefficientTable:
    """Parse a PGDA format coefficient file (``.tab``), used by Moon & Mars models.

    Each line holds degree, order, C, S followed by optional error terms, separated by commas.
    Lines that can't be parsed are skipped.

    Args:
        filename (``str``): path to the ``.tab`` file.
        start_line (``int``): 1-based line number at which coefficient parsing begins.

    Returns:
        :data:`.CoefficientTable`: coefficients keyed by ``(degree, order)``.
    """
    coefficients: CoefficientTable = {}
    skipped = 0
    with _openCoefficientFile(filename) as coeff_file:
        for line_number, line in _iterDataLines(coeff_file, start_line):
            parts = line.split(",")
            if len(parts) < PGDA_MIN_FIELDS:
                artifactsLogDebug(f"Skipping short PGDA line {filename}:{line_number}")
                skipped += 1
                continue

            try:
                degree, order = int(parts[0].strip()), int(parts[1].strip())
                cos_term = float(parts[2].strip())
                sin_term = float(parts[3].strip())
            except ValueError:
                artifactsLogDebug(f"Skipping unparsable PGDA line {filename}:{line_number}")
                skipped += 1
                continue

            coefficients[(degree, order)] = (cos_term, sin_term)

    if skipped:
        artifactsLogWarning(f"Skipped {skipped} unparsable line(s) in {filename}")

    return coefficients


COEFFICIENT_PARSERS: dict[CoefficientFormat, Callable[[str | PathLike, int], CoefficientTable]] = {
    CoefficientFormat.ICGEM: readICGEMCoefficientFile,
    CoefficientFormat.PGDA: readPGDACoefficientFile,
}
"""``dict``: parser function for each supported :class:`.CoefficientFormat`."""


def readCoefficientFile(model: ModelConfig, filename: str | PathLike) -> CoefficientTable:
    """Read coefficients for a specific model using the appropriate parser.

    Args:
        model (:class:`.ModelConfig`): metadata selecting the format & start line.
        filename (``str``): path to the coefficient file.

    Returns:
        :data:`.CoefficientTable`: coefficients keyed by ``(degree, order)``.
    """
    parser = COEFFICIENT_PARSERS[model.coeff_format]
    return parser(filename, model.coeff_start_line)
