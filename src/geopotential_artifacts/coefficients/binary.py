"""Read & write the fixed-layout binary geopotential artifact.

All values are little-endian:

======  ===========================  ============================================
Offset  Size                         Field
======  ===========================  ============================================
0       4                            ``l_max`` (int32)
4       4                            ``m_max`` (int32)
8       8                            gravitational parameter, GM (float64)
16      8                            reference radius (float64)
24      (l_max+1)(m_max+1) x 8       C coefficients, column-major (float64)
24+N    (l_max+1)(m_max+1) x 8       S coefficients, column-major (float64)
======  ===========================  ============================================

Column-major means the order index varies slowest: all degrees for ``m = 0`` come first, then
all degrees for ``m = 1``, and so on. Cell ``(l, m)`` therefore sits at position ``(l+1, m+1)``
of a 1-based, column-major matrix.
"""

from __future__ import annotations

# Standard Library Imports
import errno
import os
from contextlib import contextmanager
from dataclasses import dataclass
from numbers import Integral
from pathlib import Path
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import array, asarray, dtype, float64, frombuffer, fromfile, memmap

# Local Imports
from ..common.exceptions import ArtifactFormatError, ShapeError, TruncatedArtifactError
from ..common.logger import artifactsLogDebug, artifactsLogError
from .assembler import DenseCoefficients

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterator
    from os import PathLike
    from typing import BinaryIO

    # Third Party Imports
    from numpy import ndarray


HEADER_DTYPE = dtype(
    [
        ("l_max", "<i4"),
        ("m_max", "<i4"),
        ("gm", "<f8"),
        ("reference_radius", "<f8"),
    ],
)
"""``dtype``: packed little-endian artifact header."""

HEADER_SIZE: int = HEADER_DTYPE.itemsize
"""``int``: size of the artifact header in bytes, 24."""

PAYLOAD_DTYPE = dtype("<f8")
"""``dtype``: little-endian float64 used for both coefficient matrices."""

INT32_MAX: int = 2**31 - 1
"""``int``: largest degree or order representable in the header."""


@dataclass(frozen=True)
class ArtifactHeader:
    """Header of a binary geopotential artifact."""

    l_max: int
    """``int``: maximum degree."""

    m_max: int
    """``int``: maximum order."""

    gm: float
    """``float``: gravitational parameter of the central body."""

    reference_radius: float
    """``float``: reference radius of the gravity model."""

    @property
    def shape(self) -> tuple[int, int]:
        """``tuple``: shape of each coefficient matrix."""
        return (self.l_max + 1, self.m_max + 1)

    @property
    def coefficient_count(self) -> int:
        """``int``: number of values in each coefficient matrix."""
        return (self.l_max + 1) * (self.m_max + 1)


def artifactSize(l_max: int, m_max: int) -> int:
    """Return the exact size in bytes of an artifact with the given dimensions."""
    return HEADER_SIZE + 2 * (l_max + 1) * (m_max + 1) * PAYLOAD_DTYPE.itemsize


def _preallocate(artifact_file: BinaryIO, size: int) -> None:
    """Grow `artifact_file` to exactly `size` bytes, reserving disk blocks where supported."""
    artifact_file.truncate(size)
    if not hasattr(os, "posix_fallocate"):
        return

    try:
        os.posix_fallocate(artifact_file.fileno(), 0, size)
    except OSError as err:
        # Filesystems without fallocate support keep the truncated size
        if err.errno not in (errno.EINVAL, errno.EOPNOTSUPP):
            raise
        artifactsLogDebug(f"posix_fallocate unsupported for {artifact_file.name}: {err}")


@contextmanager
def _openArtifactFile(binfile: Path, size: int) -> Iterator[BinaryIO]:
    """Create & preallocate `binfile`, syncing it to disk & closing it on every exit path.

    Args:
        binfile (``Path``): artifact destination.
        size (``int``): exact final size of the artifact in bytes.

    Yields:
        ``BinaryIO``: open, preallocated artifact file.
    """
    with open(binfile, "w+b") as artifact_file:
        try:
            _preallocate(artifact_file, size)
            yield artifact_file
        finally:
            artifact_file.flush()
            os.fsync(artifact_file.fileno())


def _writePayload(artifact_file: BinaryIO, c: ndarray, s: ndarray) -> None:
    """Copy both matrices, column-major, into the mapped payload region of an open artifact.

    The map is flushed & released before returning, including when the copy fails.

    Args:
        artifact_file (``BinaryIO``): open, preallocated artifact file.
        c (``ndarray``): cosine coefficients.
        s (``ndarray``): sine coefficients, same shape as `c`.
    """
    count = c.size
    payload = memmap(artifact_file, dtype=PAYLOAD_DTYPE, mode="r+", offset=HEADER_SIZE, shape=(2 * count,))
    try:
        payload[:count] = c.ravel(order="F")
        payload[count:] = s.ravel(order="F")
        payload.flush()
    finally:
        # This is the only reference, dropping it unmaps the region
        del payload


def _validateDimension(label: str, value: int) -> int:
    """Check a header dimension is a non-negative integer that fits in an int32."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        msg = f"{label} must be an integer, not {value!r}"
        raise ValueError(msg)
    value = int(value)
    if not 0 <= value <= INT32_MAX:
        msg = f"{label} must be in [0, {INT32_MAX}], not {value}"
        raise ValueError(msg)
    return value


def writeBinaryCoefficients(
    binfile: str | PathLike,
    l_max: int,
    m_max: int,
    c: ndarray,
    s: ndarray,
    gm: float,
    ref_radius: float,
) -> Path:
    """Write coefficient matrices to a binary artifact using a memory map.

    The file is preallocated to its final size, the header is written, then both matrices are
    copied into the mapped payload region in column-major order and synced to disk.

    Args:
        binfile (``str``): artifact destination, parent directories are created.
        l_max (``int``): maximum degree.
        m_max (``int``): maximum order.
        c (``ndarray``): (l_max+1 x m_max+1) cosine coefficients.
        s (``ndarray``): (l_max+1 x m_max+1) sine coefficients.
        gm (``float``): gravitational parameter, positive.
        ref_radius (``float``): reference radius, positive.

    Raises:
        ``ValueError``: if dimensions aren't non-negative integers or the scalars aren't positive.
        :class:`.ShapeError`: if either matrix doesn't match the header dimensions.

    Returns:
        ``Path``: path of the written artifact.
    """
    l_max = _validateDimension("l_max", l_max)
    m_max = _validateDimension("m_max", m_max)
    if not gm > 0.0:
        msg = f"Gravitational parameter must be positive, not {gm}"
        raise ValueError(msg)
    if not ref_radius > 0.0:
        msg = f"Reference radius must be positive, not {ref_radius}"
        raise ValueError(msg)

    c = asarray(c, dtype=float64)
    s = asarray(s, dtype=float64)
    expected_shape = (l_max + 1, m_max + 1)
    for label, matrix in (("C", c), ("S", s)):
        if matrix.shape != expected_shape:
            msg = f"{label} matrix has shape {matrix.shape}, expected {expected_shape}"
            artifactsLogError(msg)
            raise ShapeError(msg)

    binfile = Path(binfile)
    binfile.parent.mkdir(parents=True, exist_ok=True)

    header = array([(l_max, m_max, gm, ref_radius)], dtype=HEADER_DTYPE)

    with _openArtifactFile(binfile, artifactSize(l_max, m_max)) as artifact_file:
        artifact_file.write(header.tobytes())
        _writePayload(artifact_file, c, s)

    return binfile


def _unpackHeader(raw_header: bytes, binfile: str | PathLike) -> ArtifactHeader:
    """Decode & sanity check raw header bytes."""
    if len(raw_header) < HEADER_SIZE:
        msg = f"Artifact is shorter than its {HEADER_SIZE} byte header: {binfile}"
        artifactsLogError(msg)
        raise TruncatedArtifactError(msg)

    record = frombuffer(raw_header, dtype=HEADER_DTYPE, count=1)[0]
    header = ArtifactHeader(
        l_max=int(record["l_max"]),
        m_max=int(record["m_max"]),
        gm=float(record["gm"]),
        reference_radius=float(record["reference_radius"]),
    )
    if header.l_max < 0 or header.m_max < 0:
        msg = f"Artifact declares negative dimensions ({header.l_max}, {header.m_max}): {binfile}"
        artifactsLogError(msg)
        raise ArtifactFormatError(msg)

    return header


def readArtifactHeader(binfile: str | PathLike) -> ArtifactHeader:
    """Read only the header of a binary artifact.

    Args:
        binfile (``str``): path to the artifact.

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames
        :class:`.TruncatedArtifactError`: if the file is shorter than the header.
        :class:`.ArtifactFormatError`: if the header declares negative dimensions.

    Returns:
        :class:`.ArtifactHeader`: decoded header.
    """
    try:
        with open(binfile, "rb") as artifact_file:
            raw_header = artifact_file.read(HEADER_SIZE)
    except FileNotFoundError as err:
        artifactsLogError(f"Could not find artifact file: {binfile}")
        raise err

    return _unpackHeader(raw_header, binfile)


def readBinaryCoefficients(binfile: str | PathLike) -> tuple[ArtifactHeader, DenseCoefficients]:
    """Read a binary artifact written by :func:`.writeBinaryCoefficients`.

    Args:
        binfile (``str``): path to the artifact.

    Raises:
        :class:`.TruncatedArtifactError`: if the file is shorter than its header declares.

    Returns:
        ``tuple``: decoded :class:`.ArtifactHeader` & in-memory :class:`.DenseCoefficients`.
    """
    header = readArtifactHeader(binfile)
    expected_size = artifactSize(header.l_max, header.m_max)
    actual_size = os.path.getsize(binfile)
    if actual_size < expected_size:
        msg = f"Artifact is {actual_size} bytes, header declares {expected_size}: {binfile}"
        artifactsLogError(msg)
        raise TruncatedArtifactError(msg)

    count = header.coefficient_count
    payload = fromfile(binfile, dtype=PAYLOAD_DTYPE, count=2 * count, offset=HEADER_SIZE)
    cos_terms = payload[:count].reshape(header.shape, order="F").astype(float64)
    sin_terms = payload[count:].reshape(header.shape, order="F").astype(float64)

    return header, DenseCoefficients(l_max=header.l_max, m_max=header.m_max, c=cos_terms, s=sin_terms)
