"""Bundle generated artifacts into a single compressed tarball."""

from __future__ import annotations

# Standard Library Imports
import tarfile
from pathlib import Path
from typing import TYPE_CHECKING

# Local Imports
from ..common.logger import artifactsLogError

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from os import PathLike


BUNDLE_TOP_DIRECTORY: str = "bin"
"""``str``: name of the single top-level directory inside the bundle."""


def createBundleArtifact(
    bin_dir: str | PathLike,
    output_dir: str | PathLike,
    bundle_name: str = "geopotential_bins",
) -> Path:
    """Create a gzip-compressed tarball containing every regular file in `bin_dir`.

    Files are stored under a ``bin/`` directory inside the tarball regardless of the name of
    `bin_dir`; sub-directories of `bin_dir` are not included.

    Args:
        bin_dir (``str``): directory holding the binary artifacts & their metadata.
        output_dir (``str``): directory the tarball is written to, created if missing.
        bundle_name (``str``, optional): tarball name without extension.

    Raises:
        ``FileNotFoundError``: if `bin_dir` doesn't exist.

    Returns:
        ``Path``: path of the ``.tar.gz`` bundle.
    """
    bin_dir = Path(bin_dir)
    if not bin_dir.is_dir():
        msg = f"Bin directory not found: {bin_dir}"
        artifactsLogError(msg)
        raise FileNotFoundError(msg)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    tarball = output_dir / f"{bundle_name}.tar.gz"
    with tarfile.open(tarball, "w:gz") as bundle:
        bundle.add(bin_dir, arcname=BUNDLE_TOP_DIRECTORY, recursive=False)
        for path in sorted(bin_dir.iterdir()):
            if not path.is_file():
                continue
            bundle.add(path, arcname=f"{BUNDLE_TOP_DIRECTORY}/{path.name}")

    return tarball
