"""Drive the parse, assemble & write pipeline for one or many gravity models."""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

# Local Imports
from ..coefficients.assembler import coefficientsToMatrices
from ..coefficients.binary import writeBinaryCoefficients
from ..coefficients.parsers import readCoefficientFile
from ..common.behavioral_config import BehavioralConfig
from ..common.exceptions import CoefficientAssemblyError, CoefficientParseError, ShapeError
from ..common.logger import artifactsLogError, artifactsLogInfo, artifactsLogWarning
from ..common.utilities import fileChecksum
from .bundle import createBundleArtifact
from .download import ensureCoefficientFile
from .metadata import writeMetadataFile, writeModelsIndex

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable
    from os import PathLike

    # Local Imports
    from ..config.model_config import ModelCatalog, ModelConfig


ALL_MODELS: str = "all"
"""``str``: model argument expanding to every model in the catalog."""

MODELS_INDEX_FILE: str = "models.json"
"""``str``: name of the JSON index of model identifiers written next to the artifacts."""

_BYTES_PER_MB: float = 1024.0**2


@dataclass(frozen=True)
class ArtifactResult:
    """Summary of a single generated model artifact."""

    model_id: str
    """``str``: identifier of the generated model."""

    l_max: int
    """``int``: maximum degree written to the artifact."""

    m_max: int
    """``int``: maximum order written to the artifact."""

    binfile: Path
    """``Path``: location of the binary artifact."""

    metafile: Path
    """``Path``: location of the metadata JSON file."""

    bin_size: int
    """``int``: size of the binary artifact in bytes."""

    sha256_bin: str
    """``str``: SHA-256 checksum of the binary artifact."""


@dataclass
class BatchSummary:
    """Summary of a batch of model artifact generations."""

    successful: int = 0
    """``int``: number of models generated."""

    failed: int = 0
    """``int``: number of models skipped or failed."""

    results: list[ArtifactResult] = field(default_factory=list)
    """``list``: results of the successful models."""

    tarball: Path | None = None
    """``Path``: bundle tarball, if one was created."""

    tarball_sha256: str = ""
    """``str``: SHA-256 checksum of the bundle tarball, if one was created."""


def generateModelArtifact(
    model: ModelConfig,
    coeff_file: str | PathLike,
    output_dir: str | PathLike,
    bin_dirname: str | None = None,
) -> ArtifactResult:
    """Generate the binary artifact & metadata for a single model.

    Steps:
        1. Parse the coefficient file
        2. Convert the coefficients to matrices
        3. Write the binary artifact
        4. Checksum the artifact & write its metadata

    Args:
        model (:class:`.ModelConfig`): metadata of the model, supplies GM & reference radius.
        coeff_file (``str``): local path of the text coefficient file.
        output_dir (``str``): root output directory; artifacts go in its bin sub-directory.
        bin_dirname (``str``, optional): name of the bin sub-directory. Defaults to the
            ``artifacts.BinDirectory`` config value.

    Returns:
        :class:`.ArtifactResult`: locations, dimensions & checksum of the artifact.
    """
    if bin_dirname is None:
        bin_dirname = BehavioralConfig.getConfig().artifacts.BinDirectory

    artifactsLogInfo(f"Generating artifact for: {model.name}")

    coefficients = readCoefficientFile(model, coeff_file)
    artifactsLogInfo(f"Read {len(coefficients)} coefficients from {coeff_file}")

    dense = coefficientsToMatrices(coefficients)
    artifactsLogInfo(f"Converted to matrices (l_max={dense.l_max}, m_max={dense.m_max})")
    if (dense.l_max, dense.m_max) != (model.l_max, model.m_max):
        artifactsLogWarning(
            f"{model.name} advertises degree/order ({model.l_max}, {model.m_max}) "
            f"but file holds ({dense.l_max}, {dense.m_max})",
        )

    bin_dir = Path(output_dir) / bin_dirname
    binfile = writeBinaryCoefficients(
        bin_dir / f"{model.name}.bin",
        dense.l_max,
        dense.m_max,
        dense.c,
        dense.s,
        model.gravitational_parameter,
        model.reference_radius,
    )
    bin_size = binfile.stat().st_size
    artifactsLogInfo(f"Wrote binary file {binfile} ({bin_size / _BYTES_PER_MB:.2f} MB)")

    sha256_bin = fileChecksum(binfile)
    metafile = bin_dir / f"{model.name}_metadata.json"
    writeMetadataFile(metafile, model, bin_sha256=sha256_bin)
    artifactsLogInfo(f"Wrote metadata {metafile}, binary SHA256: {sha256_bin}")

    return ArtifactResult(
        model_id=model.name,
        l_max=dense.l_max,
        m_max=dense.m_max,
        binfile=binfile,
        metafile=metafile,
        bin_size=bin_size,
        sha256_bin=sha256_bin,
    )


def resolveModelIDs(model_ids: Iterable[str], catalog: ModelCatalog) -> list[str]:
    """Expand ``"all"`` & validate the requested model identifiers.

    Args:
        model_ids (``Iterable``): requested identifiers, possibly including ``"all"``.
        catalog (:class:`.ModelCatalog`): known models.

    Raises:
        :class:`.ModelConfigurationError`: on the first unknown identifier.

    Returns:
        ``list``: sorted, de-duplicated model identifiers.
    """
    resolved = set()
    for model_id in model_ids:
        if model_id == ALL_MODELS:
            resolved.update(catalog.modelIDs())
            continue
        # Raises for unknown identifiers
        catalog.getModel(model_id)
        resolved.add(model_id)

    return sorted(resolved)


def bundleArtifacts(
    bin_dir: Path,
    tarball_dir: Path,
    catalog: ModelCatalog,
    bundle_name: str,
) -> tuple[Path, str]:
    """Write the models index & bundle `bin_dir` into a tarball.

    Returns:
        ``tuple``: tarball path & its SHA-256 checksum.
    """
    models_index = bin_dir / MODELS_INDEX_FILE
    writeModelsIndex(models_index, catalog)
    artifactsLogInfo(f"Models index: {models_index}")

    tarball = createBundleArtifact(bin_dir, tarball_dir, bundle_name=bundle_name)
    tar_size = tarball.stat().st_size
    total_bin_size = sum(path.stat().st_size for path in bin_dir.iterdir() if path.is_file())
    compression = (1 - tar_size / total_bin_size) * 100 if total_bin_size > 0 else 0.0
    tarball_sha256 = fileChecksum(tarball)

    artifactsLogInfo(f"Bundle tarball: {tarball} ({tar_size / _BYTES_PER_MB:.2f} MB)")
    artifactsLogInfo(f"Compression: {compression:.1f}%, SHA256: {tarball_sha256}")

    return tarball, tarball_sha256


def generateArtifacts(
    model_ids: Iterable[str],
    catalog: ModelCatalog,
    output_dir: str | PathLike | None = None,
    coeff_dir: str | PathLike | None = None,
    allow_download: bool | None = None,
    bundle: bool = True,
) -> BatchSummary:
    """Generate artifacts for several models, then index & bundle them.

    Each model's pipeline is independent: a model whose coefficient file is unavailable or
    fails to convert is logged & counted as failed without stopping the batch.

    Args:
        model_ids (``Iterable``): model identifiers, ``"all"`` expands to the whole catalog.
        catalog (:class:`.ModelCatalog`): metadata for every known model.
        output_dir (``str``, optional): root output directory. Defaults to the
            ``artifacts.OutputDirectory`` config value.
        coeff_dir (``str``, optional): directory of text coefficient files. Defaults to the
            ``artifacts.CoefficientDirectory`` config value.
        allow_download (``bool``, optional): whether missing coefficient files are downloaded.
            Defaults to the ``download.AllowDownload`` config value.
        bundle (``bool``, optional): whether to write the models index & bundle tarball.

    Raises:
        :class:`.ModelConfigurationError`: if any requested model is unknown.

    Returns:
        :class:`.BatchSummary`: counts, per-model results & bundle location.
    """
    config = BehavioralConfig.getConfig()
    if output_dir is None:
        output_dir = config.artifacts.OutputDirectory
    if coeff_dir is None:
        coeff_dir = config.artifacts.CoefficientDirectory
    if allow_download is None:
        allow_download = config.download.AllowDownload

    output_dir = Path(output_dir)
    coeff_dir = Path(coeff_dir)
    summary = BatchSummary()

    for model_id in resolveModelIDs(model_ids, catalog):
        model = catalog.getModel(model_id)
        coeff_file = coeff_dir / model.coeff_filename

        if allow_download:
            available = ensureCoefficientFile(model, coeff_file, timeout=config.download.Timeout)
        else:
            available = coeff_file.is_file()
        if not available:
            artifactsLogError(f"Skipping {model_id} - coefficient file unavailable: {coeff_file}")
            summary.failed += 1
            continue

        try:
            result = generateModelArtifact(model, coeff_file, output_dir)
        except (CoefficientParseError, CoefficientAssemblyError, ShapeError, OSError, ValueError) as err:
            artifactsLogError(f"Error generating {model_id}: {err}")
            summary.failed += 1
            continue

        summary.results.append(result)
        summary.successful += 1

    if bundle and summary.successful > 0:
        summary.tarball, summary.tarball_sha256 = bundleArtifacts(
            output_dir / config.artifacts.BinDirectory,
            output_dir / config.artifacts.TarballDirectory,
            catalog,
            config.artifacts.BundleName,
        )

    artifactsLogInfo(f"Batch complete. Successful: {summary.successful}, Failed/Skipped: {summary.failed}")
    return summary
