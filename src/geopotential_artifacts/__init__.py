"""Main Module Documentation.

The top-level module is documented below, which mainly serves as a command line entry point for
converting text spherical harmonic gravity coefficient files into binary artifacts.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable

    # Local Imports
    from .artifacts.pipeline import BatchSummary

__version__ = "1.0.0"


def runGenerator(
    model_ids: Iterable[str],
    output_dir: str | None = None,
    coeff_dir: str | None = None,
    metadata_file: str | None = None,
    allow_download: bool = True,
    bundle: bool = True,
    release_notes: str | None = None,
) -> BatchSummary:
    """Generate binary artifacts for the requested models.

    Args:
        model_ids (``Iterable``): model identifiers, ``"all"`` selects every known model.
        output_dir (``str``, optional): root output directory. Defaults to ``None``, which uses
            the config value.
        coeff_dir (``str``, optional): directory of text coefficient files. Defaults to ``None``,
            which uses the config value.
        metadata_file (``str``, optional): JSON model metadata file. Defaults to ``None``, which
            uses the packaged metadata.
        allow_download (``bool``, optional): whether missing coefficient files may be downloaded,
            only disables downloads enabled in the config. Defaults to ``True``.
        bundle (``bool``, optional): whether to write the models index & bundle tarball.
        release_notes (``str``, optional): if given, write Markdown release notes here.

    Returns:
        :class:`.BatchSummary`: counts, per-model results & bundle location.
    """
    # Local Imports
    from .artifacts.pipeline import generateArtifacts
    from .artifacts.release_notes import generateReleaseNotes
    from .common.behavioral_config import BehavioralConfig
    from .common.logger import ROOT_LOGGER_NAME, Logger
    from .config.model_config import ModelCatalog, loadDefaultCatalog

    logger = Logger(ROOT_LOGGER_NAME, path=BehavioralConfig.getConfig().logging.OutputLocation)

    if metadata_file:
        catalog = ModelCatalog.fromJSONFile(metadata_file)
    else:
        catalog = loadDefaultCatalog()

    summary = generateArtifacts(
        model_ids,
        catalog,
        output_dir=output_dir,
        coeff_dir=coeff_dir,
        allow_download=None if allow_download else False,
        bundle=bundle,
    )

    if release_notes:
        generateReleaseNotes(catalog, output_file=release_notes)

    logger.info("Artifact generation complete")
    return summary


def main() -> None:
    """Geopotential artifact generator main entry point.

    This is the function that the :command:`geopotential-artifacts` command points to. See
    :mod:`.cli` for details on what command line options are available.

    Raises:
        ``SystemExit``: with a non-zero status if no requested model was generated.
    """
    # Local Imports
    from .common.cli import getCommandLineParser
    from .common.logger import artifactsLogCritical

    parser = getCommandLineParser()
    cli_args = parser.parse_args()

    summary = runGenerator(
        cli_args.model_ids,
        output_dir=cli_args.output_dir,
        coeff_dir=cli_args.coeff_dir,
        metadata_file=cli_args.metadata_file,
        allow_download=cli_args.allow_download,
        bundle=cli_args.bundle,
        release_notes=cli_args.release_notes,
    )

    if summary.successful == 0:
        artifactsLogCritical(f"No artifacts generated, {summary.failed} model(s) failed")
        raise SystemExit(1)
