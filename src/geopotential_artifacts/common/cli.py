"""Define the command line interface for the geopotential artifact generator."""

from __future__ import annotations

# Standard Library Imports
import argparse
import os.path

# Local Imports
from .logger import artifactsLogError


def fileChecker(filepath):
    """Checks for valid filepaths passed to the CLI parser.

    Args:
        filepath (``str``): filepath given to CLI parser.

    Raises:
        ValueError: if the file does not exist

    Returns:
        ``str``: fully validated, absolute path to the file
    """
    filepath = os.path.abspath(os.path.realpath(os.path.normpath(filepath)))
    if not os.path.isfile(filepath):
        artifactsLogError("Bad filepath given to CLI")
        raise ValueError(filepath)
    return filepath


def getCommandLineParser():
    """Create parser for command line arguments.

    Returns:
        ``argparse.ArgumentParser``: valid parser object
    """
    parser = argparse.ArgumentParser(description="Geopotential Artifact Generator Command Line Interface")
    path_group = parser.add_argument_group("Paths")
    output_group = parser.add_argument_group("Outputs")

    parser.add_argument(
        "model_ids",
        metavar="MODEL_ID",
        nargs="+",
        type=str,
        help="Model identifier(s) to generate, or 'all' for every known model",
    )

    path_group.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        metavar="OUTPUT_DIR",
        default=None,
        type=str,
        help="Root directory for generated artifacts. DEFAULT: config value",
    )

    path_group.add_argument(
        "-c",
        "--coeff-dir",
        dest="coeff_dir",
        metavar="COEFF_DIR",
        default=None,
        type=str,
        help="Directory holding (or receiving) text coefficient files. DEFAULT: config value",
    )

    path_group.add_argument(
        "-m",
        "--metadata",
        dest="metadata_file",
        metavar="METADATA_FILE",
        default=None,
        type=fileChecker,
        help="Path to a JSON model metadata file. DEFAULT: packaged metadata",
    )

    parser.add_argument(
        "--no-download",
        dest="allow_download",
        action="store_false",
        default=True,
        help="Never download missing coefficient files",
    )

    output_group.add_argument(
        "--no-bundle",
        dest="bundle",
        action="store_false",
        default=True,
        help="Skip writing the models index & bundle tarball",
    )

    output_group.add_argument(
        "--release-notes",
        dest="release_notes",
        metavar="NOTES_FILE",
        default=None,
        type=str,
        help="Also write Markdown release notes to this path",
    )

    return parser
