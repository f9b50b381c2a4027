"""Write JSON documents describing generated artifacts."""

from __future__ import annotations

# Standard Library Imports
from datetime import datetime
from typing import TYPE_CHECKING

# Local Imports
from ..common.utilities import saveJSONFile

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from os import PathLike
    from typing import Any

    # Local Imports
    from ..config.model_config import ModelCatalog, ModelConfig


def buildMetadata(model: ModelConfig, bin_sha256: str = "", generated: datetime | None = None) -> dict[str, Any]:
    """Build the metadata document for a single model's artifact.

    Args:
        model (:class:`.ModelConfig`): metadata of the model.
        bin_sha256 (``str``, optional): checksum of the binary artifact, omitted if empty.
        generated (``datetime``, optional): generation timestamp. Defaults to now.

    Returns:
        ``dict``: JSON-compatible metadata document.
    """
    if generated is None:
        generated = datetime.now()

    metadata = {
        "id": model.name,
        "name": model.name,
        "body": model.body,
        "full_name": model.full_name,
        "provider": model.provider,
        "distributor": model.distributor,
        "license": model.license,
        "source_url": model.source_url,
        "gravitational_parameter": {
            "value": model.gravitational_parameter,
            "units": model.units,
        },
        "reference_radius": {
            "value": model.reference_radius,
            "units": model.length_unit,
        },
        "degree": {
            "l_max": model.l_max,
            "m_max": model.m_max,
        },
        "normalized": model.normalized,
        "data_sources": {
            "altimetry": model.altimetry_data,
            "ground_measurements": model.ground_data,
            "satellite_tracking": model.satellite_data,
        },
        "description": model.description,
        "citation": model.citation,
    }

    if bin_sha256:
        metadata["binary_sha256"] = bin_sha256

    if model.note:
        metadata["note"] = model.note

    metadata["generated"] = generated.isoformat()

    return metadata


def writeMetadataFile(metafile: str | PathLike, model: ModelConfig, bin_sha256: str = "") -> str | PathLike:
    """Write the metadata JSON file for a model artifact.

    Args:
        metafile (``str``): destination of the JSON file.
        model (:class:`.ModelConfig`): metadata of the model.
        bin_sha256 (``str``, optional): checksum of the binary artifact.

    Returns:
        ``str``: path of the written file.
    """
    saveJSONFile(metafile, buildMetadata(model, bin_sha256=bin_sha256))
    return metafile


def writeModelsIndex(output_file: str | PathLike, catalog: ModelCatalog) -> str | PathLike:
    """Write a JSON array listing the available model identifiers, sorted."""
    saveJSONFile(output_file, catalog.modelIDs())
    return output_file
