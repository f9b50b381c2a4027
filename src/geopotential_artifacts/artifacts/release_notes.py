"""Generate Markdown release notes from model metadata."""

from __future__ import annotations

# Standard Library Imports
from collections import defaultdict
from typing import TYPE_CHECKING

# Local Imports
from ..common.logger import artifactsLogInfo

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from os import PathLike

    # Local Imports
    from ..config.model_config import ModelCatalog, ModelConfig


BINARY_FORMAT_NOTES: str = """## Binary Format

Each artifact includes:
- Int32: l_max (maximum degree)
- Int32: m_max (maximum order)
- Float64: Gravitational parameter (GM)
- Float64: Reference radius
- Float64[(l_max+1)*(m_max+1)]: C coefficients in column-major order
- Float64[(l_max+1)*(m_max+1)]: S coefficients in column-major order

All values are little-endian. Coefficients are stored in column-major order for efficient loading with mmap.
"""


def _groupByBody(catalog: ModelCatalog) -> dict[str, list[ModelConfig]]:
    """Group models by central body, keeping catalog order within each body."""
    grouped = defaultdict(list)
    for model_id in catalog:
        model = catalog.getModel(model_id)
        grouped[model.body or "Other"].append(model)
    return grouped


def generateReleaseNotes(catalog: ModelCatalog, output_file: str | PathLike | None = None) -> str:
    """Generate release notes listing every model, its citation & the binary format.

    Args:
        catalog (:class:`.ModelCatalog`): models included in the release.
        output_file (``str``, optional): if given, the notes are also written here.

    Returns:
        ``str``: Markdown release notes.
    """
    grouped = _groupByBody(catalog)
    bodies = ", ".join(
        f"{body} ({', '.join(model.name for model in models)})" for body, models in grouped.items()
    )
    lines = [
        f"Geopotential coefficient artifacts for {bodies}.",
        "",
        "## Models & Citations",
        "",
    ]
    for body, models in grouped.items():
        heading = "Model" if len(models) == 1 else "Models"
        lines.append(f"**{body} {heading}:**")
        lines.append("")
        for model in models:
            lines.append(f"- **{model.name}** (degree/order {model.l_max})")
            lines.append(f"  {model.citation.strip()}")
            lines.append("")

    notes = "\n".join(lines) + "\n" + BINARY_FORMAT_NOTES

    if output_file is not None:
        with open(output_file, "w", encoding="utf-8") as notes_file:
            notes_file.write(notes)
        artifactsLogInfo(f"Release notes written to: {output_file}")

    return notes
