"""Subpackage orchestrating artifact generation, metadata emission & bundling."""

from __future__ import annotations

# Local Imports
from .pipeline import ArtifactResult, BatchSummary, generateArtifacts, generateModelArtifact

__all__ = ["ArtifactResult", "BatchSummary", "generateArtifacts", "generateModelArtifact"]
