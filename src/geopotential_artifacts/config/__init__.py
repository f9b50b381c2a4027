"""Subpackage defining how gravity field models are described & looked up."""

from __future__ import annotations

# Local Imports
from .model_config import ModelCatalog, ModelConfig, loadDefaultCatalog

__all__ = ["ModelCatalog", "ModelConfig", "loadDefaultCatalog"]
