"""Submodule defining per-model metadata used to build geopotential artifacts."""

from __future__ import annotations

# Standard Library Imports
from importlib import resources
from typing import TYPE_CHECKING

# Third Party Imports
from pydantic import BaseModel, Field, ValidationError

# Local Imports
from ..common.exceptions import ModelConfigurationError
from ..common.labels import CoefficientFormat
from ..common.logger import artifactsLogError
from ..common.utilities import loadJSONFile

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterator, Mapping
    from os import PathLike
    from typing import Any


MODEL_METADATA_MODULE: str = "geopotential_artifacts.config"
"""``str``: defines the packaged model metadata module location."""

DEFAULT_METADATA_FILE: str = "model_metadata.json"
"""``str``: name of the packaged model metadata file."""


class ModelConfig(BaseModel):
    """Configuration section describing a single gravity field model."""

    name: str
    """``str``: short identifier used by consumers, e.g. ``"EGM2008"``."""

    full_name: str = ""
    """``str``: full descriptive name of the model."""

    body: str = ""
    """``str``: central body the model describes."""

    source_url: str = ""
    """``str``: URL the coefficient file is downloaded from."""

    distributor: str = ""
    """``str``: organization distributing the coefficient file."""

    provider: str = ""
    """``str``: original data provider."""

    license: str = ""
    """``str``: license or usage terms."""

    citation: str = ""
    """``str``: reference to cite when using the model."""

    description: str = ""
    """``str``: detailed description of the model."""

    note: str = ""
    """``str``: additional notes or caveats, may be empty."""

    coeff_filename: str
    """``str``: file name of the text coefficient file, **required**."""

    coeff_start_line: int = Field(ge=1)
    """``int``: 1-based line number at which coefficient parsing begins, **required**."""

    coeff_format: CoefficientFormat
    """:class:`.CoefficientFormat`: text format of the coefficient file, **required**."""

    gravitational_parameter: float = Field(gt=0.0)
    """``float``: gravitational parameter (GM) written to the artifact header, **required**."""

    reference_radius: float = Field(gt=0.0)
    """``float``: reference radius written to the artifact header, **required**."""

    units: str = Field(default="m s", pattern=r"^\s*\S")
    """``str``: unit system, e.g. ``"m s"`` for meters & seconds, must not be blank."""

    l_max: int = Field(default=0, ge=0)
    """``int``: advertised maximum degree of the model."""

    m_max: int = Field(default=0, ge=0)
    """``int``: advertised maximum order of the model."""

    normalized: bool = True
    """``bool``: whether the coefficients are fully normalized."""

    altimetry_data: bool = False
    """``bool``: whether the model includes altimetry data."""

    ground_data: bool = False
    """``bool``: whether the model includes ground-based measurements."""

    satellite_data: bool = False
    """``bool``: whether the model includes satellite tracking data."""

    @property
    def length_unit(self) -> str:
        """``str``: unit of length, the first token of :attr:`.units`."""
        return self.units.split()[0]


class ModelCatalog:
    """Read-only lookup table of model identifiers to their :class:`.ModelConfig`.

    The catalog is passed explicitly to parsing & writing functions so tests can substitute
    fixtures without touching shared state.
    """

    def __init__(self, models: Mapping[str, ModelConfig]):
        """Build a catalog from already-validated model configs.

        Args:
            models (``Mapping``): model identifier to :class:`.ModelConfig`.
        """
        self._models: dict[str, ModelConfig] = dict(models)

    def __getitem__(self, model_id: str) -> ModelConfig:
        """Return the :class:`.ModelConfig` for `model_id`, see :meth:`.getModel`."""
        return self.getModel(model_id)

    def __iter__(self) -> Iterator[str]:
        """Iterate over model identifiers in sorted order."""
        return iter(self.modelIDs())

    def __len__(self) -> int:
        """``int``: number of models in the catalog."""
        return len(self._models)

    def __contains__(self, model_id: object) -> bool:
        """``bool``: whether `model_id` is a known model identifier."""
        return model_id in self._models

    def getModel(self, model_id: str) -> ModelConfig:
        """Look up a single model's configuration.

        Args:
            model_id (``str``): model identifier, e.g. ``"EGM96"``.

        Raises:
            :class:`.ModelConfigurationError`: if `model_id` is not in the catalog.

        Returns:
            :class:`.ModelConfig`: the model's metadata.
        """
        try:
            return self._models[model_id]
        except KeyError:
            msg = f"Unknown model ID, expected one of {self.modelIDs()}"
            artifactsLogError(f"{model_id!r}: {msg}")
            raise ModelConfigurationError(model_id, msg) from None

    def modelIDs(self) -> list[str]:
        """``list``: sorted model identifiers."""
        return sorted(self._models)

    @classmethod
    def fromDict(cls, raw_models: Mapping[str, Mapping[str, Any]]) -> ModelCatalog:
        """Validate raw metadata dictionaries & build a catalog.

        Args:
            raw_models (``Mapping``): model identifier to raw metadata dictionary.

        Raises:
            :class:`.ModelConfigurationError`: if any model has missing or invalid fields.

        Returns:
            :class:`.ModelCatalog`: validated catalog.
        """
        models = {}
        for model_id, raw_model in raw_models.items():
            try:
                models[model_id] = ModelConfig(**raw_model)
            except ValidationError as err:
                artifactsLogError(f"Invalid metadata for model {model_id!r}")
                raise ModelConfigurationError(model_id, str(err)) from err

        return cls(models)

    @classmethod
    def fromJSONFile(cls, file_name: str | PathLike) -> ModelCatalog:
        """Load & validate a catalog from a JSON metadata file.

        Args:
            file_name (``str``): path of the JSON metadata file.

        Returns:
            :class:`.ModelCatalog`: validated catalog.
        """
        return cls.fromDict(loadJSONFile(file_name))


def loadDefaultCatalog() -> ModelCatalog:
    """Load the packaged catalog of supported models.

    Returns:
        :class:`.ModelCatalog`: EGM2008, EGM96, GRGM1200A & GMM3 model metadata.
    """
    res = resources.files(MODEL_METADATA_MODULE).joinpath(DEFAULT_METADATA_FILE)
    with resources.as_file(res) as metadata_filepath:
        return ModelCatalog.fromJSONFile(metadata_filepath)
