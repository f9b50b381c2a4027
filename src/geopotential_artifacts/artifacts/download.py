"""Acquire text coefficient files from their distributors."""

from __future__ import annotations

# Standard Library Imports
import shutil
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.request import urlopen

# Local Imports
from ..common.logger import artifactsLogError, artifactsLogInfo

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from os import PathLike

    # Local Imports
    from ..config.model_config import ModelConfig


def ensureCoefficientFile(model: ModelConfig, coeff_file: str | PathLike, timeout: float = 300) -> bool:
    """Make sure the model's coefficient file exists locally, downloading it if needed.

    The download is streamed into a ``.part`` file next to `coeff_file` & renamed once
    complete, so an interrupted download never looks like a valid coefficient file.

    Args:
        model (:class:`.ModelConfig`): metadata holding the model's :attr:`~.ModelConfig.source_url`.
        coeff_file (``str``): local destination of the coefficient file.
        timeout (``float``, optional): socket timeout in seconds. Defaults to 300.

    Returns:
        ``bool``: whether the coefficient file is available.
    """
    coeff_file = Path(coeff_file)
    if coeff_file.is_file():
        return True

    if not model.source_url:
        artifactsLogError(f"No source URL configured for {model.name}")
        return False

    coeff_file.parent.mkdir(parents=True, exist_ok=True)
    partial_file = coeff_file.with_name(coeff_file.name + ".part")

    artifactsLogInfo(f"Downloading {model.name} coefficients from: {model.source_url}")
    try:
        with (
            urlopen(model.source_url, timeout=timeout) as remote_data,  # noqa: S310
            open(partial_file, "wb") as local_file,
        ):
            shutil.copyfileobj(remote_data, local_file)
    except OSError as err:
        artifactsLogError(f"Failed to download {model.name} coefficients: {err}")
        partial_file.unlink(missing_ok=True)
        return False

    partial_file.replace(coeff_file)
    artifactsLogInfo(f"Downloaded to: {coeff_file}")
    return True
