"""Various helper functions that are used across multiple modules."""

from __future__ import annotations

# Standard Library Imports
import hashlib
import json
from typing import TYPE_CHECKING

# Third Party Imports
import numpy as np

# Local Imports
from .logger import artifactsLogError

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from os import PathLike
    from typing import Any


CHECKSUM_CHUNK_SIZE: int = 1 << 20
"""``int``: number of bytes hashed per read when computing file checksums."""


class NumpyScalarEncoder(json.JSONEncoder):
    """Handles serialization of numpy scalars and arrays."""

    def default(self, obj):
        """Serializes a numpy object and returns it as a json-compatible value.

        Args:
            obj (np.generic | np.ndarray): numpy object you wish to serialize

        Returns:
            list, Any: Serialized json.
        """
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        return json.JSONEncoder.default(self, obj)


def loadJSONFile(file_name):
    """Load in a JSON file into a Python dictionary.

    Args:
        file_name (``str``): name of JSON file to load

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames
        ``json.decoder.JSONDecodeError``: error parsing JSON file (bad syntax)
        ``IOError``: valid JSON file is empty

    Returns:
        ``dict``: documents loaded from the JSON file
    """
    try:
        with open(file_name, encoding="utf-8") as input_file:
            json_data = json.load(input_file)
    except FileNotFoundError as err:
        msg = f"Could not find JSON file: {file_name}"
        artifactsLogError(msg)

        raise err
    except json.decoder.JSONDecodeError as err:
        msg = f"Decoding error reading JSON file: {file_name}"
        artifactsLogError(msg)

        raise err

    if not json_data:
        msg = f"Empty JSON file: {file_name}"
        artifactsLogError(msg)
        raise OSError(msg)

    return json_data


def saveJSONFile(file_name: str | PathLike, json_data: Any) -> None:
    """Save a JSON-compatible object to a file, using two-space indentation.

    Args:
        file_name (``str``): name of JSON file to write
        json_data (``Any``): object to serialize, may contain numpy scalars & arrays
    """
    with open(file_name, "w", encoding="utf-8") as output_file:
        json.dump(json_data, output_file, indent=2, cls=NumpyScalarEncoder)
        output_file.write("\n")


def fileChecksum(file_name: str | PathLike) -> str:
    """Compute the SHA-256 checksum of a file.

    Args:
        file_name (``str``): path of file to hash

    Returns:
        ``str``: lowercase hex digest of the file contents
    """
    digest = hashlib.sha256()
    with open(file_name, "rb") as input_file:
        for chunk in iter(lambda: input_file.read(CHECKSUM_CHUNK_SIZE), b""):
            digest.update(chunk)

    return digest.hexdigest()
