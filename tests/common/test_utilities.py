from __future__ import annotations

# Standard Library Imports
import hashlib
import json
from typing import TYPE_CHECKING

# Third Party Imports
import numpy as np
import pytest

# Geopotential Artifacts Imports
import geopotential_artifacts.common.utilities as utils

# Local Imports
from .. import FIXTURE_DATA_DIR, METADATA_DATA_DIR, TEST_METADATA_FILE

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from pathlib import Path


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLoadJSONFile(datafiles: Path):
    """Ensure JSON file loader works properly."""
    # Valid JSON file
    json_data = utils.loadJSONFile(datafiles / "metadata" / TEST_METADATA_FILE)
    assert set(json_data) == {"TESTICGEM", "TESTPGDA"}

    # Empty JSON document
    empty_file = datafiles / "empty.json"
    empty_file.write_text("{}", encoding="utf-8")
    with pytest.raises(IOError, match="Empty JSON file:"):
        utils.loadJSONFile(empty_file)

    # Bad JSON syntax
    bad_file = datafiles / "bad.json"
    bad_file.write_text('{"EGM96": ', encoding="utf-8")
    with pytest.raises(json.decoder.JSONDecodeError):
        utils.loadJSONFile(bad_file)

    # Missing file
    with pytest.raises(FileNotFoundError):
        utils.loadJSONFile(datafiles / "missing.json")


def testSaveJSONFile(tmp_path: Path):
    """Ensure JSON files are written with indentation, a trailing newline & numpy support."""
    output_file = tmp_path / "saved.json"
    utils.saveJSONFile(output_file, {"gm": np.float64(3.5), "degree": np.int32(4), "values": np.arange(3)})

    text = output_file.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '\n  "gm": 3.5' in text
    assert json.loads(text) == {"gm": 3.5, "degree": 4, "values": [0, 1, 2]}


def testNumpyScalarEncoderRejectsUnknown():
    """Ensure non-numpy, non-JSON objects still fail to serialize."""
    with pytest.raises(TypeError):
        json.dumps({"bad": object()}, cls=utils.NumpyScalarEncoder)


def testFileChecksum(tmp_path: Path):
    """Ensure file checksums match :mod:`hashlib` over the whole file."""
    metadata_file = METADATA_DATA_DIR / TEST_METADATA_FILE
    expected = hashlib.sha256(metadata_file.read_bytes()).hexdigest()
    assert utils.fileChecksum(metadata_file) == expected

    # Content spanning several read chunks
    large_file = tmp_path / "large.bin"
    content = bytes(range(256)) * (utils.CHECKSUM_CHUNK_SIZE // 256 * 2 + 3)
    large_file.write_bytes(content)
    assert utils.fileChecksum(large_file) == hashlib.sha256(content).hexdigest()

    empty_file = tmp_path / "empty.bin"
    empty_file.write_bytes(b"")
    assert utils.fileChecksum(empty_file) == hashlib.sha256(b"").hexdigest()
