"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from pathlib import Path
from typing import Any

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
COEFFICIENT_DATA_DIR = FIXTURE_DATA_DIR / "coefficients"
METADATA_DATA_DIR = FIXTURE_DATA_DIR / "metadata"
ICGEM_SAMPLE_FILE = "sample.gfc"
PGDA_SAMPLE_FILE = "sample_sha.tab"
TEST_METADATA_FILE = "test_metadata.json"

ICGEM_START_LINE: int = 12
PGDA_START_LINE: int = 2

TEST_MODEL_METADATA: dict[str, dict[str, Any]] = {
    "TESTICGEM": {
        "name": "TESTICGEM",
        "full_name": "Test ICGEM Earth Model",
        "body": "Earth",
        "source_url": "https://example.invalid/sample.gfc",
        "distributor": "Unit Tests",
        "provider": "Unit Tests",
        "license": "Public Domain",
        "citation": "Unit Tests (2024). ICGEM sample.",
        "description": "Truncated EGM-like sample used in unit tests.",
        "note": "",
        "coeff_filename": ICGEM_SAMPLE_FILE,
        "coeff_start_line": ICGEM_START_LINE,
        "coeff_format": "icgem",
        "gravitational_parameter": 3.986004415e14,
        "reference_radius": 6378136.3,
        "units": "m s",
        "l_max": 3,
        "m_max": 3,
        "normalized": True,
        "altimetry_data": True,
        "ground_data": True,
        "satellite_data": True,
    },
    "TESTPGDA": {
        "name": "TESTPGDA",
        "full_name": "Test PGDA Lunar Model",
        "body": "Moon",
        "source_url": "https://example.invalid/sample_sha.tab",
        "distributor": "Unit Tests",
        "provider": "Unit Tests",
        "license": "Public Domain",
        "citation": "Unit Tests (2024). PGDA sample.",
        "description": "Truncated GRGM-like sample used in unit tests.",
        "note": "Static field only.",
        "coeff_filename": PGDA_SAMPLE_FILE,
        "coeff_start_line": PGDA_START_LINE,
        "coeff_format": "pgda",
        "gravitational_parameter": 4.9028001224453001e12,
        "reference_radius": 1738000.0,
        "units": "m s",
        "l_max": 3,
        "m_max": 2,
        "normalized": True,
        "altimetry_data": False,
        "ground_data": False,
        "satellite_data": True,
    },
}
"""``dict``: raw metadata of the models backed by the sample coefficient files."""
