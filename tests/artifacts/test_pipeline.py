from __future__ import annotations

# Standard Library Imports
import json
import logging
import tarfile
from typing import TYPE_CHECKING

# Third Party Imports
import numpy as np
import pytest

# Geopotential Artifacts Imports
from geopotential_artifacts.artifacts import pipeline
from geopotential_artifacts.artifacts.pipeline import (
    MODELS_INDEX_FILE,
    BatchSummary,
    generateArtifacts,
    generateModelArtifact,
    resolveModelIDs,
)
from geopotential_artifacts.coefficients.binary import artifactSize, readBinaryCoefficients
from geopotential_artifacts.common.exceptions import ModelConfigurationError
from geopotential_artifacts.common.utilities import fileChecksum

# Local Imports
from .. import COEFFICIENT_DATA_DIR, ICGEM_SAMPLE_FILE

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from pathlib import Path

    # Geopotential Artifacts Imports
    from geopotential_artifacts.config.model_config import ModelCatalog, ModelConfig


def testResolveModelIDs(catalog: ModelCatalog):
    """Test expanding ``"all"`` & de-duplicating identifiers."""
    assert resolveModelIDs(["all"], catalog) == ["TESTICGEM", "TESTPGDA"]
    assert resolveModelIDs(["TESTPGDA", "TESTPGDA"], catalog) == ["TESTPGDA"]
    assert resolveModelIDs(["TESTPGDA", "all"], catalog) == ["TESTICGEM", "TESTPGDA"]
    assert resolveModelIDs([], catalog) == []

    with pytest.raises(ModelConfigurationError):
        resolveModelIDs(["TESTPGDA", "JGM3"], catalog)


def testGenerateModelArtifact(tmp_path: Path, icgem_model: ModelConfig):
    """Test the single-model pipeline writes a readable artifact & its metadata."""
    result = generateModelArtifact(icgem_model, COEFFICIENT_DATA_DIR / ICGEM_SAMPLE_FILE, tmp_path)

    assert result.model_id == "TESTICGEM"
    assert (result.l_max, result.m_max) == (3, 3)
    assert result.binfile == tmp_path / "bin" / "TESTICGEM.bin"
    assert result.metafile == tmp_path / "bin" / "TESTICGEM_metadata.json"
    assert result.bin_size == artifactSize(3, 3)
    assert result.sha256_bin == fileChecksum(result.binfile)

    header, dense = readBinaryCoefficients(result.binfile)
    assert header.gm == icgem_model.gravitational_parameter
    assert header.reference_radius == icgem_model.reference_radius
    assert dense.c[2, 0] == -4.84165143790815e-04
    assert dense.s[2, 1] == 1.38441389137979e-09
    assert dense.c[3, 2] == 0.0

    with open(result.metafile, encoding="utf-8") as json_file:
        metadata = json.load(json_file)
    assert metadata["binary_sha256"] == result.sha256_bin


def testAdvertisedDegreeMismatch(tmp_path: Path, icgem_model: ModelConfig, caplog: pytest.LogCaptureFixture):
    """Test that the file's extent is written even if the metadata advertises another one."""
    model = icgem_model.model_copy(update={"l_max": 2190, "m_max": 2190})
    with caplog.at_level(logging.WARNING, logger="geopotential_artifacts"):
        result = generateModelArtifact(model, COEFFICIENT_DATA_DIR / ICGEM_SAMPLE_FILE, tmp_path, bin_dirname="out")

    assert (result.l_max, result.m_max) == (3, 3)
    assert result.binfile.parent.name == "out"
    assert any("advertises degree/order" in record.getMessage() for record in caplog.records)


@pytest.mark.integration()
@pytest.mark.datafiles(COEFFICIENT_DATA_DIR)
def testGenerateAll(datafiles: Path, tmp_path: Path, catalog: ModelCatalog):
    """Test generating, indexing & bundling every model in the catalog."""
    output_dir = tmp_path / "output"
    summary = generateArtifacts(["all"], catalog, output_dir=output_dir, coeff_dir=datafiles, allow_download=False)

    assert isinstance(summary, BatchSummary)
    assert summary.successful == 2
    assert summary.failed == 0
    assert [result.model_id for result in summary.results] == ["TESTICGEM", "TESTPGDA"]

    bin_dir = output_dir / "bin"
    with open(bin_dir / MODELS_INDEX_FILE, encoding="utf-8") as json_file:
        assert json.load(json_file) == ["TESTICGEM", "TESTPGDA"]

    pgda_result = summary.results[1]
    header, dense = readBinaryCoefficients(pgda_result.binfile)
    assert header.shape == (4, 3)
    assert np.isclose(dense.c[2, 0], -9.0880631789298779e-05)
    assert dense.c[3, 1] == 0.0

    assert summary.tarball == output_dir / "tarballs" / "geopotential_bins.tar.gz"
    assert summary.tarball_sha256 == fileChecksum(summary.tarball)
    with tarfile.open(summary.tarball, "r:gz") as bundle:
        assert set(bundle.getnames()) == {
            "bin",
            "bin/TESTICGEM.bin",
            "bin/TESTICGEM_metadata.json",
            "bin/TESTPGDA.bin",
            "bin/TESTPGDA_metadata.json",
            f"bin/{MODELS_INDEX_FILE}",
        }


@pytest.mark.datafiles(COEFFICIENT_DATA_DIR / ICGEM_SAMPLE_FILE)
def testMissingCoefficientFileIsolated(datafiles: Path, tmp_path: Path, catalog: ModelCatalog):
    """Test a model without a coefficient file fails without stopping the batch."""
    summary = generateArtifacts(
        ["TESTICGEM", "TESTPGDA"],
        catalog,
        output_dir=tmp_path,
        coeff_dir=datafiles,
        allow_download=False,
        bundle=False,
    )

    assert summary.successful == 1
    assert summary.failed == 1
    assert summary.results[0].model_id == "TESTICGEM"
    assert summary.tarball is None
    assert not (tmp_path / "bin" / MODELS_INDEX_FILE).exists()


def testMalformedCoefficientFileIsolated(tmp_path: Path, catalog: ModelCatalog):
    """Test a model whose file fails to parse is counted as failed."""
    coeff_dir = tmp_path / "coeffs"
    coeff_dir.mkdir()
    bad_lines = ["header"] * 11 + ["end_of_head", "gfc    2    0  garbage  0.0"]
    (coeff_dir / ICGEM_SAMPLE_FILE).write_text("\n".join(bad_lines) + "\n", encoding="utf-8")

    summary = generateArtifacts(["TESTICGEM"], catalog, output_dir=tmp_path, coeff_dir=coeff_dir, allow_download=False)

    assert summary.successful == 0
    assert summary.failed == 1
    assert summary.tarball is None
    assert not (tmp_path / "bin").exists()


def testUnknownModelStopsBatch(tmp_path: Path, catalog: ModelCatalog):
    """Test an unknown model identifier fails before any work is done."""
    with pytest.raises(ModelConfigurationError):
        generateArtifacts(["TESTICGEM", "JGM3"], catalog, output_dir=tmp_path, coeff_dir=COEFFICIENT_DATA_DIR)
    assert list(tmp_path.iterdir()) == []


def testDownloadUsedWhenAllowed(tmp_path: Path, catalog: ModelCatalog, monkeypatch: pytest.MonkeyPatch):
    """Test missing files are requested from the downloader when downloads are allowed."""
    requested = []

    def fakeEnsureCoefficientFile(model, coeff_file, timeout=300):
        requested.append((model.name, coeff_file, timeout))
        return False

    monkeypatch.setattr(pipeline, "ensureCoefficientFile", fakeEnsureCoefficientFile)
    summary = generateArtifacts(["TESTPGDA"], catalog, output_dir=tmp_path, coeff_dir=tmp_path / "coeffs")

    assert requested == [("TESTPGDA", tmp_path / "coeffs" / "sample_sha.tab", 300)]
    assert summary.failed == 1
