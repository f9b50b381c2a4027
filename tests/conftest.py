from __future__ import annotations

# Standard Library Imports
import logging
import sys

# Third Party Imports
import pytest

# Geopotential Artifacts Imports
from geopotential_artifacts.common.behavioral_config import BEHAVIOR_CONFIG_ENV, BehavioralConfig
from geopotential_artifacts.config.model_config import ModelCatalog, ModelConfig

# Local Imports
from . import TEST_MODEL_METADATA


@pytest.fixture(autouse=True)
def _patchMissingEnvVariables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Automatically delete each environment variable, if set.

    Args:
        monkeypatch (:class:`pytest.MonkeyPatch`): monkeypatch obj to track changes

    Note:
        This is used so tests can assume a "blank" configuration, and it won't
        overwrite a user's custom-set environment variables.
    """
    with monkeypatch.context() as m_patch:
        m_patch.delenv(BEHAVIOR_CONFIG_ENV, raising=False)
        BehavioralConfig.resetConfig()
        yield
        # Make sure we reset the config after each test function
        BehavioralConfig.resetConfig()


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> logging.Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


@pytest.fixture(name="catalog")
def getTestCatalog() -> ModelCatalog:
    """Return a :class:`.ModelCatalog` describing the sample coefficient files."""
    return ModelCatalog.fromDict(TEST_MODEL_METADATA)


@pytest.fixture(name="icgem_model")
def getICGEMModel(catalog: ModelCatalog) -> ModelConfig:
    """Return the :class:`.ModelConfig` backed by the ICGEM sample file."""
    return catalog.getModel("TESTICGEM")


@pytest.fixture(name="pgda_model")
def getPGDAModel(catalog: ModelCatalog) -> ModelConfig:
    """Return the :class:`.ModelConfig` backed by the PGDA sample file."""
    return catalog.getModel("TESTPGDA")


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest options without an .ini file."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
