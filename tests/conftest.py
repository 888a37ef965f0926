"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Integration tests
    pytest -m slow          # Tests that take >1s
    pytest -m security      # Path and input security checks

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import logging
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    MODEL_NAME,
    MODEL_PROPERTIES,
    MODEL_TTL,
    SAMPLE_CONFIG,
    build_model_graph,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Integration tests requiring setup")
    config.addinivalue_line("markers", "slow: Tests that take more than 1 second")
    config.addinivalue_line("markers", "security: Path and input security checks")


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def model_graph():
    """Source graph of a small vehicle-registry model."""
    return build_model_graph()


@pytest.fixture
def model_ttl():
    """Turtle content of the vehicle-registry model."""
    return MODEL_TTL


@pytest.fixture
def model_name():
    return MODEL_NAME


@pytest.fixture
def model_properties():
    """Model properties with a scheme description and no catalog address."""
    return dict(MODEL_PROPERTIES)


@pytest.fixture
def temp_model_file(tmp_path, model_ttl):
    """Write the model graph to a temporary Turtle file."""
    model_file = tmp_path / "model.ttl"
    model_file.write_text(model_ttl, encoding="utf-8")
    return model_file


@pytest.fixture
def temp_properties_file(tmp_path, model_properties):
    """Write the model properties to a temporary JSON file."""
    properties_file = tmp_path / "model.json"
    properties_file.write_text(json.dumps(model_properties, ensure_ascii=False), encoding="utf-8")
    return properties_file


@pytest.fixture
def temp_config_file(tmp_path):
    """Write SAMPLE_CONFIG to a temporary JSON file."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(SAMPLE_CONFIG, ensure_ascii=False), encoding="utf-8")
    return config_file


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    from app.cli import helpers
    helpers._clear_managed_handlers()
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
