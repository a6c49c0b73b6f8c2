"""Pytest configuration for CLI integration tests."""

import json

import pytest
from click.testing import CliRunner

from hercules_analytics.commands.base import configure_logging


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def runner():
    """CLI runner; logging goes back to the real stderr afterwards."""
    yield CliRunner()
    configure_logging()


@pytest.fixture
def write_history(tmp_path):
    """Write a history document and return its path."""

    def _write(doc, name="history.json"):
        path = tmp_path / name
        path.write_text(json.dumps(doc))
        return str(path)

    return _write
