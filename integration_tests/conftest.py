"""Pytest configuration for integration tests."""

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from avo_forms.cli import main
from avo_forms.clients.local import LocalBackendClient
from avo_forms.web import create_app


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def cli(tmp_path):
    """Invoke the CLI against a temporary data directory."""
    runner = CliRunner()
    env = {"AVO_DATA_DIR": str(tmp_path), "AVO_USER_ID": None, "AVO_LOG_LEVEL": "WARNING"}

    def invoke(*args):
        return runner.invoke(main, list(args), env=env)

    return invoke


@pytest.fixture
def api(tmp_path):
    """A TestClient over an app backed by a temporary database."""
    app = create_app(backend=LocalBackendClient(tmp_path / "api.db"))
    with TestClient(app) as client:
        yield client
