import os
import sys
import tempfile

import pytest


# Ensure the repository root is on sys.path so tests can import the local
# packages (core, api, internalloggin) without requiring an editable install.
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

# Keep rotating log files out of the source tree during test runs.
os.environ.setdefault("JSONBRIDGE_LOG_DIR", tempfile.mkdtemp(prefix="jsonbridge-logs-"))


@pytest.fixture
def provider():
    from core.provider import JsonProvider

    return JsonProvider()


@pytest.fixture
def app():
    from api import create_app
    from api.config import TestingConfig

    return create_app(config_class=TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()
