import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigLoader
from tests.factories.http_factories import FakeHTTPClient


@pytest.fixture(autouse=True)
def reset_settings_loader():
    """Keep the settings singleton from leaking between tests."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def fake_http() -> FakeHTTPClient:
    """Scripted HTTP client with no responses configured."""
    return FakeHTTPClient()


@pytest.fixture
def defaults() -> dict:
    """Small defaults mapping so merge results are easy to assert on."""
    return {
        "version": "1.0",
        "layout": {"title": "", "nav": {"zoom": "buttons", "extra": ["home", "help"]}},
        "map": {"layers": [], "components": {"scaleBar": {"enabled": True}}},
    }
