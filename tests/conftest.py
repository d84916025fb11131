"""
Global test configuration.
"""

import logging
import os

import pytest

from resume_intake.config import FrozenConfig
from tests.helpers import FakeAdapter


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean GEMINI_* environment for each test.

    Tests only see environment they set explicitly, so a developer's real
    GEMINI_API_KEY can never turn a unit test into a network call.

    Escape hatch: mark a test with @pytest.mark.allow_env_pollution.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)


# --- Configuration Fixtures ---
@pytest.fixture
def offline_config():
    """Configuration with no credential: only the heuristic tier can run."""
    return FrozenConfig(api_key=None)


@pytest.fixture
def keyed_config():
    """Configuration with a dummy credential and a short timeout."""
    return FrozenConfig(api_key="test-key", request_timeout_seconds=0.5)


@pytest.fixture
def fake_adapter():
    """Factory for scripted generation adapters."""

    def _make(response: str = "", **kwargs) -> FakeAdapter:
        return FakeAdapter(response, **kwargs)

    return _make


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("pypdf").setLevel(logging.ERROR)
    logging.getLogger("httpx").setLevel(logging.WARNING)
