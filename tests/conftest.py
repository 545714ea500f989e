"""Shared fixtures for the chemical storage tests."""
from unittest.mock import MagicMock

import pytest

from core.config import reset_settings

ENV_KEYS = [
    "APP_NAME", "HOST", "PORT", "LOG_LEVEL",
    "GEMINI_API_KEY", "GEMINI_BASE_URL", "GEMINI_MODEL",
    "GEMINI_TIMEOUT", "GEMINI_TEMPERATURE",
]


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    """Start every test from default settings."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture()
def acetone_response():
    return {
        "name": "丙酮",
        "hStatements": ["H225", "H319", "H336"],
        "isFlammable": True,
    }


@pytest.fixture()
def mock_client(acetone_response):
    """MagicMock standing in for GeminiClientWrapper."""
    client = MagicMock()
    client.call_with_structured_output.return_value = acetone_response
    return client
