from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hybrid_architect.models import ProviderSettings

SCENARIO_CLOUD = (
    'import React from "react";\n'
    "export default function App() {\n"
    "  try {\n"
    "    return <div>Hi</div>;\n"
    "  } catch (e) {}\n"
    "}\n"
    "export const x = 1;"
)

SCENARIO_LOCAL = (
    'import React from "react";\n'
    "  return <div>{process.env.GREETING}</div>;"
)

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GITHUB_TOKEN",
    "HF_TOKEN",
    "HYBRID_ARCHITECT_OLLAMA_URL",
    "HYBRID_ARCHITECT_OLLAMA_MODEL",
    "HYBRID_ARCHITECT_HF_URL",
    "HYBRID_ARCHITECT_HF_MODEL",
    "HYBRID_ARCHITECT_HF_TOKEN",
    "HYBRID_ARCHITECT_CLOUD_MODEL",
    "HYBRID_ARCHITECT_USE_CLOUD",
    "HYBRID_ARCHITECT_REQUEST_TIMEOUT",
    "HYBRID_ARCHITECT_GITHUB_TOKEN",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider keys and HYBRID_ARCHITECT_* settings from the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def scenario_cloud():
    return SCENARIO_CLOUD


@pytest.fixture
def scenario_local():
    return SCENARIO_LOCAL


@pytest.fixture
def settings():
    return ProviderSettings()


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects with .ok, .status_code and .json()."""

    def _make(ok: bool = True, payload=None, status_code: int | None = None):
        response = MagicMock()
        response.ok = ok
        response.status_code = status_code or (200 if ok else 500)
        response.json.return_value = payload
        return response

    return _make


@pytest.fixture
def anthropic_text_response():
    def _make(text: str):
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])

    return _make


@pytest.fixture
def openai_text_response():
    def _make(text: str):
        message = SimpleNamespace(content=text)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    return _make
