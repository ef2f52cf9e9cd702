"""Tests for the Anthropic/OpenAI completion client."""

from unittest.mock import MagicMock, patch

import pytest

from hybrid_architect.agents.exceptions import AgentError, GenerationError
from hybrid_architect.agents.llm_client import OPENAI_DEFAULT_MODEL, LLMClient


@pytest.fixture
def mock_providers(clean_env):
    with patch("hybrid_architect.agents.llm_client.Anthropic") as anthropic_cls, patch(
        "hybrid_architect.agents.llm_client.openai.OpenAI"
    ) as openai_cls:
        anthropic_cls.return_value = MagicMock()
        openai_cls.return_value = MagicMock()
        yield anthropic_cls, openai_cls


def test_no_keys_raises(mock_providers):
    with pytest.raises(AgentError, match="No Anthropic or OpenAI API key"):
        LLMClient()


def test_from_env_returns_none_without_keys(mock_providers):
    assert LLMClient.from_env() is None


def test_keys_read_from_env(mock_providers, clean_env):
    anthropic_cls, openai_cls = mock_providers
    clean_env.setenv("ANTHROPIC_API_KEY", "anthropic-key")
    clean_env.setenv("OPENAI_API_KEY", "openai-key")
    client = LLMClient()
    anthropic_cls.assert_called_once_with(api_key="anthropic-key")
    openai_cls.assert_called_once_with(api_key="openai-key")
    assert client.provider_chain() == ["anthropic"]


def test_auto_uses_openai_when_only_openai_key(mock_providers):
    client = LLMClient(openai_api_key="openai-key")
    assert client.provider_chain() == ["openai"]


def test_unsupported_provider(mock_providers):
    with pytest.raises(AgentError, match="Unsupported provider"):
        LLMClient(api_key="k", llm_provider="gemini")


def test_requested_provider_without_key(mock_providers):
    with pytest.raises(AgentError, match="No OpenAI API key"):
        LLMClient(api_key="k", llm_provider="openai")


def test_fallback_chain_only_when_allowed(mock_providers):
    no_fallback = LLMClient(api_key="a", openai_api_key="o", llm_fallback_provider="openai")
    with_fallback = LLMClient(
        api_key="a", openai_api_key="o", llm_fallback_provider="openai", allow_fallback=True
    )
    assert no_fallback.provider_chain() == ["anthropic"]
    assert with_fallback.provider_chain() == ["anthropic", "openai"]


def test_complete_anthropic(mock_providers, anthropic_text_response):
    anthropic_cls, _ = mock_providers
    anthropic_cls.return_value.messages.create.return_value = anthropic_text_response(
        "export default function App() {}"
    )
    client = LLMClient(api_key="a", model="claude-test")
    assert client.complete("write code") == "export default function App() {}"
    kwargs = anthropic_cls.return_value.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-test"
    assert kwargs["messages"] == [{"role": "user", "content": "write code"}]


def test_complete_openai_maps_claude_model(mock_providers, openai_text_response):
    _, openai_cls = mock_providers
    openai_cls.return_value.chat.completions.create.return_value = openai_text_response("ok")
    client = LLMClient(openai_api_key="o")
    assert client.complete("prompt") == "ok"
    kwargs = openai_cls.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == OPENAI_DEFAULT_MODEL


def test_complete_falls_back(mock_providers, openai_text_response):
    anthropic_cls, openai_cls = mock_providers
    anthropic_cls.return_value.messages.create.side_effect = RuntimeError("overloaded")
    openai_cls.return_value.chat.completions.create.return_value = openai_text_response("fallback")
    client = LLMClient(
        api_key="a", openai_api_key="o", llm_fallback_provider="openai", allow_fallback=True
    )
    assert client.complete("prompt") == "fallback"


def test_complete_raises_when_chain_exhausted(mock_providers):
    anthropic_cls, _ = mock_providers
    anthropic_cls.return_value.messages.create.side_effect = RuntimeError("down")
    client = LLMClient(api_key="a")
    with pytest.raises(GenerationError, match="down"):
        client.complete("prompt")
