"""Text completion over Anthropic and OpenAI with an optional fallback provider."""

import os
from typing import Any, Literal

from anthropic import Anthropic
import openai
from loguru import logger

from hybrid_architect.agents.exceptions import AgentError, GenerationError

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
MAX_API_TOKENS = 8192  # Max tokens per completion


class LLMClient:
    """Sends a single-turn prompt to the configured provider chain."""

    def __init__(
        self,
        api_key: str | None = None,
        openai_api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        llm_provider: str = "auto",
        llm_fallback_provider: str | None = None,
        allow_fallback: bool = False,
        max_tokens: int = MAX_API_TOKENS,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Anthropic API key. Falls back to ANTHROPIC_API_KEY env var.
            openai_api_key: OpenAI API key. Falls back to OPENAI_API_KEY env var.
            model: Model ID; Claude IDs map to an OpenAI default on OpenAI.
            llm_provider: "auto", "anthropic" or "openai".
            llm_fallback_provider: Provider tried when the primary one fails.
            allow_fallback: Whether the fallback provider may be used.

        Raises:
            AgentError: If no API key is found, or the requested provider
                has no key.
        """
        self.model: str = model
        self.max_tokens: int = max_tokens
        self.api_key: str | None = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.openai_api_key: str | None = openai_api_key or os.getenv("OPENAI_API_KEY")
        self._anthropic_client: Anthropic | None = None
        self._openai_client: openai.OpenAI | None = None

        if self.api_key:
            self._anthropic_client = Anthropic(api_key=self.api_key)
        if self.openai_api_key:
            self._openai_client = openai.OpenAI(api_key=self.openai_api_key)

        if not (self._anthropic_client or self._openai_client):
            raise AgentError(
                "No Anthropic or OpenAI API key found. "
                "Provide via parameter, ANTHROPIC_API_KEY or OPENAI_API_KEY env vars."
            )

        self.llm_provider = self._normalize_provider(llm_provider)
        self.llm_fallback_provider = (
            self._normalize_provider(llm_fallback_provider)
            if llm_fallback_provider
            else None
        )
        self.allow_fallback = bool(allow_fallback)

        if self.llm_provider == "anthropic" and self._anthropic_client is None:
            raise AgentError("No Anthropic API key found for provider 'anthropic'.")
        if self.llm_provider == "openai" and self._openai_client is None:
            raise AgentError("No OpenAI API key found for provider 'openai'.")

    @classmethod
    def from_env(cls, **kwargs: Any) -> "LLMClient | None":
        """Build a client, or return None when no provider key is configured."""
        try:
            return cls(**kwargs)
        except AgentError as exc:
            logger.info(f"Cloud LLM unavailable: {exc}")
            return None

    def _normalize_provider(
        self,
        value: str,
    ) -> Literal["anthropic", "openai", "auto"]:
        if value not in {"auto", "anthropic", "openai"}:
            raise AgentError(f"Unsupported provider: {value}")
        return value

    def _primary_provider(self) -> Literal["anthropic", "openai"]:
        if self.llm_provider == "auto":
            if self._anthropic_client is not None:
                return "anthropic"
            return "openai"
        return self.llm_provider

    def _resolve_model(self, provider: str) -> str:
        if provider == "openai" and self.model.startswith("claude-"):
            return OPENAI_DEFAULT_MODEL
        return self.model

    def provider_chain(self) -> list[str]:
        chain: list[str] = [self._primary_provider()]
        if self.allow_fallback and self.llm_fallback_provider:
            fallback = self.llm_fallback_provider
            if fallback != chain[0]:
                chain.append(fallback)
        return chain

    def _call(self, provider: str, prompt: str) -> str:
        if provider == "anthropic":
            if not self._anthropic_client:
                raise GenerationError("Anthropic client unavailable")
            response = self._anthropic_client.messages.create(
                model=self._resolve_model("anthropic"),
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            return "".join(
                block.text for block in response.content if block.type == "text"
            )

        if not self._openai_client:
            raise GenerationError("OpenAI client unavailable")
        response = self._openai_client.chat.completions.create(
            model=self._resolve_model("openai"),
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.choices[0].message.content or ""

    def complete(self, prompt: str) -> str:
        """Return the text completion for ``prompt``.

        Providers are tried in chain order; the first success wins.

        Raises:
            GenerationError: If every provider in the chain fails.
        """
        last_error: Exception | None = None
        for provider in self.provider_chain():
            try:
                return self._call(provider, prompt)
            except Exception as error:
                logger.warning(f"{provider} completion failed: {error}")
                last_error = error
        raise GenerationError(f"Failed to call LLM: {last_error}") from last_error
