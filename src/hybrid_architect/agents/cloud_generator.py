"""Cloud code generator backed by the hosted LLM providers."""

from hybrid_architect.agents.llm_client import LLMClient

CLOUD_DISABLED_PLACEHOLDER = "// Cloud supervision disabled"


class CloudGenerator:
    """Produces the cloud candidate for a file."""

    def __init__(self, client: LLMClient | None = None, enabled: bool = True) -> None:
        self.client = client
        self.enabled = enabled

    def build_prompt(self, file_path: str, prompt: str, context: str = "") -> str:
        return (
            f"Write React/Vite code for {file_path}. Prompt: {prompt}. "
            f"Context: {context}. Focus on architectural safety. "
            "Handle complex logic with deep reasoning."
        )

    def generate(self, file_path: str, prompt: str, context: str = "") -> str:
        """Return cloud-generated source for ``file_path``.

        Raises:
            GenerationError: If the provider chain fails.
        """
        if not self.enabled or self.client is None:
            return CLOUD_DISABLED_PLACEHOLDER
        return self.client.complete(self.build_prompt(file_path, prompt, context))
