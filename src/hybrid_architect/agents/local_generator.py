"""Local code generator with a backend fallback chain.

Backends are tried in order:

1. Local Hugging Face bridge (``POST {hf_url}/generate``)
2. Ollama (``POST {ollama_url}/api/generate``)
3. Hugging Face Inference API, only when an HF token is configured

A backend that errors or answers with a non-2xx status is skipped.
"""

from typing import Any, Callable, Optional

import requests
from loguru import logger

from hybrid_architect.models import ProviderSettings

HF_INFERENCE_URL = "https://api-inference.huggingface.co/models/{model}"
HF_EMPTY_RESPONSE = "// HF Remote Empty Response"
ALL_WORKERS_FAILED = "// All local/hybrid workers failed"


class LocalGenerator:
    """Produces the local candidate for a file."""

    def __init__(
        self,
        settings: ProviderSettings,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def build_prompt(self, file_path: str, prompt: str) -> str:
        return (
            f"Write optimized code for {file_path}. Prompt: {prompt}. "
            "Focus on local speed and hardware efficiency."
        )

    def backends(self) -> list[tuple[str, Callable[[str], Optional[str]]]]:
        chain: list[tuple[str, Callable[[str], Optional[str]]]] = [
            ("hf-bridge", self._generate_bridge),
            ("ollama", self._generate_ollama),
        ]
        if self.settings.hf_token:
            chain.append(("hf-inference", self._generate_hf_inference))
        return chain

    def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str] | None = None) -> Any:
        """POST JSON and return the decoded body, or None on a non-2xx status."""
        response = self.session.post(
            url,
            json=payload,
            headers=headers,
            timeout=self.settings.request_timeout,
        )
        if not response.ok:
            logger.debug(f"{url} responded with status {response.status_code}")
            return None
        return response.json()

    def _generate_bridge(self, prompt: str) -> Optional[str]:
        data = self._post(f"{self.settings.hf_url}/generate", {"prompt": prompt})
        if data is None:
            return None
        return data.get("response")

    def _generate_ollama(self, prompt: str) -> Optional[str]:
        data = self._post(
            f"{self.settings.ollama_url}/api/generate",
            {
                "model": self.settings.ollama_model,
                "prompt": prompt,
                "stream": False,
            },
        )
        if data is None:
            return None
        return data.get("response")

    def _generate_hf_inference(self, prompt: str) -> Optional[str]:
        data = self._post(
            HF_INFERENCE_URL.format(model=self.settings.hf_model),
            {"inputs": prompt},
            headers={"Authorization": f"Bearer {self.settings.hf_token}"},
        )
        if data is None:
            return None
        text = None
        if isinstance(data, list) and data and isinstance(data[0], dict):
            text = data[0].get("generated_text")
        elif isinstance(data, dict):
            text = data.get("generated_text")
        return text or HF_EMPTY_RESPONSE

    def generate(self, file_path: str, prompt: str) -> str:
        """Return local-generated source for ``file_path``.

        Never raises: backend failures are logged and the next backend is
        tried. If all fail, a placeholder comment is returned.
        """
        local_prompt = self.build_prompt(file_path, prompt)
        for name, backend in self.backends():
            try:
                text = backend(local_prompt)
            except (requests.RequestException, ValueError, AttributeError) as exc:
                logger.warning(f"Local backend '{name}' failed: {exc}")
                continue
            if text is not None:
                logger.debug(f"Local candidate for {file_path} produced by {name}")
                return str(text)
        logger.warning(f"All local backends failed for {file_path}")
        return ALL_WORKERS_FAILED
