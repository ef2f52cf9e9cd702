"""Planner agent: turns a project prompt into a list of file paths."""

import json
import re

from loguru import logger

from hybrid_architect.agents.exceptions import GenerationError, PlanningError
from hybrid_architect.agents.llm_client import LLMClient

DEFAULT_PLAN = ["src/App.tsx", "src/index.css", "package.json"]
FALLBACK_PLAN = ["src/App.tsx"]
MAX_PROMPT_LENGTH = 4000
MAX_PLANNED_FILES = 25

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


class Planner:
    """Asks the cloud model for a project file structure."""

    def __init__(self, client: LLMClient | None = None) -> None:
        self.client = client

    def _build_prompt(self, prompt: str) -> str:
        return (
            f"You are the ARCHITECT. Create a file structure for: {prompt}. "
            "Return ONLY a JSON array of file paths."
        )

    def parse_plan(self, raw: str) -> list[str]:
        """Parse a JSON array of paths, falling back to a single App file.

        Markdown code fences around the array are ignored. Duplicates are
        dropped and the list is capped at MAX_PLANNED_FILES.
        """
        text = _CODE_FENCE.sub("", (raw or "").strip())
        try:
            data = json.loads(text or "[]")
        except json.JSONDecodeError:
            logger.warning("Planner returned non-JSON output; using fallback plan")
            return list(FALLBACK_PLAN)

        if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
            logger.warning("Planner output is not a list of paths; using fallback plan")
            return list(FALLBACK_PLAN)

        paths: list[str] = []
        for path in data:
            path = path.strip()
            if path and path not in paths:
                paths.append(path)
        return paths[:MAX_PLANNED_FILES]

    def generate_plan(self, prompt: str) -> list[str]:
        """Return the relative file paths to generate for ``prompt``.

        Without an LLM client the default three-file Vite layout is returned.

        Raises:
            PlanningError: If the prompt is empty or too long, or the LLM call fails.
        """
        if not prompt or not prompt.strip():
            raise PlanningError("Prompt must not be empty")
        if len(prompt) > MAX_PROMPT_LENGTH:
            raise PlanningError(
                f"Prompt exceeds {MAX_PROMPT_LENGTH} characters ({len(prompt)})"
            )

        if self.client is None:
            return list(DEFAULT_PLAN)

        try:
            raw = self.client.complete(self._build_prompt(prompt))
        except GenerationError as exc:
            raise PlanningError(f"Planning call failed: {exc}") from exc
        return self.parse_plan(raw)
