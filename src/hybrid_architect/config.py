"""Provider settings loaded from the environment."""

import os

from hybrid_architect.models import ProviderSettings

ENV_PREFIX = "HYBRID_ARCHITECT_"

# Safe keys allowed in config output (no secrets)
SAFE_SETTINGS_KEYS = frozenset({
    "ollama_url", "ollama_model", "hf_url", "hf_model",
    "use_cloud", "cloud_model", "request_timeout",
})

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    """Raised when an environment setting has an unusable value."""


def _env(name: str) -> str | None:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value else None


def load_settings() -> ProviderSettings:
    """Build ProviderSettings from ``HYBRID_ARCHITECT_*`` environment variables.

    Unset variables keep the model defaults. Tokens fall back to the
    conventional ``HF_TOKEN`` and ``GITHUB_TOKEN`` variables.

    Raises:
        ConfigError: If REQUEST_TIMEOUT is not a positive integer.
    """
    overrides: dict[str, object] = {}
    for field in ("ollama_url", "ollama_model", "hf_url", "hf_model", "cloud_model"):
        value = _env(field.upper())
        if value is not None:
            overrides[field] = value

    use_cloud = _env("USE_CLOUD")
    if use_cloud is not None:
        overrides["use_cloud"] = use_cloud.strip().lower() in _TRUTHY

    timeout = _env("REQUEST_TIMEOUT")
    if timeout is not None:
        try:
            overrides["request_timeout"] = int(timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_PREFIX}REQUEST_TIMEOUT must be a whole number of seconds, got {timeout!r}"
            ) from exc
        if overrides["request_timeout"] <= 0:
            raise ConfigError(f"{ENV_PREFIX}REQUEST_TIMEOUT must be positive, got {timeout!r}")

    hf_token = _env("HF_TOKEN") or os.getenv("HF_TOKEN")
    if hf_token:
        overrides["hf_token"] = hf_token
    github_token = _env("GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN")
    if github_token:
        overrides["github_token"] = github_token

    return ProviderSettings(**overrides)


def safe_settings_view(settings: ProviderSettings) -> dict[str, object]:
    """Settings restricted to keys that are safe to print."""
    return {
        key: value
        for key, value in settings.model_dump().items()
        if key in SAFE_SETTINGS_KEYS
    }
