"""Privacy redaction for generated code candidates."""

import re

from hybrid_architect.synthesis.patterns import (
    API_KEY_PLACEHOLDER,
    ENV_PREFIX,
    ENV_VAR_NAMESPACE,
    REDACTED_EMAIL,
    applied_patterns,
    get_pattern,
)

_WHITESPACE = re.compile(r"\s")


def env_var_name(key: str) -> str:
    """Map a secret key name to its namespaced environment variable name.

    >>> env_var_name("auth_token")
    'VITE_AUTH_TOKEN'
    """
    return ENV_VAR_NAMESPACE + _WHITESPACE.sub("_", key.upper())


def _replace_secret(match: re.Match) -> str:
    key = match.group(1)
    return f"{key}: {ENV_PREFIX}{env_var_name(key)}"


def redact(text: str) -> str:
    """Mask API keys, hardcoded secrets and email addresses.

    Substitutions run in a fixed order: API keys, secret assignments, emails.
    Filesystem paths are left alone. Re-running on redacted text is a no-op.
    """
    redacted = text or ""
    redacted = get_pattern("api_keys").regex.sub(
        lambda _match: API_KEY_PLACEHOLDER, redacted
    )
    redacted = get_pattern("secrets").regex.sub(_replace_secret, redacted)
    redacted = get_pattern("emails").regex.sub(
        lambda _match: REDACTED_EMAIL, redacted
    )
    return redacted


def find_sensitive(text: str) -> list[str]:
    """Return names of applied patterns that still match ``text``."""
    return [
        pattern.name for pattern in applied_patterns() if pattern.regex.search(text or "")
    ]
