"""Sensitive-string pattern table used by the redactor.

The table is built once at import time and never mutated. Patterns run in
table order; ``applied=False`` entries are defined but skipped.
"""

import re

from pydantic import BaseModel, ConfigDict

# Substitution targets
ENV_PREFIX = "process.env."
ENV_VAR_NAMESPACE = "VITE_"
API_KEY_PLACEHOLDER = f"{ENV_PREFIX}{ENV_VAR_NAMESPACE}AI_API_KEY /* REDACTED FOR PRIVACY */"
REDACTED_EMAIL = "[REDACTED_EMAIL]"

# Tokens that mark a candidate as having gone through secret scrubbing
REDACTION_MARKER = "[REDACTED"
SECURED_TOKENS = (ENV_PREFIX, REDACTION_MARKER)


class SensitivePattern(BaseModel):
    """A named sensitive-substring pattern."""

    model_config = ConfigDict(frozen=True)

    name: str
    regex: re.Pattern
    applied: bool = True


SENSITIVE_PATTERNS: tuple[SensitivePattern, ...] = (
    SensitivePattern(
        name="api_keys",
        regex=re.compile(r"(sk-[a-zA-Z0-9]{20,})|(AIza[0-9A-Za-z\-_]{35})"),
    ),
    SensitivePattern(
        name="secrets",
        regex=re.compile(
            r"(password|secret|api_key|token|auth_token)\s*[:=]\s*[\"'][^\"']+[\"']",
            re.IGNORECASE,
        ),
    ),
    SensitivePattern(
        name="emails",
        regex=re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
    ),
    # Reserved: path scrubbing is off until false positives on import
    # specifiers are ruled out.
    SensitivePattern(
        name="paths",
        regex=re.compile(
            r"([a-zA-Z]:\\(?:[^\\/:*?\"<>|\r\n]+\\)*[^\\/:*?\"<>|\r\n]*)"
            r"|(/(?:[\w.-]+/)+[\w.-]+)"
        ),
        applied=False,
    ),
)


def get_pattern(name: str) -> SensitivePattern:
    """Look up a pattern by name.

    Raises:
        KeyError: If no pattern has that name.
    """
    for pattern in SENSITIVE_PATTERNS:
        if pattern.name == name:
            return pattern
    raise KeyError(name)


def applied_patterns() -> list[SensitivePattern]:
    """Patterns the redactor actually runs, in order."""
    return [pattern for pattern in SENSITIVE_PATTERNS if pattern.applied]
