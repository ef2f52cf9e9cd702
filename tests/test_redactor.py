"""Tests for the redactor and the sensitive pattern table."""

import pytest
from pydantic import ValidationError

from hybrid_architect.synthesis.patterns import (
    API_KEY_PLACEHOLDER,
    REDACTED_EMAIL,
    SENSITIVE_PATTERNS,
    applied_patterns,
    get_pattern,
)
from hybrid_architect.synthesis.redactor import env_var_name, find_sensitive, redact

OPENAI_KEY = "sk-" + "a1B2c3D4e5" * 3
GOOGLE_KEY = "AIza" + "Sy-_0123456789abcdefghijklmnopqrstu"

SAMPLES = [
    "",
    "plain text with nothing sensitive",
    f'const key = "{OPENAI_KEY}";',
    f"const maps = '{GOOGLE_KEY}';",
    'const config = { password: "hunter2", token: "abc" };',
    "Contact jane.doe@example.com or ops+alerts@corp.io",
    f'auth_token = "{OPENAI_KEY}" // owner: dev@example.org',
    "const root = '/home/user/project/src/index.ts';",
]


# --- env_var_name ---


def test_env_var_name_uppercases_and_namespaces():
    assert env_var_name("password") == "VITE_PASSWORD"
    assert env_var_name("Api_Key") == "VITE_API_KEY"


def test_env_var_name_replaces_whitespace():
    assert env_var_name("auth token") == "VITE_AUTH_TOKEN"


# --- API keys ---


def test_redact_openai_style_key():
    assert redact(f'const key = "{OPENAI_KEY}";') == f'const key = "{API_KEY_PLACEHOLDER}";'


def test_redact_google_style_key():
    assert GOOGLE_KEY not in redact(f"key={GOOGLE_KEY}")
    assert API_KEY_PLACEHOLDER in redact(f"key={GOOGLE_KEY}")


def test_short_sk_token_is_kept():
    """Fewer than 20 alphanumerics after sk- is not a key."""
    text = "const id = 'sk-short123';"
    assert redact(text) == text


def test_google_key_needs_35_characters():
    text = "AIza" + "x" * 34
    assert redact(text) == text


# --- secret assignments ---


def test_redact_secret_assignment_colon():
    result = redact('const config = { password: "hunter2" };')
    assert result == "const config = { password: process.env.VITE_PASSWORD };"


def test_redact_secret_assignment_equals_keeps_key_case():
    assert redact("API_KEY = 'abc123'") == "API_KEY: process.env.VITE_API_KEY"


def test_redact_auth_token():
    assert redact('auth_token="xyz"') == "auth_token: process.env.VITE_AUTH_TOKEN"


def test_unquoted_secret_is_not_redacted():
    text = "token: getToken()"
    assert redact(text) == text


def test_api_key_inside_secret_assignment_becomes_env_reference():
    """API keys are replaced first, then the enclosing assignment."""
    assert redact(f'token: "{OPENAI_KEY}"') == "token: process.env.VITE_TOKEN"


# --- emails ---


def test_redact_email():
    assert redact("mail jane.doe@example.com today") == f"mail {REDACTED_EMAIL} today"


# --- paths are defined but not applied ---


def test_filesystem_paths_are_not_redacted():
    posix = "const root = '/home/user/project/src/index.ts';"
    windows = r"const log = 'C:\Users\me\logs\app.log';"
    assert redact(posix) == posix
    assert redact(windows) == windows


def test_path_pattern_is_defined_but_not_applied():
    paths = get_pattern("paths")
    assert paths.applied is False
    assert paths.regex.search("/home/user/project/file.txt")
    assert paths not in applied_patterns()


# --- properties ---


def test_redact_empty_string():
    assert redact("") == ""


@pytest.mark.parametrize("text", SAMPLES)
def test_redaction_is_idempotent(text):
    once = redact(text)
    assert redact(once) == once


@pytest.mark.parametrize("text", SAMPLES)
def test_redaction_removes_keys_and_emails(text):
    result = redact(text)
    assert not get_pattern("api_keys").regex.search(result)
    assert not get_pattern("emails").regex.search(result)
    assert find_sensitive(result) == []


def test_find_sensitive_reports_pattern_names():
    assert find_sensitive("reach me at a@b.com") == ["emails"]
    assert find_sensitive(f'secret = "{OPENAI_KEY}"') == ["api_keys", "secrets"]
    assert find_sensitive("/etc/passwd/file") == []


# --- pattern table ---


def test_pattern_table_order():
    assert [p.name for p in SENSITIVE_PATTERNS] == ["api_keys", "secrets", "emails", "paths"]
    assert isinstance(SENSITIVE_PATTERNS, tuple)


def test_patterns_are_frozen():
    with pytest.raises(ValidationError):
        SENSITIVE_PATTERNS[0].applied = False


def test_get_pattern_unknown_name():
    with pytest.raises(KeyError):
        get_pattern("phone_numbers")
