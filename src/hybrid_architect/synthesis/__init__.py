"""Hybrid code synthesis: redaction, segmentation, merge policy and diffing."""

from hybrid_architect.synthesis.differ import apply_overrides, diff_lines
from hybrid_architect.synthesis.patterns import SENSITIVE_PATTERNS, SensitivePattern
from hybrid_architect.synthesis.redactor import env_var_name, find_sensitive, redact
from hybrid_architect.synthesis.segmenter import segment
from hybrid_architect.synthesis.synthesizer import synthesize

__all__ = [
    "SENSITIVE_PATTERNS",
    "SensitivePattern",
    "apply_overrides",
    "diff_lines",
    "env_var_name",
    "find_sensitive",
    "redact",
    "segment",
    "synthesize",
]
