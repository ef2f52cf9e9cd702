"""Hybrid Architect: prompt-to-project assistant with cloud/local code synthesis."""

from hybrid_architect.synthesis import diff_lines, redact, segment, synthesize

__all__ = [
    "diff_lines",
    "redact",
    "segment",
    "synthesize",
]
