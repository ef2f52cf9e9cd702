"""Hybrid code synthesizer.

Combines a cloud candidate and a local candidate for the same file:

1. Both candidates are redacted before anything else looks at them.
2. Each is segmented into imports, exports, hooks and a component body.
3. Imports are unioned; the body follows a fixed precedence policy that lets
   secured local logic replace the interior of the cloud's error boundary.
4. The file is reassembled around a fixed default-exported component and
   diffed against the redacted cloud candidate.
"""

import re

from hybrid_architect.models import MergePolicyState, SegmentSet, SynthesisResult
from hybrid_architect.synthesis.differ import diff_lines
from hybrid_architect.synthesis.patterns import SECURED_TOKENS
from hybrid_architect.synthesis.redactor import redact
from hybrid_architect.synthesis.segmenter import segment

# Constants
TRY_CATCH_BLOCK = re.compile(r"try\s*\{([\s\S]*?)\}\s*catch")
MIN_LOCAL_BODY_LENGTH = 10  # local body must be strictly longer to enter the try block
COMPONENT_NAME = "App"
SECURITY_PRIORITIZED_MARKER = "// SECURITY-PRIORITIZED LOCAL LOGIC"
SECURITY_OVERRIDE_MARKER = "// SECURITY OVERRIDE: Local sanitization prioritized"


def merge_imports(cloud_imports: list[str], local_imports: list[str]) -> list[str]:
    """Union of import lines, cloud first, deduplicated by exact text."""
    seen: set[str] = set()
    merged: list[str] = []
    for line in [*cloud_imports, *local_imports]:
        if line not in seen:
            seen.add(line)
            merged.append(line)
    return merged


def is_secured(body: str) -> bool:
    """True if a body references environment variables or carries a redaction marker."""
    return any(token in body for token in SECURED_TOKENS)


def evaluate_policy(cloud: SegmentSet, local: SegmentSet) -> MergePolicyState:
    return MergePolicyState(
        has_try_catch=TRY_CATCH_BLOCK.search(cloud.body) is not None,
        is_local_secured=is_secured(local.body),
    )


def merge_body(cloud: SegmentSet, local: SegmentSet) -> str:
    """Apply the body precedence policy; the first matching rule wins.

    a. Cloud has a try/catch and the local body is non-trivial: the first try
       block keeps its cloud wrapper, and its interior becomes the local body
       only when that body is secured.
    b. Local body is secured: it replaces the cloud body outright.
    c. Otherwise the cloud body is used unchanged.
    """
    policy = evaluate_policy(cloud, local)

    if policy.has_try_catch and len(local.body) > MIN_LOCAL_BODY_LENGTH:

        def _inject(match: re.Match) -> str:
            if policy.is_local_secured:
                interior = f"\n    {SECURITY_PRIORITIZED_MARKER}\n    {local.body}\n  "
            else:
                interior = match.group(1)
            return f"try {{{interior}}} catch"

        return TRY_CATCH_BLOCK.sub(_inject, cloud.body, count=1)

    if policy.is_local_secured:
        return f"{SECURITY_OVERRIDE_MARKER}\n{local.body}"

    return cloud.body


def reassemble(imports: list[str], body: str, cloud_exports: list[str]) -> str:
    """Build the final file around the fixed default-exported component.

    Cloud exports are re-emitted after the component, except any line that
    mentions ``default``.
    """
    named_exports = [line for line in cloud_exports if "default" not in line]
    return (
        "\n".join(imports)
        + f"\n\nexport default function {COMPONENT_NAME}() {{\n  {body}\n}}\n\n"
        + "\n".join(named_exports)
    )


def synthesize(cloud_text: str | None, local_text: str | None) -> SynthesisResult:
    """Combine a cloud and a local candidate into one redacted file.

    Never raises for malformed or empty code; unmatched heuristics fall back
    to the documented default branches.

    Args:
        cloud_text: Candidate from the cloud generator. ``None`` is treated as "".
        local_text: Candidate from the local generator. ``None`` is treated as "".

    Returns:
        SynthesisResult with the final code and its tagged diff against the
        redacted cloud candidate.
    """
    # Step 1: Redact both candidates
    safe_cloud = redact(cloud_text or "")
    safe_local = redact(local_text or "")

    # Step 2: Segment
    cloud_segments = segment(safe_cloud)
    local_segments = segment(safe_local)

    # Step 3: Import union
    final_imports = merge_imports(cloud_segments.imports, local_segments.imports)

    # Step 4: Body policy
    merged_body = merge_body(cloud_segments, local_segments)

    # Step 5: Reassemble
    final_code = reassemble(final_imports, merged_body, cloud_segments.exports)

    # Step 6: Diff the cloud plan against the synthesized result
    return SynthesisResult(code=final_code, diff=diff_lines(safe_cloud, final_code))
