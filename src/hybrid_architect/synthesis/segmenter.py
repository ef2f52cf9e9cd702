"""Pattern-based segmentation of React/TypeScript candidates.

This is a heuristic layer, not a parser. Import and export statements must fit
on one physical line, and the component body extends to the last closing brace
in the text rather than the syntactically matching one.
"""

import re

from hybrid_architect.models import SegmentSet

# Statement text stops before \r so CRLF candidates match like LF ones
IMPORT_LINE = re.compile(r"^import[^\r\n]*;(?=\r?$)", re.MULTILINE)
EXPORT_LINE = re.compile(r"^export[^\r\n]*;(?=\r?$)", re.MULTILINE)
STATE_HOOK = re.compile(r"const\s+\[.*\]\s*=\s*useState\(.*\);")
DEFAULT_COMPONENT = re.compile(
    r"export\s+default\s+function\s+\w+\s*\(.*\)\s*\{([\s\S]*)\}"
)


def extract_body(text: str) -> str:
    """Interior of the default-exported function, or the text minus imports/exports."""
    match = DEFAULT_COMPONENT.search(text)
    if match:
        return match.group(1).strip()
    stripped = IMPORT_LINE.sub("", text)
    stripped = EXPORT_LINE.sub("", stripped)
    return stripped.strip()


def segment(text: str) -> SegmentSet:
    """Split redacted source text into imports, exports, hooks and body."""
    text = text or ""
    return SegmentSet(
        imports=IMPORT_LINE.findall(text),
        exports=EXPORT_LINE.findall(text),
        hooks=STATE_HOOK.findall(text),
        body=extract_body(text),
    )
