"""Line-block diff between the cloud candidate and the synthesized file."""

import difflib
from collections.abc import Iterable

from hybrid_architect.models import DiffLine, DiffOrigin


def diff_lines(before: str, after: str) -> list[DiffLine]:
    """Align ``before`` (cloud) with ``after`` (synthesized) line by line.

    Consecutive lines with the same fate are grouped into one block. Lines keep
    their endings, so a final line without a trailing newline differs from the
    same line with one. In a replaced region the removed block comes first.

    Args:
        before: Redacted cloud candidate.
        after: Final synthesized code.

    Returns:
        Blocks in reading order, tagged merged / cloud / local.
    """
    before_lines = (before or "").splitlines(keepends=True)
    after_lines = (after or "").splitlines(keepends=True)

    matcher = difflib.SequenceMatcher(None, before_lines, after_lines, autojunk=False)
    blocks: list[DiffLine] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            blocks.append(DiffLine.for_origin("".join(after_lines[j1:j2]), DiffOrigin.MERGED))
            continue
        if i2 > i1:
            blocks.append(DiffLine.for_origin("".join(before_lines[i1:i2]), DiffOrigin.CLOUD))
        if j2 > j1:
            blocks.append(DiffLine.for_origin("".join(after_lines[j1:j2]), DiffOrigin.LOCAL))
    return blocks


def apply_overrides(diff: list[DiffLine], pinned: Iterable[int] = ()) -> str:
    """Rebuild file text from a tagged diff, honouring manually pinned blocks.

    Without pins the result is the synthesized file: merged and local blocks
    are kept, cloud-only blocks are dropped. Pinning a block flips that
    choice, restoring a cloud block or rejecting a local one. Pinning a merged
    block changes nothing.

    Raises:
        ValueError: If a pinned index is outside the diff.
    """
    pinned_set = set(pinned)
    for index in pinned_set:
        if not 0 <= index < len(diff):
            raise ValueError(f"Pinned block {index} is out of range (0..{len(diff) - 1})")

    parts: list[str] = []
    for index, block in enumerate(diff):
        keep = block.origin != DiffOrigin.CLOUD
        if index in pinned_set and block.origin != DiffOrigin.MERGED:
            keep = not keep
        if keep:
            parts.append(block.value)
    return "".join(parts)
