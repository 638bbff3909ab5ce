"""Apply prefer-bind suggestions and render them as unified diffs.

Suggestions are never applied implicitly; this module is what the CLI
uses when asked for --diff or --write.
"""

import difflib
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from prefer_bind.patchgen.types import PatchResult
from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.rule.types import Finding
from prefer_bind.scanner.ast_scanner import scan_ast

logger = logging.getLogger(__name__)

# Upper bound on scan+apply rounds for one file.
MAX_PASSES = 10


def apply_suggestions(content: str, findings: Iterable[Finding]) -> tuple[str, int, int]:
    """Apply the first suggestion of each finding to content.

    Suggestions are applied in source order. One whose span overlaps an
    already applied span is skipped. Offsets are UTF-8 byte offsets.

    Returns (new_content, applied, skipped).
    """
    suggestions = sorted(
        (f.suggestions[0] for f in findings if f.suggestions),
        key=lambda s: (s.start_byte, s.end_byte),
    )

    source = content.encode("utf-8")
    chunks: list[bytes] = []
    cursor = 0
    applied = skipped = 0

    for suggestion in suggestions:
        if suggestion.start_byte < cursor:
            skipped += 1
            continue
        chunks.append(source[cursor:suggestion.start_byte])
        chunks.append(suggestion.text.encode("utf-8"))
        cursor = suggestion.end_byte
        applied += 1

    chunks.append(source[cursor:])
    return b"".join(chunks).decode("utf-8"), applied, skipped


def fix_source(
    file_path: Path,
    content: str,
    rule: Optional[PreferBindRule] = None,
    max_passes: int = MAX_PASSES,
) -> Optional[PatchResult]:
    """Repeatedly scan and apply suggestions until nothing changes.

    Overlapping suggestions skipped in one pass are picked up by the next.
    Returns None if no suggestion applies.
    """
    rule = rule or PreferBindRule()
    source = content
    total_applied = skipped = 0

    for pass_num in range(1, max_passes + 1):
        findings = scan_ast(file_path, source, rule)
        if not findings:
            skipped = 0
            break

        source, applied, skipped = apply_suggestions(source, findings)
        total_applied += applied
        logger.debug(
            "Pass %d on %s: applied %d, skipped %d", pass_num, file_path, applied, skipped,
        )
        if not applied:
            break
    else:
        logger.warning("Stopped fixing %s after %d passes", file_path, max_passes)

    if source == content:
        return None

    diff = compute_diff(content, source, str(file_path))
    return PatchResult(
        diff=diff,
        source=source,
        touched_files=[str(file_path)],
        applied=total_applied,
        skipped=skipped,
    )


def compute_diff(original: str, modified: str, file_path: str) -> str:
    """Compute a unified diff between original and modified source.

    Uses keepends=True so content lines carry their own newlines, and
    lineterm='\\n' so the --- / +++ / @@ header lines are also newline-
    terminated.
    """
    original_lines = original.splitlines(keepends=True)
    modified_lines = modified.splitlines(keepends=True)

    diff_lines = difflib.unified_diff(
        original_lines,
        modified_lines,
        fromfile=f"a/{file_path}",
        tofile=f"b/{file_path}",
        lineterm="\n",
    )
    return "".join(diff_lines)
