"""Types for the patch generation module."""

from dataclasses import dataclass, field


@dataclass
class PatchResult:
    """Suggestions applied to one file.

    diff: Unified diff string (as produced by difflib).
    source: The rewritten file content.
    touched_files: Relative path of the patched file.
    applied: Number of suggestions applied across all passes.
    skipped: Suggestions still overlapping after the last pass.
    """

    diff: str
    source: str
    touched_files: list[str]
    applied: int = 0
    skipped: int = 0

    def to_dict(self) -> dict:
        return {
            "diff": self.diff,
            "touched_files": self.touched_files,
            "applied": self.applied,
            "skipped": self.skipped,
        }
