"""PatchGen module: applies suggestions and renders diffs.

Public API:
    apply_suggestions(content, findings) -> (content, applied, skipped)
    fix_source(file_path, content, rule) -> PatchResult | None
"""

from prefer_bind.patchgen.generator import apply_suggestions, compute_diff, fix_source
from prefer_bind.patchgen.types import PatchResult

__all__ = ["apply_suggestions", "compute_diff", "fix_source", "PatchResult"]
