"""Tests for suggestion application and diff generation."""

from pathlib import Path

import pytest

from prefer_bind.patchgen.generator import apply_suggestions, compute_diff, fix_source
from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.rule.types import Finding, Suggestion
from prefer_bind.scanner.ast_scanner import SourceParseError, scan_ast

ANYWHERE = PreferBindRule({"onlyInLongLivedContexts": False})


def _finding(start, end, text):
    return Finding(
        rule_id="prefer-bind",
        message_id="preferBind",
        message="",
        replacement=text,
        line=1,
        column=start,
        end_line=1,
        end_column=end,
        suggestions=[Suggestion("preferBindSuggestion", "Replace with .bind()", start, end, text)],
    )


class TestApplySuggestions:
    def test_non_overlapping_applied(self):
        content, applied, skipped = apply_suggestions(
            "aaa bbb ccc", [_finding(8, 11, "Z"), _finding(0, 3, "X")]
        )
        assert content == "X bbb Z"
        assert (applied, skipped) == (2, 0)

    def test_overlapping_skipped(self):
        content, applied, skipped = apply_suggestions(
            "aaa bbb ccc", [_finding(0, 7, "X"), _finding(4, 7, "Y")]
        )
        assert content == "X ccc"
        assert (applied, skipped) == (1, 1)

    def test_no_findings(self):
        assert apply_suggestions("same", []) == ("same", 0, 0)

    def test_byte_offsets_with_non_ascii_source(self):
        code = 'const s = "héllo — ✓"; el.on("x", () => obj.m());'
        findings = scan_ast(Path("a.js"), code)
        content, applied, _ = apply_suggestions(code, findings)
        assert applied == 1
        assert content == 'const s = "héllo — ✓"; el.on("x", obj.m.bind(obj));'


class TestFixSource:
    def test_returns_none_when_clean(self):
        assert fix_source(Path("a.js"), "controller.abort.bind(controller);\n") is None

    def test_patch_result(self):
        code = "signal.addEventListener('abort', () => controller.abort());\n"
        patch = fix_source(Path("src/a.js"), code)
        assert patch.source == "signal.addEventListener('abort', controller.abort.bind(controller));\n"
        assert patch.touched_files == ["src/a.js"]
        assert patch.applied == 1
        assert patch.skipped == 0

    def test_diff_headers(self):
        code = "setTimeout(() => obj.m(a), 5);\n"
        patch = fix_source(Path("src/a.js"), code)
        assert patch.diff.startswith("--- a/src/a.js\n+++ b/src/a.js\n")
        assert "-setTimeout(() => obj.m(a), 5);\n" in patch.diff
        assert "+setTimeout(obj.m.bind(obj), 5, a);\n" in patch.diff

    def test_overlapping_suggestions_resolved_over_passes(self):
        code = "setTimeout(() => obj.m(() => other.n()), 10);\n"
        patch = fix_source(Path("a.js"), code, ANYWHERE)
        assert patch.source == "setTimeout(obj.m.bind(obj), 10, other.n.bind(other));\n"
        assert patch.applied == 2
        assert patch.skipped == 0

    def test_single_pass_leaves_overlap(self):
        code = "setTimeout(() => obj.m(() => other.n()), 10);\n"
        patch = fix_source(Path("a.js"), code, ANYWHERE, max_passes=1)
        assert patch.source == "setTimeout(obj.m.bind(obj), 10, () => other.n());\n"
        assert patch.skipped == 1

    def test_fixed_source_is_clean(self):
        code = (
            "el.addEventListener('click', () => this.onClick());\n"
            "setInterval(function () { clock.tick(now); }, 1000);\n"
        )
        patch = fix_source(Path("a.js"), code)
        assert scan_ast(Path("a.js"), patch.source) == []

    def test_parse_error_propagates(self):
        with pytest.raises(SourceParseError):
            fix_source(Path("a.js"), "el.on('x', () => obj.m()")


class TestComputeDiff:
    def test_empty_when_identical(self):
        assert compute_diff("a\n", "a\n", "f.js") == ""

    def test_counts_changed_lines(self):
        diff = compute_diff("a\nb\n", "a\nc\n", "f.js")
        changed = [
            line for line in diff.splitlines()
            if line.startswith(("+", "-")) and not line.startswith(("+++", "---"))
        ]
        assert changed == ["-b", "+c"]
