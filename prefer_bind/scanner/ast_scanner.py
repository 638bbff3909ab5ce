"""tree-sitter host for the prefer-bind rule.

Parses JS/TS files into ASTs, walks the tree in source order and hands
every closure node to the rule. The rule itself never parses or walks.
"""

import logging
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts

from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.rule.types import Finding

logger = logging.getLogger(__name__)

# Initialize languages once at module level
_JS_LANG = tree_sitter.Language(tsjs.language())
_TS_LANG = tree_sitter.Language(tsts.language_typescript())
_TSX_LANG = tree_sitter.Language(tsts.language_tsx())

# File extension to language mapping
_LANG_MAP: dict[str, tree_sitter.Language] = {
    ".js": _JS_LANG,
    ".jsx": _JS_LANG,
    ".mjs": _JS_LANG,
    ".cjs": _JS_LANG,
    ".ts": _TS_LANG,
    ".mts": _TS_LANG,
    ".cts": _TS_LANG,
    ".tsx": _TSX_LANG,
}

SCANNABLE_EXTENSIONS = frozenset(_LANG_MAP)


class SourceParseError(Exception):
    """Raised when a file parses with syntax errors."""

    def __init__(self, file_path: str, line: int, column: int):
        self.file_path = file_path
        self.line = line
        self.column = column
        super().__init__(f"Syntax error in {file_path} at {line}:{column}")


def parse_source(file_path: Path, content: str) -> Optional[tree_sitter.Tree]:
    """Parse a file with the language matching its extension.

    Returns None for unsupported extensions. Raises SourceParseError when
    the tree contains syntax errors.
    """
    language = _LANG_MAP.get(Path(file_path).suffix)
    if language is None:
        return None

    parser = tree_sitter.Parser(language)
    tree = parser.parse(content.encode("utf-8"))

    if tree.root_node.has_error:
        row, col = _first_error_point(tree.root_node)
        raise SourceParseError(str(file_path), row + 1, col)

    return tree


def scan_ast(
    file_path: Path,
    content: str,
    rule: Optional[PreferBindRule] = None,
) -> list[Finding]:
    """Run the rule over a single JS/TS file.

    Unsupported extensions produce no findings. Syntax errors propagate as
    SourceParseError so the caller can record them.
    """
    rule = rule or PreferBindRule()
    tree = parse_source(file_path, content)
    if tree is None:
        return []

    findings: list[Finding] = []
    _walk_tree(tree.root_node, rule, findings)
    return findings


def _walk_tree(
    node: tree_sitter.Node,
    rule: PreferBindRule,
    findings: list[Finding],
) -> None:
    """Recursively walk the AST and check each closure node."""
    if node.is_named and node.type in rule.node_types:
        finding = rule.check(node)
        if finding:
            findings.append(finding)

    # Recurse into children
    for child in node.children:
        _walk_tree(child, rule, findings)


def _first_error_point(node: tree_sitter.Node) -> tuple[int, int]:
    if node.is_error or node.is_missing:
        return tuple(node.start_point)
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error_point(child)
    return tuple(node.start_point)
