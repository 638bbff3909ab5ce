"""Small read-only helpers over tree-sitter nodes."""

from typing import Optional

import tree_sitter

COMMENT = "comment"


def node_text(node: tree_sitter.Node) -> str:
    """Verbatim source text of a node."""
    return node.text.decode("utf-8") if node.text else ""


def significant_children(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Named children of a node, comments excluded."""
    return [child for child in node.named_children if child.type != COMMENT]


def unwrap_parens(node: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
    """Strip any number of enclosing parentheses: `((x))` -> `x`."""
    while node is not None and node.type == "parenthesized_expression":
        inner = significant_children(node)
        if len(inner) != 1:
            return node
        node = inner[0]
    return node


def has_optional_chain(node: tree_sitter.Node) -> bool:
    """True for `a?.b` member accesses and `a?.()` calls."""
    if node.child_by_field_name("optional_chain") is not None:
        return True
    return any(child.type == "optional_chain" for child in node.children)


def has_keyword(node: tree_sitter.Node, keyword: str) -> bool:
    """True if an anonymous token such as `async` or `*` is a direct child."""
    return any(not child.is_named and child.type == keyword for child in node.children)
