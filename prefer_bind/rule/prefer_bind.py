"""The prefer-bind rule.

Detects closures that only forward to a method call, e.g.

    signal.addEventListener("abort", () => controller.abort());

and suggests a bound method instead:

    signal.addEventListener("abort", controller.abort.bind(controller));

A closure keeps its whole enclosing scope alive for as long as whoever
received it holds on to it; a bound method only keeps the receiver.

The host calls check() for every node whose type is in node_types. Each
call is independent and only reads the node, its body and its parent.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

import tree_sitter

from prefer_bind.rule.context import classify, should_report
from prefer_bind.rule.matcher import CLOSURE_NODE_TYPES, match_closure
from prefer_bind.rule.options import RuleOptions, options_schema, resolve_options
from prefer_bind.rule.reporter import MESSAGES, RULE_ID, build_finding
from prefer_bind.rule.rewrite import synthesize
from prefer_bind.rule.types import Finding

logger = logging.getLogger(__name__)


class PreferBindRule:
    """Suggest `obj.method.bind(obj)` over `() => obj.method()`."""

    rule_id: str = RULE_ID

    #: Node types the host must visit
    node_types: tuple[str, ...] = CLOSURE_NODE_TYPES

    meta: dict[str, Any] = {
        "type": "suggestion",
        "docs": {
            "description": "Prefer .bind() over closure wrappers to prevent potential memory leaks",
            "recommended": False,
        },
        "has_suggestions": True,
        "messages": MESSAGES,
    }

    def __init__(self, options: Optional[Mapping[str, Any] | RuleOptions] = None):
        self.options = resolve_options(options)

    @classmethod
    def schema(cls) -> dict:
        return options_schema()

    def check(self, node: tree_sitter.Node) -> Optional[Finding]:
        """Analyze one closure node and return a finding, or None."""
        shape = match_closure(node, include_async=self.options.include_async)
        if shape is None:
            return None

        placement = classify(node, self.options)

        # Without a scheduler to carry them, arguments can't survive the rewrite
        if shape.has_arguments and placement.timer is None:
            return None

        if not should_report(placement, self.options):
            return None

        rewrite = synthesize(node, shape, placement.timer)
        logger.debug(
            "prefer-bind match at %d:%d (%s) -> %s",
            node.start_point[0] + 1,
            node.start_point[1],
            shape.kind.value,
            rewrite.replacement_text,
        )
        return build_finding(rewrite)
