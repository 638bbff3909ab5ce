"""Context classifier: where is the closure being passed?

Only the closure's immediate surroundings are inspected, through the
tree's read-only parent links. Callee names are resolved lexically:
`setTimeout(...)` and `window.setTimeout(...)` both resolve to
"setTimeout", whatever `window` is bound to.
"""

from typing import Optional

import tree_sitter

from prefer_bind.rule.nodes import node_text, significant_children
from prefer_bind.rule.options import RuleOptions
from prefer_bind.rule.types import CallSite, Placement, TimerContext

# Schedulers that forward extra arguments after the delay to the callback.
TIMER_FUNCTIONS = frozenset({"setTimeout", "setInterval"})


def describe_call_site(node: tree_sitter.Node) -> Optional[CallSite]:
    """Return the call the node is an argument of, or None.

    Parentheses around the node are looked through, so `f((() => ...))`
    is still an argument of `f`. `new Foo(() => ...)` does not count as
    a call site.
    """
    argument = node
    while argument.parent is not None and argument.parent.type == "parenthesized_expression":
        argument = argument.parent

    parent = argument.parent
    if parent is None or parent.type != "arguments":
        return None

    call = parent.parent
    if call is None or call.type != "call_expression":
        return None

    arguments = tuple(significant_children(parent))
    index = next((i for i, arg in enumerate(arguments) if arg == argument), None)
    if index is None:
        return None

    return CallSite(
        call=call,
        callee_name=resolve_callee_name(call),
        arguments=arguments,
        argument_index=index,
    )


def resolve_callee_name(call: tree_sitter.Node) -> Optional[str]:
    """Name of the called function: `f(...)` -> "f", `a.b.f(...)` -> "f"."""
    callee = call.child_by_field_name("function")
    if callee is None:
        return None

    if callee.type == "identifier":
        return node_text(callee)

    if callee.type == "member_expression":
        prop = callee.child_by_field_name("property")
        if prop is not None and prop.type == "property_identifier":
            return node_text(prop)

    return None


def get_timer_context(call_site: Optional[CallSite]) -> Optional[TimerContext]:
    """TimerContext when the closure is the first argument of a scheduler."""
    if call_site is None or call_site.argument_index != 0:
        return None
    if call_site.callee_name not in TIMER_FUNCTIONS:
        return None

    delay = call_site.arguments[1] if len(call_site.arguments) > 1 else None
    return TimerContext(
        scheduler_name=call_site.callee_name,
        call=call_site.call,
        delay_text=node_text(delay) if delay is not None else None,
    )


def classify(node: tree_sitter.Node, options: RuleOptions) -> Placement:
    call_site = describe_call_site(node)
    long_lived = (
        call_site is not None
        and call_site.callee_name is not None
        and call_site.callee_name in options.long_lived_contexts
    )
    return Placement(
        call_site=call_site,
        long_lived=long_lived,
        timer=get_timer_context(call_site),
    )


def should_report(placement: Placement, options: RuleOptions) -> bool:
    """Apply the onlyInLongLivedContexts policy.

    A timer context always qualifies, even when the scheduler names were
    left out of longLivedContexts.
    """
    if not options.only_in_long_lived_contexts:
        return True
    return placement.long_lived or placement.timer is not None
