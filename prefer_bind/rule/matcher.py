"""Shape matcher: recognizes trivial forwarding closures.

A trivial forwarding closure is a parameterless arrow function or function
expression whose whole body is one call to a method on a receiver:

    () => obj.method()
    () => { obj.method(); }
    function () { obj.method(); }
    async () => await obj.method()
    async function () { await obj.method(); }

Recognition happens in three steps. as_candidate() checks the closure
itself, normalize_body() reduces the body to a tagged ForwardingCall, and
extract_method_call() checks the call and captures the receiver, method
name and argument texts. Any step can answer None, which simply means
"not this pattern".
"""

from typing import Optional

import tree_sitter

from prefer_bind.rule.nodes import (
    has_keyword,
    has_optional_chain,
    node_text,
    significant_children,
    unwrap_parens,
)
from prefer_bind.rule.types import (
    BodyKind,
    CandidateClosure,
    ForwardingCall,
    MethodCallShape,
    ShapeKind,
)

ARROW_FUNCTION = "arrow_function"

FUNCTION_EXPRESSIONS = ("function_expression",)

CLOSURE_NODE_TYPES = (ARROW_FUNCTION, *FUNCTION_EXPRESSIONS)


def as_candidate(node: tree_sitter.Node) -> Optional[CandidateClosure]:
    """Return the closure as a candidate if it takes no parameters."""
    if node.type == ARROW_FUNCTION:
        # `x => ...` stores its lone parameter under a different field
        if node.child_by_field_name("parameter") is not None:
            return None
    elif node.type in FUNCTION_EXPRESSIONS:
        if has_keyword(node, "*"):
            return None
    else:
        return None

    parameters = node.child_by_field_name("parameters")
    if parameters is not None and significant_children(parameters):
        return None

    body = node.child_by_field_name("body")
    if body is None:
        return None

    kind = BodyKind.BLOCK if body.type == "statement_block" else BodyKind.EXPRESSION
    return CandidateClosure(
        node=node,
        body=body,
        body_kind=kind,
        is_async=has_keyword(node, "async"),
    )


def normalize_body(candidate: CandidateClosure) -> Optional[ForwardingCall]:
    """Reduce the closure body to the single call it forwards to."""
    if candidate.body_kind == BodyKind.EXPRESSION:
        return _call_or_awaited_call(candidate.body, in_block=False)

    statements = significant_children(candidate.body)
    if len(statements) != 1:
        return None

    statement = statements[0]
    if statement.type != "expression_statement":
        return None

    expressions = significant_children(statement)
    if len(expressions) != 1:
        return None

    return _call_or_awaited_call(expressions[0], in_block=True)


def _call_or_awaited_call(
    expression: tree_sitter.Node, in_block: bool
) -> Optional[ForwardingCall]:
    expression = unwrap_parens(expression)
    if expression is None:
        return None

    if expression.type == "call_expression":
        kind = ShapeKind.SINGLE_STATEMENT_DIRECT_CALL if in_block else ShapeKind.DIRECT_CALL
        return ForwardingCall(kind=kind, call=expression)

    if expression.type == "await_expression":
        operands = significant_children(expression)
        if len(operands) != 1:
            return None
        awaited = unwrap_parens(operands[0])
        if awaited is None or awaited.type != "call_expression":
            return None
        kind = ShapeKind.SINGLE_STATEMENT_AWAITED_CALL if in_block else ShapeKind.AWAITED_CALL
        return ForwardingCall(kind=kind, call=awaited)

    return None


def extract_method_call(forwarding: ForwardingCall) -> Optional[MethodCallShape]:
    """Capture `object.method(args)` from the forwarded call.

    Only a plain, non-computed property access can be re-emitted as
    `object.method.bind(object)`, so subscripts, private names, optional
    chains, tagged templates and `super` receivers are all rejected.
    """
    call = forwarding.call

    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None
    if has_optional_chain(call):
        return None

    callee = call.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return None
    if has_optional_chain(callee):
        return None

    receiver = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    if receiver is None or prop is None:
        return None
    if prop.type != "property_identifier":
        return None
    if receiver.type == "super":
        return None

    return MethodCallShape(
        object_text=node_text(receiver),
        method_name=node_text(prop),
        argument_texts=tuple(node_text(arg) for arg in significant_children(arguments)),
        kind=forwarding.kind,
    )


def match_closure(node: tree_sitter.Node, include_async: bool = False) -> Optional[MethodCallShape]:
    """Run all matcher steps on one node.

    Argument-bearing shapes are returned as well; whether they can be
    rewritten depends on where the closure is placed.
    """
    candidate = as_candidate(node)
    if candidate is None:
        return None
    if candidate.is_async and not include_async:
        return None

    forwarding = normalize_body(candidate)
    if forwarding is None:
        return None

    return extract_method_call(forwarding)
