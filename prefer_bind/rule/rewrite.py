"""Rewrite synthesizer: closure wrapper -> bound method reference.

Base form, replacing only the closure:

    () => obj.method()                  ->  obj.method.bind(obj)

Scheduler form, replacing the whole scheduler call because the argument
list is restructured:

    setTimeout(() => obj.method(a, b), 1000)   ->  setTimeout(obj.method.bind(obj), 1000, a, b)
    window.setTimeout(() => obj.method(a))     ->  setTimeout(obj.method.bind(obj), 0, a)

The receiver text is emitted twice, unchanged. Nothing is re-parsed.
"""

from typing import Optional

import tree_sitter

from prefer_bind.rule.nodes import node_text
from prefer_bind.rule.types import MethodCallShape, RewriteResult, TimerContext

# Delay used when the scheduler call had no second argument.
DEFAULT_DELAY = "0"


def bind_expression(shape: MethodCallShape) -> str:
    return f"{shape.object_text}.{shape.method_name}.bind({shape.object_text})"


def scheduler_call(shape: MethodCallShape, timer: TimerContext) -> str:
    delay = timer.delay_text if timer.delay_text is not None else DEFAULT_DELAY
    arguments = [bind_expression(shape), delay, *shape.argument_texts]
    return f"{timer.scheduler_name}({', '.join(arguments)})"


def synthesize(
    closure: tree_sitter.Node,
    shape: MethodCallShape,
    timer: Optional[TimerContext] = None,
) -> RewriteResult:
    """Build the replacement for a matched closure.

    Argument-bearing shapes must come with a timer context; callers check
    that before asking for a rewrite.
    """
    if shape.has_arguments:
        if timer is None:
            raise ValueError(
                f"Cannot rewrite {shape.object_text}.{shape.method_name}(...) "
                "with arguments outside a timer context"
            )
        return _replace(timer.call, scheduler_call(shape, timer))

    return _replace(closure, bind_expression(shape))


def _replace(target: tree_sitter.Node, text: str) -> RewriteResult:
    return RewriteResult(
        replacement_text=text,
        replaced_text=node_text(target),
        start_byte=target.start_byte,
        end_byte=target.end_byte,
        start_point=tuple(target.start_point),
        end_point=tuple(target.end_point),
    )
