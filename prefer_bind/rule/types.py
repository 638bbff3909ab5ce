"""Types for the prefer-bind rule.

Everything here is transient: values are created while one closure node
is analyzed and dropped afterwards. Nodes are tree-sitter nodes owned by
the host's tree; the rule only reads them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import tree_sitter


class BodyKind(str, Enum):
    EXPRESSION = "expression"
    BLOCK = "block"


class ShapeKind(str, Enum):
    """How the forwarding call sits inside the closure body."""

    DIRECT_CALL = "direct_call"                                   # () => obj.m()
    AWAITED_CALL = "awaited_call"                                 # async () => await obj.m()
    SINGLE_STATEMENT_DIRECT_CALL = "single_statement_direct_call"  # () => { obj.m(); }
    SINGLE_STATEMENT_AWAITED_CALL = "single_statement_awaited_call"  # async () => { await obj.m(); }


@dataclass(frozen=True)
class CandidateClosure:
    """A parameterless arrow function or function expression."""

    node: tree_sitter.Node
    body: tree_sitter.Node
    body_kind: BodyKind
    is_async: bool


@dataclass(frozen=True)
class ForwardingCall:
    """The call expression a closure body reduces to, tagged by shape."""

    kind: ShapeKind
    call: tree_sitter.Node


@dataclass(frozen=True)
class MethodCallShape:
    """A recognized `object.method(args)` call.

    object_text and argument_texts are verbatim source slices; they are
    re-emitted unchanged by the rewrite.
    """

    object_text: str
    method_name: str
    argument_texts: tuple[str, ...]
    kind: ShapeKind

    @property
    def has_arguments(self) -> bool:
        return bool(self.argument_texts)


@dataclass(frozen=True)
class CallSite:
    """Where a closure sits when it is passed as a call argument.

    callee_name is the lexically resolved name of the called function:
    the identifier itself, or the last property of a member access.
    """

    call: tree_sitter.Node
    callee_name: Optional[str]
    arguments: tuple[tree_sitter.Node, ...]
    argument_index: int


@dataclass(frozen=True)
class TimerContext:
    """The closure is the first argument of setTimeout/setInterval."""

    scheduler_name: str
    call: tree_sitter.Node
    delay_text: Optional[str] = None


@dataclass(frozen=True)
class Placement:
    call_site: Optional[CallSite] = None
    long_lived: bool = False
    timer: Optional[TimerContext] = None


@dataclass(frozen=True)
class RewriteResult:
    """Replacement text plus the exact span it replaces.

    Offsets are byte offsets into the UTF-8 encoded source, points are
    (row, column) pairs as reported by tree-sitter.
    """

    replacement_text: str
    replaced_text: str
    start_byte: int
    end_byte: int
    start_point: tuple[int, int]
    end_point: tuple[int, int]


@dataclass
class Suggestion:
    message_id: str
    description: str
    start_byte: int
    end_byte: int
    text: str

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "desc": self.description,
            "range": [self.start_byte, self.end_byte],
            "text": self.text,
        }


@dataclass
class Finding:
    """One reported closure wrapper.

    Lines are 1-based, columns are 0-based byte columns. A finding never
    carries an automatic fix; the rewrite is only offered as a suggestion.
    """

    rule_id: str
    message_id: str
    message: str
    replacement: str
    line: int
    column: int
    end_line: int
    end_column: int
    suggestions: list[Suggestion] = field(default_factory=list)

    @property
    def start_byte(self) -> int:
        return self.suggestions[0].start_byte

    @property
    def end_byte(self) -> int:
        return self.suggestions[0].end_byte

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "message_id": self.message_id,
            "message": self.message,
            "replacement": self.replacement,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "fix": None,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }
