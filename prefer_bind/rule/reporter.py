"""Diagnostic reporter: turns a rewrite into a Finding."""

from prefer_bind.rule.types import Finding, RewriteResult, Suggestion

RULE_ID = "prefer-bind"

MESSAGE_PREFER_BIND = "preferBind"
MESSAGE_SUGGESTION = "preferBindSuggestion"

MESSAGES: dict[str, str] = {
    MESSAGE_PREFER_BIND: (
        "Prefer '{replacement}' over closure wrapper to avoid capturing surrounding scope."
    ),
    MESSAGE_SUGGESTION: "Replace with .bind()",
}


def format_message(message_id: str, **data: str) -> str:
    return MESSAGES[message_id].format(**data)


def build_finding(rewrite: RewriteResult) -> Finding:
    """Package a rewrite as a finding with exactly one suggestion.

    The finding is located at the replaced span: the closure, or the whole
    scheduler call when arguments were reordered.
    """
    suggestion = Suggestion(
        message_id=MESSAGE_SUGGESTION,
        description=format_message(MESSAGE_SUGGESTION),
        start_byte=rewrite.start_byte,
        end_byte=rewrite.end_byte,
        text=rewrite.replacement_text,
    )
    start_row, start_col = rewrite.start_point
    end_row, end_col = rewrite.end_point
    return Finding(
        rule_id=RULE_ID,
        message_id=MESSAGE_PREFER_BIND,
        message=format_message(MESSAGE_PREFER_BIND, replacement=rewrite.replacement_text),
        replacement=rewrite.replacement_text,
        line=start_row + 1,
        column=start_col,
        end_line=end_row + 1,
        end_column=end_col,
        suggestions=[suggestion],
    )
