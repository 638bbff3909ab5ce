"""The prefer-bind rule: matcher, context classifier, rewrite and reporter.

Public API:
    PreferBindRule(options).check(node) -> Finding | None
    resolve_options(raw) -> RuleOptions (raises ConfigError)
"""

from prefer_bind.rule.options import ConfigError, RuleOptions, resolve_options
from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.rule.types import Finding, Suggestion

__all__ = [
    "PreferBindRule",
    "RuleOptions",
    "ConfigError",
    "resolve_options",
    "Finding",
    "Suggestion",
]
