"""prefer-bind: suggest bound methods over closure wrappers in JS/TS.

RULES maps rule ids to rule classes for hosts that register rules by name.
"""

from prefer_bind.rule.prefer_bind import PreferBindRule

__version__ = "0.1.0"

NAME = "prefer-bind"

# Registry: maps rule id -> rule class
RULES: dict[str, type[PreferBindRule]] = {
    PreferBindRule.rule_id: PreferBindRule,
}

__all__ = ["NAME", "RULES", "PreferBindRule", "__version__"]
