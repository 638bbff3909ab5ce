"""Options for the prefer-bind rule.

Options arrive as a plain mapping (the rule-options object of a lint
config) using camelCase keys. They are validated once, before any node is
analyzed, into a frozen RuleOptions. Anything malformed raises ConfigError.
"""

import re
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

DEFAULT_LONG_LIVED_CONTEXTS: tuple[str, ...] = (
    "addEventListener",
    "setTimeout",
    "setInterval",
    "on",
    "once",
    "subscribe",
)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class ConfigError(Exception):
    """Raised when rule options or an options file cannot be used.

    errors carries pydantic's per-field error list when validation failed.
    """

    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        self.errors = errors or []
        super().__init__(message)


class RuleOptions(BaseModel):
    """Resolved, immutable rule options."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    only_in_long_lived_contexts: StrictBool = Field(
        default=True,
        alias="onlyInLongLivedContexts",
        description="Only report closures passed to a known long-lived context",
    )
    long_lived_contexts: frozenset[str] = Field(
        default=frozenset(DEFAULT_LONG_LIVED_CONTEXTS),
        alias="longLivedContexts",
        description="Callee names known to hold on to callbacks",
    )
    include_async: StrictBool = Field(
        default=False,
        alias="includeAsync",
        description="Also report async closures",
    )

    @field_validator("long_lived_contexts", mode="before")
    @classmethod
    def validate_long_lived_contexts(cls, v: Any) -> frozenset[str]:
        if not isinstance(v, (list, tuple, set, frozenset)):
            raise ValueError("must be an array of strings")
        names = list(v)
        if not names:
            raise ValueError("must contain at least one name")
        for name in names:
            if not isinstance(name, str):
                raise ValueError(f"expected a string, got {type(name).__name__}")
            if not _IDENTIFIER.match(name):
                raise ValueError(f"'{name}' is not a bare identifier name")
        return frozenset(names)


def resolve_options(raw: Optional[Mapping[str, Any] | RuleOptions] = None) -> RuleOptions:
    """Merge user options over the defaults and validate them.

    Accepts None, an already resolved RuleOptions, or a mapping with
    camelCase (or snake_case) keys.
    """
    if raw is None:
        return RuleOptions()
    if isinstance(raw, RuleOptions):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Rule options must be an object, got {type(raw).__name__}")

    try:
        return RuleOptions.model_validate(dict(raw))
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid prefer-bind options: {details}", errors=exc.errors()) from exc


def options_schema() -> dict:
    """JSON schema of the options object, keyed by the camelCase names."""
    return RuleOptions.model_json_schema(by_alias=True)
