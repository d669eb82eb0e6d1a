"""Parse rule declarations ("name:arg1,arg2") into ParsedRule values."""

import csv
import re
from typing import Any, Iterable

from jsvalidation.rules.types import ParsedRule

# Rules whose single parameter is a pattern that may itself contain commas
PATTERN_RULES = frozenset({"regex", "not_regex"})

ALIASES = {
    "int": "integer",
    "bool": "boolean",
}

_STUDLY_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_rule_name(name: str) -> str:
    """Normalize a rule name to snake_case, resolving aliases.

    "RequiredIf" -> "required_if", "Int" -> "integer".
    """
    name = _STUDLY_BOUNDARY.sub("_", name.strip()).lower()
    return ALIASES.get(name, name)


def parse_rule(rule: Any) -> ParsedRule:
    """Parse one rule declaration.

    Non-string rule objects are stringified first. Parameters are kept as
    text and in declared order.
    """
    text = rule if isinstance(rule, str) else str(rule)
    name, sep, raw_params = text.partition(":")
    name = normalize_rule_name(name)

    if not sep:
        return ParsedRule(name=name)

    if name in PATTERN_RULES:
        return ParsedRule(name=name, parameters=(raw_params,))

    return ParsedRule(name=name, parameters=tuple(_split_parameters(raw_params)))


def parse_rule_list(rules: str | Iterable[Any] | None) -> list[ParsedRule]:
    """Parse a field's rules, given as "a|b:1" or as a sequence.

    Empty entries are skipped; order is preserved.
    """
    if rules is None:
        return []
    if isinstance(rules, str):
        items: Iterable[Any] = rules.split("|")
    else:
        items = rules

    parsed = []
    for item in items:
        if isinstance(item, str) and not item.strip():
            continue
        parsed.append(parse_rule(item))
    return parsed


def _split_parameters(raw: str) -> list[str]:
    """Split a comma-separated parameter list, honouring double quotes."""
    if raw == "":
        return [""]
    return next(csv.reader([raw], skipinitialspace=False))
