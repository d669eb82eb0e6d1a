"""Rule vocabulary: parsing, descriptors and the registry."""

from jsvalidation.rules.builtins import builtin_descriptors, register_builtin_rules
from jsvalidation.rules.messages import (
    DEFAULT_MESSAGES,
    GENERIC_MESSAGE,
    PLACEHOLDERS,
    format_message,
    unresolved_placeholders,
)
from jsvalidation.rules.parser import normalize_rule_name, parse_rule, parse_rule_list
from jsvalidation.rules.registry import RuleRegistry, rule
from jsvalidation.rules.types import (
    ParsedRule,
    RuleDescriptor,
    TransformContext,
    TranslationStrategy,
)

__all__ = [
    "DEFAULT_MESSAGES",
    "GENERIC_MESSAGE",
    "PLACEHOLDERS",
    "ParsedRule",
    "RuleDescriptor",
    "RuleRegistry",
    "TransformContext",
    "TranslationStrategy",
    "builtin_descriptors",
    "format_message",
    "normalize_rule_name",
    "parse_rule",
    "parse_rule_list",
    "register_builtin_rules",
    "rule",
    "unresolved_placeholders",
]
