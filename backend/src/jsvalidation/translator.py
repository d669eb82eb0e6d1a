"""Translate server rule sets into client field validations.

For every field, in declaration order:
1. Parse each rule into name + textual parameters
2. Resolve the rule's descriptor (unknown rules defer to the server)
3. Transform parameters for the client where the descriptor says so
4. Resolve the message template and the field's display name

Translation is a pure function of its inputs and the registry. It never
raises for a syntactically valid rule.
"""

import logging
from fnmatch import fnmatchcase
from typing import Any, Iterable, Mapping

from jsvalidation.rules.messages import GENERIC_MESSAGE, unresolved_placeholders
from jsvalidation.rules.parser import parse_rule_list
from jsvalidation.rules.registry import RuleRegistry
from jsvalidation.rules.types import ParsedRule, RuleDescriptor, TransformContext
from jsvalidation.types import FieldValidation, RuleSpec

logger = logging.getLogger(__name__)

# Rules that decide which size-message variant applies
NUMERIC_RULES = frozenset({"numeric", "integer", "decimal"})
FILE_RULES = frozenset({"file", "image", "mimes", "mimetypes"})
ARRAY_RULES = frozenset({"array"})


class RuleTranslator:
    """Translates field -> rule-list mappings into FieldValidation lists.

    Args:
        registry: Registry to resolve descriptors from (class or compatible object)
    """

    def __init__(self, registry: Any = RuleRegistry):
        self.registry = registry

    def translate(
        self,
        rules: Mapping[str, str | Iterable[Any] | None],
        messages: Mapping[str, Any] | None = None,
        custom_attributes: Mapping[str, str] | None = None,
    ) -> list[FieldValidation]:
        """Translate a rule set.

        Args:
            rules: field -> rules ("required|max:10" or a sequence)
            messages: Overrides keyed "field.rule" or "rule"
            custom_attributes: field -> display name

        Returns:
            One FieldValidation per input field, in input order
        """
        messages = messages or {}
        custom_attributes = custom_attributes or {}

        return [
            self.translate_field(field_name, field_rules, messages, custom_attributes)
            for field_name, field_rules in rules.items()
        ]

    def translate_field(
        self,
        field_name: str,
        field_rules: str | Iterable[Any] | None,
        messages: Mapping[str, Any],
        custom_attributes: Mapping[str, str],
    ) -> FieldValidation:
        """Translate the rules declared on a single field."""
        parsed = tuple(parse_rule_list(field_rules))
        ctx = TransformContext(field=field_name, rules=parsed)
        display_name = self.display_name(field_name, custom_attributes)

        specs: list[RuleSpec] = []
        resolved_messages: dict[str, str] = {}

        for parsed_rule in parsed:
            descriptor = self.registry.resolve(parsed_rule.name)
            spec = RuleSpec(
                rule=descriptor.name,
                parameters=descriptor.translate_parameters(parsed_rule.parameters, ctx),
                is_remote=descriptor.is_remote,
            )
            specs.append(spec)

            template = self.resolve_message(field_name, descriptor, messages, ctx)
            missing = unresolved_placeholders(
                template, spec.rule, display_name, spec.parameters
            )
            if missing:
                logger.warning(
                    "Message for %s.%s uses placeholders with no value: %s",
                    field_name,
                    spec.rule,
                    ", ".join(missing),
                )
            resolved_messages[spec.rule] = template

        return FieldValidation(
            field=field_name,
            rules=tuple(specs),
            messages=resolved_messages,
            display_name=display_name,
        )

    def resolve_message(
        self,
        field_name: str,
        descriptor: RuleDescriptor,
        messages: Mapping[str, Any],
        ctx: TransformContext,
    ) -> str:
        """Pick the message template for a rule on a field.

        Precedence: "field.rule" override (wildcards allowed in the field
        part), then "rule" override, then the descriptor's default.
        """
        rule_name = descriptor.name

        override = messages.get(f"{field_name}.{rule_name}")
        if override is None:
            override = self._wildcard_message(field_name, rule_name, messages)
        if override is None:
            override = messages.get(rule_name)
        if override is not None:
            return self._select_variant(override, ctx)

        if descriptor.message is not None:
            return self._select_variant(descriptor.message, ctx)

        return GENERIC_MESSAGE

    def display_name(self, field_name: str, custom_attributes: Mapping[str, str]) -> str:
        """Human-readable label for a field.

        A custom attribute (exact, then wildcard) wins; otherwise the field
        name with underscores and dots turned into spaces.
        """
        if field_name in custom_attributes:
            return custom_attributes[field_name]
        for pattern, label in custom_attributes.items():
            if "*" in pattern and fnmatchcase(field_name, pattern):
                return label

        words = field_name.replace("_", " ").replace(".", " ").replace("*", " ")
        return " ".join(words.split())

    def _wildcard_message(
        self,
        field_name: str,
        rule_name: str,
        messages: Mapping[str, Any],
    ) -> Any:
        suffix = f".{rule_name}"
        for key, message in messages.items():
            if "*" in key and key.endswith(suffix):
                if fnmatchcase(field_name, key[: -len(suffix)]):
                    return message
        return None

    def _select_variant(self, message: Any, ctx: TransformContext) -> str:
        """Pick the per-type variant of a size-rule message."""
        if isinstance(message, Mapping):
            value_type = value_type_of(ctx.rules)
            return message.get(value_type) or message.get("string") or GENERIC_MESSAGE
        return str(message)


def value_type_of(rules: Iterable[ParsedRule]) -> str:
    """Classify a field's value as "numeric", "array", "file" or "string"."""
    names = {r.name for r in rules}
    if names & NUMERIC_RULES:
        return "numeric"
    if names & ARRAY_RULES:
        return "array"
    if names & FILE_RULES:
        return "file"
    return "string"


def translate(
    rules: Mapping[str, str | Iterable[Any] | None],
    messages: Mapping[str, Any] | None = None,
    custom_attributes: Mapping[str, str] | None = None,
) -> list[FieldValidation]:
    """Translate a rule set using the global RuleRegistry."""
    return RuleTranslator().translate(rules, messages, custom_attributes)
