"""Protocols for the validation engine that builds validator instances.

jsvalidation never evaluates rules against data; it reads the original
rule, message and attribute definitions back off a validator instance.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ValidatorInstance(Protocol):
    """A validator built by the engine, exposing its original definitions."""

    rules: Mapping[str, Any]
    custom_messages: Mapping[str, Any]
    custom_attributes: Mapping[str, str]


class ValidationFactory(Protocol):
    """The engine's factory for validator instances."""

    def make(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, Any] | None = None,
        custom_attributes: Mapping[str, str] | None = None,
    ) -> ValidatorInstance:
        """Build a validator for the given data and definitions."""
        ...


class EvaluatingValidator(Protocol):
    """A validator that can run its rules. Only the remote endpoint needs this."""

    def passes(self) -> bool:
        ...

    def errors(self) -> Mapping[str, list[str]]:
        """field -> failure messages, after passes() has run."""
        ...


@dataclass
class ValidatorDefinitions:
    """The rule, message and attribute definitions read off a validator."""

    rules: dict[str, Any] = field(default_factory=dict)
    messages: dict[str, Any] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)


def definitions(validator: Any) -> ValidatorDefinitions:
    """Read the original definitions from a validator instance.

    Accepts the attribute names of the ValidatorInstance protocol, with
    fallbacks to get_rules()/messages/attributes spellings used by other
    engines. Missing definitions read as empty.
    """
    if hasattr(validator, "get_rules"):
        rules = validator.get_rules()
    else:
        rules = getattr(validator, "rules", None)

    messages = getattr(validator, "custom_messages", None)
    if messages is None:
        messages = getattr(validator, "messages", None)

    attributes = getattr(validator, "custom_attributes", None)
    if attributes is None:
        attributes = getattr(validator, "attributes", None)

    return ValidatorDefinitions(
        rules=dict(_call_if_method(rules) or {}),
        messages=dict(_call_if_method(messages) or {}),
        attributes=dict(_call_if_method(attributes) or {}),
    )


def _call_if_method(value: Any) -> Any:
    return value() if callable(value) else value


@dataclass
class DefinitionValidator:
    """A validator that only carries definitions and never evaluates."""

    data: dict[str, Any] = field(default_factory=dict)
    rules: dict[str, Any] = field(default_factory=dict)
    custom_messages: dict[str, Any] = field(default_factory=dict)
    custom_attributes: dict[str, str] = field(default_factory=dict)


class DefinitionFactory:
    """ValidationFactory for callers with no validation engine, such as the CLI."""

    def make(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, Any] | None = None,
        custom_attributes: Mapping[str, str] | None = None,
    ) -> DefinitionValidator:
        return DefinitionValidator(
            data=dict(data),
            rules=dict(rules),
            custom_messages=dict(messages or {}),
            custom_attributes=dict(custom_attributes or {}),
        )
