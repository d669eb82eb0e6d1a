"""Shared fixtures: a fake validation engine and registry setup."""

from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from jsvalidation.rules.parser import parse_rule_list
from jsvalidation.rules.registry import RuleRegistry
from jsvalidation.rules.builtins import register_builtin_rules

Check = Callable[[Any, tuple[str, ...]], bool]


@dataclass
class FakeValidator:
    """Validator instance that evaluates only the rules it has checks for."""

    data: dict[str, Any]
    rules: dict[str, Any]
    custom_messages: dict[str, Any] = field(default_factory=dict)
    custom_attributes: dict[str, str] = field(default_factory=dict)
    checks: dict[str, Check] = field(default_factory=dict)
    _errors: dict[str, list[str]] = field(default_factory=dict)

    def passes(self) -> bool:
        self._errors = {}
        for field_name, field_rules in self.rules.items():
            value = self.data.get(field_name)
            for parsed in parse_rule_list(field_rules):
                check = self.checks.get(parsed.name)
                if check and not check(value, parsed.parameters):
                    self._errors.setdefault(field_name, []).append(
                        f"The {field_name} failed {parsed.name}."
                    )
        return not self._errors

    def errors(self) -> dict[str, list[str]]:
        return self._errors


class FakeEngine:
    """ValidationFactory double recording every make() call."""

    def __init__(self, checks: dict[str, Check] | None = None):
        self.checks = checks or {}
        self.calls: list[tuple] = []

    def make(self, data, rules, messages=None, custom_attributes=None) -> FakeValidator:
        self.calls.append((data, rules, messages, custom_attributes))
        return FakeValidator(
            data=dict(data),
            rules=dict(rules),
            custom_messages=dict(messages or {}),
            custom_attributes=dict(custom_attributes or {}),
            checks=self.checks,
        )


class IdentityEncrypter:
    """Encrypter that returns values unchanged."""

    def encrypt(self, value: str) -> str:
        return value

    def decrypt(self, value: str) -> str:
        return value


@pytest.fixture
def builtin_rules():
    """Fresh registry with the built-in vocabulary."""
    RuleRegistry.clear()
    register_builtin_rules()
    yield RuleRegistry
    RuleRegistry.clear()


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def identity_encrypter():
    return IdentityEncrypter()
