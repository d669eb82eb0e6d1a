"""Rule descriptor registry for jsvalidation.

Maps server rule names to translation strategies. Follows the same
class-level registry pattern used for validators and hooks, except that
registering a name twice is a configuration error.
"""

import logging
import threading
from typing import Callable, Mapping

from jsvalidation.exceptions import DuplicateRuleError
from jsvalidation.rules.parser import normalize_rule_name
from jsvalidation.rules.types import (
    ParameterTransform,
    RuleDescriptor,
    TranslationStrategy,
)

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry of rule descriptors.

    Built-in rules are registered by register_builtin_rules(); applications
    register their own rules at startup. Lookups are plain dict reads and
    need no locking. Registration takes a lock so late registration from
    another thread cannot interleave with a check-then-insert.

    Example:
        RuleRegistry.register(RuleDescriptor("postcode", message="..."))

        descriptor = RuleRegistry.resolve("postcode")
    """

    _descriptors: dict[str, RuleDescriptor] = {}
    _lock = threading.Lock()

    @classmethod
    def register(cls, descriptor: RuleDescriptor) -> RuleDescriptor:
        """Register a rule descriptor.

        Args:
            descriptor: The descriptor; its name is normalized before storing

        Returns:
            The stored descriptor

        Raises:
            DuplicateRuleError: If the name is already registered
        """
        name = normalize_rule_name(descriptor.name)
        if name != descriptor.name:
            descriptor = RuleDescriptor(
                name=name,
                strategy=descriptor.strategy,
                transform=descriptor.transform,
                message=descriptor.message,
                implicit=descriptor.implicit,
            )

        with cls._lock:
            if name in cls._descriptors:
                raise DuplicateRuleError(name)
            cls._descriptors[name] = descriptor
        return descriptor

    @classmethod
    def resolve(cls, name: str) -> RuleDescriptor:
        """Get the descriptor for a rule, falling back to remote deferral.

        Unknown rules are never an error: the client cannot interpret them,
        so they are deferred to the server.
        """
        name = normalize_rule_name(name)
        descriptor = cls._descriptors.get(name)
        if descriptor is None:
            logger.debug("Rule '%s' is not registered, deferring to remote validation", name)
            return RuleDescriptor(name=name, strategy=TranslationStrategy.REMOTE)
        return descriptor

    @classmethod
    def get(cls, name: str) -> RuleDescriptor:
        """Get a registered descriptor by name.

        Raises:
            ValueError: If the rule is not registered
        """
        name = normalize_rule_name(name)
        if name not in cls._descriptors:
            raise ValueError(
                f"Rule '{name}' is not registered. "
                "Custom rules must be explicitly registered at application startup."
            )
        return cls._descriptors[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a rule is registered."""
        return normalize_rule_name(name) in cls._descriptors

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered rule names."""
        return sorted(cls._descriptors.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        with cls._lock:
            cls._descriptors.clear()


def rule(
    name: str,
    strategy: TranslationStrategy = TranslationStrategy.CLIENT_TRANSFORMED,
    message: str | Mapping[str, str] | None = None,
    implicit: bool = False,
) -> Callable[[ParameterTransform], ParameterTransform]:
    """Decorator to register a parameter transform as a rule.

    Usage:
        @rule("phone", message="The :attribute must be a phone number.")
        def phone(parameters, ctx):
            return [p.upper() for p in parameters]
    """

    def decorator(fn: ParameterTransform) -> ParameterTransform:
        RuleRegistry.register(
            RuleDescriptor(
                name=name,
                strategy=strategy,
                transform=fn,
                message=message,
                implicit=implicit,
            )
        )
        return fn

    return decorator
