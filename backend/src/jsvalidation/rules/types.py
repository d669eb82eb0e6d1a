"""Types describing how server rules translate to the client."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping


class TranslationStrategy(Enum):
    """How a server rule reaches the client.

    CLIENT: Client evaluates the rule with its parameters as declared
    CLIENT_TRANSFORMED: Client evaluates it after a parameter transform
    REMOTE: Only the server can decide; the client calls back
    """

    CLIENT = "client"
    CLIENT_TRANSFORMED = "client_transformed"
    REMOTE = "remote"


@dataclass(frozen=True)
class ParsedRule:
    """A rule declaration split into name and raw parameters.

    Parameters keep their textual form; "10.50" stays "10.50".
    """

    name: str
    parameters: tuple[str, ...] = ()


@dataclass
class TransformContext:
    """What a parameter transform may look at besides the parameters.

    Attributes:
        field: The field the rule is declared on
        rules: All parsed rules of that field, in order
    """

    field: str
    rules: tuple[ParsedRule, ...] = ()

    def has_rule(self, *names: str) -> bool:
        return any(r.name in names for r in self.rules)


ParameterTransform = Callable[[tuple[str, ...], TransformContext], tuple[Any, ...]]


@dataclass(frozen=True)
class RuleDescriptor:
    """Registry entry for one rule name.

    Attributes:
        name: Normalized rule name
        strategy: How the rule reaches the client
        transform: Parameter transform for CLIENT_TRANSFORMED rules
        message: Default template, or a mapping of value type
            ("numeric", "string", "array", "file") to template for size rules
        implicit: True if the rule runs even when the value is empty
    """

    name: str
    strategy: TranslationStrategy = TranslationStrategy.CLIENT
    transform: ParameterTransform | None = None
    message: str | Mapping[str, str] | None = None
    implicit: bool = False

    @property
    def is_remote(self) -> bool:
        return self.strategy is TranslationStrategy.REMOTE

    def translate_parameters(
        self,
        parameters: tuple[str, ...],
        context: TransformContext,
    ) -> tuple[Any, ...]:
        """Apply the parameter transform, if this rule has one."""
        if self.strategy is TranslationStrategy.CLIENT_TRANSFORMED and self.transform:
            return tuple(self.transform(parameters, context))
        return parameters
