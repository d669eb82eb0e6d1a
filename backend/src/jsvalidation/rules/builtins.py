"""Built-in rule vocabulary.

Registers the standard server rule set with the translation strategy the
client needs for each rule:
- CLIENT: evaluated in the browser with parameters as declared
- CLIENT_TRANSFORMED: evaluated in the browser after a parameter transform
- REMOTE: needs server state (data store lookups, credentials, DNS)
"""

from typing import Any

from jsvalidation.rules.messages import DEFAULT_MESSAGES
from jsvalidation.rules.registry import RuleRegistry
from jsvalidation.rules.types import RuleDescriptor, TransformContext, TranslationStrategy

CLIENT_RULES = (
    "accepted",
    "accepted_if",
    "after",
    "after_or_equal",
    "alpha",
    "alpha_dash",
    "alpha_num",
    "array",
    "bail",
    "before",
    "before_or_equal",
    "between",
    "boolean",
    "date",
    "date_equals",
    "date_format",
    "declined",
    "different",
    "digits",
    "digits_between",
    "distinct",
    "email",
    "ends_with",
    "file",
    "filled",
    "gt",
    "gte",
    "image",
    "in",
    "integer",
    "ip",
    "ipv4",
    "ipv6",
    "json",
    "lt",
    "lte",
    "max",
    "mimetypes",
    "min",
    "not_in",
    "nullable",
    "numeric",
    "present",
    "prohibited",
    "required",
    "required_if",
    "required_unless",
    "required_with",
    "required_with_all",
    "required_without",
    "required_without_all",
    "same",
    "size",
    "sometimes",
    "starts_with",
    "string",
    "timezone",
    "url",
    "uuid",
)

REMOTE_RULES = (
    "active_url",
    "current_password",
    "exists",
    "password",
    "unique",
)

# Rules that run even when the value is empty
IMPLICIT_RULES = frozenset({
    "accepted",
    "accepted_if",
    "declined",
    "filled",
    "present",
    "prohibited",
    "required",
    "required_if",
    "required_unless",
    "required_with",
    "required_with_all",
    "required_without",
    "required_without_all",
})

# Flags shared by server and browser regular expressions
_CLIENT_REGEX_FLAGS = "imsu"


# =============================================================================
# Parameter Transforms
# =============================================================================


def regex_to_client(parameters: tuple[str, ...], ctx: TransformContext) -> tuple[Any, ...]:
    """Split a delimited server pattern into (pattern, flags).

    "/^[a-z]+$/i" -> ("^[a-z]+$", "i"). Any non-alphanumeric, non-backslash
    delimiter is accepted; flags the browser lacks are dropped. A pattern
    without delimiters is passed through with no flags.
    """
    if not parameters:
        return ("", "")
    raw = parameters[0]
    delimiter = raw[:1]
    if not delimiter or delimiter.isalnum() or delimiter == "\\" or delimiter.isspace():
        return (raw, "")

    closing = {"(": ")", "[": "]", "{": "}", "<": ">"}.get(delimiter, delimiter)
    end = raw.rfind(closing)
    if end <= 0:
        return (raw, "")

    pattern = raw[1:end]
    flags = "".join(f for f in raw[end + 1:] if f in _CLIENT_REGEX_FLAGS)
    return (pattern, flags)


def confirmed_to_client(parameters: tuple[str, ...], ctx: TransformContext) -> tuple[Any, ...]:
    """Name the confirmation field the client must compare against."""
    if parameters and parameters[0]:
        return (parameters[0],)
    return (f"{ctx.field}_confirmation",)


def mimes_to_client(parameters: tuple[str, ...], ctx: TransformContext) -> tuple[Any, ...]:
    """Normalize extensions: lowercase, no leading dot."""
    return tuple(p.strip().lstrip(".").lower() for p in parameters if p.strip())


TRANSFORMED_RULES = {
    "regex": regex_to_client,
    "not_regex": regex_to_client,
    "confirmed": confirmed_to_client,
    "mimes": mimes_to_client,
}


# =============================================================================
# Registration
# =============================================================================


def builtin_descriptors() -> list[RuleDescriptor]:
    """Build the descriptors for the whole built-in vocabulary."""
    descriptors = []

    for name in CLIENT_RULES:
        descriptors.append(RuleDescriptor(
            name=name,
            strategy=TranslationStrategy.CLIENT,
            message=DEFAULT_MESSAGES.get(name),
            implicit=name in IMPLICIT_RULES,
        ))

    for name, transform in TRANSFORMED_RULES.items():
        descriptors.append(RuleDescriptor(
            name=name,
            strategy=TranslationStrategy.CLIENT_TRANSFORMED,
            transform=transform,
            message=DEFAULT_MESSAGES.get(name),
        ))

    for name in REMOTE_RULES:
        descriptors.append(RuleDescriptor(
            name=name,
            strategy=TranslationStrategy.REMOTE,
            message=DEFAULT_MESSAGES.get(name),
        ))

    return descriptors


def register_builtin_rules() -> None:
    """Register all built-in rules.

    Safe to call more than once; names that are already registered
    (including application overrides registered first) are left alone.
    """
    for descriptor in builtin_descriptors():
        if not RuleRegistry.is_registered(descriptor.name):
            RuleRegistry.register(descriptor)
