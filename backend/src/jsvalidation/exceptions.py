"""Exceptions raised by jsvalidation.

Unknown rules and missing session/encryption collaborators are never
errors; they degrade (see jsvalidation.remote). The errors below always
propagate to the caller.
"""

from typing import Any


class JsValidationError(Exception):
    """Base exception for jsvalidation errors."""

    pass


class InvalidArgumentKind(JsValidationError, TypeError):
    """Raised when an entry point receives something that is not a FormRequest.

    Attributes:
        value: The offending value, kept for diagnostics
    """

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"{value!r} is not a FormRequest subclass, instance, or import path to one"
        )


class DuplicateRuleError(JsValidationError, ValueError):
    """Raised when two descriptors are registered under the same rule name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Rule '{name}' is already registered. "
            "Rule descriptors must have unique names."
        )


class RemoteTokenError(JsValidationError):
    """Raised when a remote-validation token cannot be trusted.

    Covers missing sessions, tokens that fail authenticated decryption,
    and tokens that decrypt to something other than the live session token.
    """

    pass
