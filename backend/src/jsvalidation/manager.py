"""Assemble translated fields into a ValidatorSpecification.

Assembly is pure: no I/O, no network, and nothing from the request,
session or validator survives into the result.
"""

from typing import Any, Mapping, Protocol

from jsvalidation.config import JsValidationConfig
from jsvalidation.types import (
    FieldValidation,
    RemoteDirective,
    RemoteToken,
    ValidatorSpecification,
)


class Renderer(Protocol):
    """Turns a template identifier and a context into page markup."""

    def render(self, view: str, context: dict[str, Any]) -> str:
        ...


def assemble(
    fields: list[FieldValidation],
    remote_token: RemoteToken,
    remote_enabled: bool,
    options: JsValidationConfig | Mapping[str, Any] | None = None,
    remote: RemoteDirective | None = None,
) -> ValidatorSpecification:
    """Build the final specification.

    Args:
        fields: Translated fields (after the remote protocol has run)
        remote_token: Encrypted session token, or None
        remote_enabled: Whether remote validation was requested
        options: Config or mapping with disable_remote_validation, view,
            form_selector; unknown keys are ignored
        remote: The form-level remote directive, if any

    Returns:
        An immutable ValidatorSpecification
    """
    if not isinstance(options, JsValidationConfig):
        options = JsValidationConfig.from_mapping(options)

    # Without a token the client has no way to call back
    enabled = remote_enabled and options.remote_enabled and bool(remote_token)

    return ValidatorSpecification(
        fields=tuple(fields),
        remote_token=remote_token if enabled else None,
        remote_enabled=enabled,
        selector=options.form_selector,
        view=options.view,
        remote=remote if enabled else None,
    )


class Manager:
    """Holds an assembled specification and hands it to a renderer."""

    def __init__(self, specification: ValidatorSpecification):
        self.specification = specification

    @property
    def selector(self) -> str:
        return self.specification.selector

    @property
    def view(self) -> str:
        return self.specification.view

    def to_dict(self) -> dict[str, Any]:
        return self.specification.to_dict()

    def to_json(self) -> str:
        return self.specification.to_json()

    def render(
        self,
        renderer: Renderer,
        view: str | None = None,
        selector: str | None = None,
    ) -> str:
        """Render the specification with a template.

        Args:
            renderer: The templating collaborator
            view: Template to use instead of the configured one
            selector: Form selector to use instead of the configured one
        """
        return renderer.render(
            view or self.view,
            {
                "validator": self.to_dict(),
                "selector": selector or self.selector,
            },
        )

    def __str__(self) -> str:
        return self.to_json()
