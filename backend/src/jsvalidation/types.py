"""Client-facing types produced by jsvalidation.

These are the translated, serializable forms handed to the renderer:
- RuleSpec: one translated rule
- FieldValidation: all rules, messages and the label for one field
- RemoteDirective: the single remote-callback description for a form
- ValidatorSpecification: the final artifact for one form
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

Parameter = str | int | float

# Encrypted session token; None means remote validation is unavailable
RemoteToken = str | None


@dataclass(frozen=True)
class RuleSpec:
    """The client-facing form of one server rule.

    Attributes:
        rule: Normalized rule name (e.g., "required", "unique")
        parameters: Positional parameters in declared order
        is_remote: True if the client must defer this rule to the server
    """

    rule: str
    parameters: tuple[Parameter, ...] = ()
    is_remote: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "parameters": list(self.parameters),
            "isRemote": self.is_remote,
        }


@dataclass(frozen=True)
class FieldValidation:
    """Translated validation for a single field.

    Attributes:
        field: Field name as declared on the server (may contain dots/wildcards)
        rules: Rules in declaration order
        messages: rule name -> unexpanded message template (read-only)
        display_name: Label substituted for :attribute at render time
    """

    field: str
    rules: tuple[RuleSpec, ...] = ()
    messages: Mapping[str, str] = field(default_factory=dict, hash=False)
    display_name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def has_remote_rules(self) -> bool:
        return any(r.is_remote for r in self.rules)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "displayName": self.display_name,
            "rules": [r.to_dict() for r in self.rules],
            "messages": dict(self.messages),
        }


@dataclass(frozen=True)
class RemoteDirective:
    """Form-level description of the remote validation callback.

    One directive is emitted per specification, never per rule, so the
    client sets up a single callback mechanism.

    Attributes:
        url: Endpoint the client posts remote checks to
        token_field: Name of the request parameter carrying the token
        fields: Names of fields that carry at least one remote rule
    """

    url: str
    token_field: str
    fields: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "tokenField": self.token_field,
            "fields": list(self.fields),
        }


@dataclass(frozen=True)
class ValidatorSpecification:
    """Everything the client needs to mirror the server's validation.

    Immutable once assembled; holds no references to request, session
    or validator objects. Rebuild from the source rules to change it.
    """

    fields: tuple[FieldValidation, ...]
    remote_token: RemoteToken = None
    remote_enabled: bool = True
    selector: str = "form"
    view: str = ""
    remote: RemoteDirective | None = None

    def field(self, name: str) -> FieldValidation | None:
        """Get the translated validation for a field by name."""
        for item in self.fields:
            if item.field == name:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "selector": self.selector,
            "view": self.view,
            "remoteEnabled": self.remote_enabled,
            "remoteToken": self.remote_token,
            "remote": self.remote.to_dict() if self.remote else None,
            "fields": [f.to_dict() for f in self.fields],
        }

    def to_json(self) -> str:
        """Serialize to compact JSON. Equal specifications give equal bytes."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
