"""Configuration for jsvalidation.

Process-wide defaults come from the environment or a YAML file and are
passed explicitly to the factory and the assembler; nothing reads ambient
state at assembly time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from jsvalidation.remote.protocol import DEFAULT_REMOTE_URL, DEFAULT_TOKEN_FIELD

SELECTOR_PRECEDENCE = ("config", "call")

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class JsValidationConfig:
    """Options recognized by the factory and the assembler.

    Attributes:
        disable_remote_validation: Turn remote validation off entirely
        view: Template identifier handed to the renderer
        form_selector: Selector of the form element the validator binds to
        remote_url: Endpoint the client posts remote checks to
        token_field: Request parameter carrying the remote token
        selector_precedence: "config" (configured selector always wins) or
            "call" (a selector passed to an entry point wins)
    """

    disable_remote_validation: bool = False
    view: str = "jsvalidation::bootstrap"
    form_selector: str = "form"
    remote_url: str = DEFAULT_REMOTE_URL
    token_field: str = DEFAULT_TOKEN_FIELD
    selector_precedence: str = "config"

    def __post_init__(self) -> None:
        if self.selector_precedence not in SELECTOR_PRECEDENCE:
            raise ValueError(
                f"selector_precedence must be one of {', '.join(SELECTOR_PRECEDENCE)}, "
                f"got '{self.selector_precedence}'"
            )

    @property
    def remote_enabled(self) -> bool:
        return not self.disable_remote_validation

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> JsValidationConfig:
        """Create config from an options mapping. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in (options or {}).items() if k in known}
        if "disable_remote_validation" in values:
            values["disable_remote_validation"] = _to_bool(values["disable_remote_validation"])
        return cls(**values)

    @classmethod
    def from_env(cls) -> JsValidationConfig:
        """Create config from environment variables.

        JSVALIDATION_DISABLE_REMOTE, JSVALIDATION_VIEW, JSVALIDATION_FORM_SELECTOR,
        JSVALIDATION_REMOTE_URL, JSVALIDATION_TOKEN_FIELD and
        JSVALIDATION_SELECTOR_PRECEDENCE; unset variables keep the defaults.
        """
        env_names = {
            "disable_remote_validation": "JSVALIDATION_DISABLE_REMOTE",
            "view": "JSVALIDATION_VIEW",
            "form_selector": "JSVALIDATION_FORM_SELECTOR",
            "remote_url": "JSVALIDATION_REMOTE_URL",
            "token_field": "JSVALIDATION_TOKEN_FIELD",
            "selector_precedence": "JSVALIDATION_SELECTOR_PRECEDENCE",
        }
        options = {
            key: os.environ[name] for key, name in env_names.items() if name in os.environ
        }
        return cls.from_mapping(options)

    @classmethod
    def from_yaml(cls, path: Path) -> JsValidationConfig:
        """Load config from a YAML file.

        The options may sit at the top level or under a "jsvalidation" key.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data.get("jsvalidation"), Mapping):
            data = data["jsvalidation"]
        return cls.from_mapping(data)

    def merged(self, **overrides: Any) -> JsValidationConfig:
        """Copy with overrides applied; None values and unknown keys are ignored."""
        known = {f.name for f in fields(self)}
        values = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **values)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)
