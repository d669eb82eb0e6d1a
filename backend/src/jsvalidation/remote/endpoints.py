"""Remote validation API endpoint.

The client posts one remote rule check at a time:

    POST {remote_url}
    {"field": "username", "rule": "unique", "parameters": ["users"],
     "value": "ada", "_jsvalidation": "<remote token>"}

The token is verified against the live session before anything is
evaluated. The (field, rule, parameters) triple must match a remote rule
the server itself declared for that field; the declared rule is what gets
evaluated, so clients cannot run rules or parameters of their own.
"""

import logging
from fnmatch import fnmatchcase
from typing import Any, Callable, Mapping

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from jsvalidation.engine import ValidationFactory
from jsvalidation.exceptions import RemoteTokenError
from jsvalidation.remote.protocol import DEFAULT_REMOTE_URL, DEFAULT_TOKEN_FIELD
from jsvalidation.remote.tokens import Encrypter, MappingSession, SessionStore, verify_remote_token
from jsvalidation.rules.parser import normalize_rule_name, parse_rule_list
from jsvalidation.rules.registry import RuleRegistry
from jsvalidation.rules.types import ParsedRule

logger = logging.getLogger(__name__)

# Status used when the anti-forgery token is rejected
TOKEN_REJECTED_STATUS = 419


class RemoteValidationRequest(BaseModel):
    """Body of a remote check. The token travels under the configured token field."""

    model_config = ConfigDict(extra="allow")

    field: str
    rule: str
    parameters: list[str | int | float] = Field(default_factory=list)
    value: Any = None

    def token(self, token_field: str) -> str | None:
        extra = self.model_extra or {}
        token = extra.get(token_field)
        return str(token) if token is not None else None


class RemoteValidationResponse(BaseModel):
    """Result of a remote check."""

    valid: bool
    messages: list[str] = Field(default_factory=list)


def session_from_request(request: Request) -> SessionStore | None:
    """Default session lookup: Starlette's SessionMiddleware data, if installed."""
    if "session" not in request.scope:
        return None
    return MappingSession(request.session)


def declared_rules_for(rules: Mapping[str, Any], field: str) -> list[ParsedRule]:
    """Server-declared rules for a field; wildcard keys ("items.*.sku") match too."""
    if field in rules:
        return parse_rule_list(rules[field])
    for pattern, field_rules in rules.items():
        if "*" in pattern and fnmatchcase(field, pattern):
            return parse_rule_list(field_rules)
    return []


def rule_declaration(rule: ParsedRule) -> str:
    """Rebuild the server rule string, e.g. "unique:users,email"."""
    if not rule.parameters:
        return rule.name
    return f"{rule.name}:{','.join(rule.parameters)}"


def create_remote_router(
    get_engine: Callable[[], ValidationFactory],
    get_rules: Callable[[Request], Mapping[str, Any]],
    get_session: Callable[[Request], SessionStore | None] = session_from_request,
    encrypter: Encrypter | None = None,
    remote_url: str = DEFAULT_REMOTE_URL,
    token_field: str = DEFAULT_TOKEN_FIELD,
    registry: Any = RuleRegistry,
) -> APIRouter:
    """Create the remote validation router.

    Args:
        get_engine: Returns the validation engine; its validators must
            support passes()/errors()
        get_rules: Returns the server's field -> rules declarations for the
            form a request checks (e.g. a FormRequest's rules())
        get_session: Returns the session for a request
        encrypter: Encrypter the remote token was issued with
        remote_url: Path to serve (must match the specification's remote url)
        token_field: Body key carrying the token
        registry: Rule registry used to classify declared rules
    """
    router = APIRouter(tags=["jsvalidation"])

    @router.post(remote_url, response_model=RemoteValidationResponse)
    async def validate_remote(
        payload: RemoteValidationRequest,
        request: Request,
    ) -> RemoteValidationResponse:
        """Evaluate one declared remote rule for one field value."""
        try:
            verify_remote_token(payload.token(token_field), get_session(request), encrypter)
        except RemoteTokenError as e:
            logger.warning("Rejected remote validation for %s: %s", payload.field, e)
            raise HTTPException(
                status_code=TOKEN_REJECTED_STATUS,
                detail="Remote validation token rejected",
            )

        name = normalize_rule_name(payload.rule)
        parameters = tuple(str(p) for p in payload.parameters)
        declared = next(
            (
                r for r in declared_rules_for(get_rules(request), payload.field)
                if r.name == name and r.parameters == parameters
            ),
            None,
        )
        if declared is None:
            logger.warning(
                "Refused undeclared remote check %s on %s", payload.rule, payload.field
            )
            raise HTTPException(
                status_code=422,
                detail=f"Rule '{payload.rule}' is not declared on '{payload.field}'",
            )
        if not registry.resolve(declared.name).is_remote:
            raise HTTPException(
                status_code=422,
                detail=f"Rule '{declared.name}' is evaluated on the client",
            )

        validator = get_engine().make(
            {payload.field: payload.value},
            {payload.field: [rule_declaration(declared)]},
        )
        if validator.passes():
            return RemoteValidationResponse(valid=True)

        messages = list(validator.errors().get(payload.field, []))
        return RemoteValidationResponse(valid=False, messages=messages)

    return router
