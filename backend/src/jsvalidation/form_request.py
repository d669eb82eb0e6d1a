"""Declarative form requests.

A FormRequest subclass declares a form's rules in one place; the same
class drives server validation and the client mirror built from it.

    class SignupRequest(FormRequest):
        def rules(self):
            return {"email": "required|email|unique:users"}

        def attributes(self):
            return {"email": "email address"}

rules() is optional: a form request without it has an empty rule set.
"""

from dataclasses import dataclass
from typing import Any, Callable

from jsvalidation.remote.tokens import SessionStore

UserResolver = Callable[[], Any]
RouteResolver = Callable[[], Any]


@dataclass
class RequestContext:
    """The current request and its optional collaborators.

    Each collaborator is attached to a new form request only if present.
    """

    request: Any = None
    session: SessionStore | None = None
    user_resolver: UserResolver | None = None
    route_resolver: RouteResolver | None = None


class FormRequest:
    """Base class for declarative form requests."""

    def __init__(self, data: dict[str, Any] | None = None):
        self.data = dict(data or {})
        self.base_request: Any = None
        self._session: SessionStore | None = None
        self._user_resolver: UserResolver | None = None
        self._route_resolver: RouteResolver | None = None

    @classmethod
    def create_from_base(cls, request: Any) -> "FormRequest":
        """Create a form request bound to an incoming request."""
        instance = cls()
        instance.base_request = request
        return instance

    def messages(self) -> dict[str, Any]:
        """Custom messages, keyed "field.rule" or "rule"."""
        return {}

    def attributes(self) -> dict[str, str]:
        """Custom display names, keyed by field."""
        return {}

    def set_session(self, session: SessionStore) -> None:
        self._session = session

    def set_user_resolver(self, resolver: UserResolver) -> None:
        self._user_resolver = resolver

    def set_route_resolver(self, resolver: RouteResolver) -> None:
        self._route_resolver = resolver

    @property
    def session(self) -> SessionStore | None:
        return self._session

    def user(self) -> Any:
        """The authenticated user, or None without a user resolver."""
        return self._user_resolver() if self._user_resolver else None

    def route(self) -> Any:
        """The matched route, or None without a route resolver."""
        return self._route_resolver() if self._route_resolver else None
