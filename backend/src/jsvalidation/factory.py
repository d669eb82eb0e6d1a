"""Entry points for building client validators.

Three ways in, one way out:
- make(): from raw rule/message/attribute mappings
- form_request(): from a FormRequest subclass, instance or import path
- validator(): from a validator instance the engine already built

All of them end in js_validator(), which derives the remote token,
translates the rules and assembles the specification.
"""

import importlib
import logging
from typing import Any, Mapping

from jsvalidation.config import JsValidationConfig
from jsvalidation.engine import ValidationFactory, ValidatorInstance, definitions
from jsvalidation.exceptions import InvalidArgumentKind
from jsvalidation.form_request import FormRequest, RequestContext
from jsvalidation.manager import Manager, assemble
from jsvalidation.remote.protocol import RemoteValidationProtocol
from jsvalidation.remote.tokens import Encrypter, SessionStore
from jsvalidation.translator import RuleTranslator

logger = logging.getLogger(__name__)


class JsValidatorFactory:
    """Creates Manager instances holding client validator specifications.

    Args:
        engine: Validation engine that builds validator instances
        config: Options; defaults to JsValidationConfig()
        session: Session to read the anti-forgery token from
        encrypter: Encrypter for the remote token
        request_context: Current request, used to build FormRequest classes
        translator: Rule translator (defaults to one over the global registry)
    """

    def __init__(
        self,
        engine: ValidationFactory,
        config: JsValidationConfig | None = None,
        session: SessionStore | None = None,
        encrypter: Encrypter | None = None,
        request_context: RequestContext | None = None,
        translator: RuleTranslator | None = None,
    ):
        self.engine = engine
        self.config = config or JsValidationConfig()
        self.request_context = request_context or RequestContext()
        self.translator = translator or RuleTranslator()
        self.remote = RemoteValidationProtocol(
            session=session if session is not None else self.request_context.session,
            encrypter=encrypter,
        )

    def make(
        self,
        rules: Mapping[str, Any],
        messages: Mapping[str, Any] | None = None,
        custom_attributes: Mapping[str, str] | None = None,
        selector: str | None = None,
    ) -> Manager:
        """Create a client validator from rule, message and attribute mappings."""
        validator = self._validator_instance(rules, messages, custom_attributes)
        return self.js_validator(validator, selector)

    def form_request(self, form_request: Any, selector: str | None = None) -> Manager:
        """Create a client validator from a FormRequest.

        Args:
            form_request: A FormRequest subclass instance, a FormRequest
                subclass, or an import path ("pkg.module:Class" or
                "pkg.module.Class") to one
            selector: Form selector (see JsValidationConfig.selector_precedence)

        Raises:
            InvalidArgumentKind: If the value is none of the above
        """
        if isinstance(form_request, str):
            form_request = self._import_form_request(form_request)

        if isinstance(form_request, type):
            if not _is_form_request_class(form_request):
                raise InvalidArgumentKind(form_request)
            form_request = self._create_form_request(form_request)
        elif not _is_form_request_class(type(form_request)):
            raise InvalidArgumentKind(form_request)

        rules = form_request.rules() if hasattr(form_request, "rules") else {}
        validator = self._validator_instance(
            rules,
            form_request.messages(),
            form_request.attributes(),
        )
        return self.js_validator(validator, selector)

    def validator(self, validator: ValidatorInstance, selector: str | None = None) -> Manager:
        """Create a client validator from an existing validator instance."""
        return self.js_validator(validator, selector)

    def js_validator(self, validator: Any, selector: str | None = None) -> Manager:
        """Translate a validator instance and assemble its specification."""
        config = self.config.merged(form_selector=self._resolve_selector(selector))

        token = self.remote.get_session_token() if config.remote_enabled else None

        defs = definitions(validator)
        fields = self.translator.translate(defs.rules, defs.messages, defs.attributes)
        fields, directive = self.remote.apply(
            fields,
            token,
            enabled=config.remote_enabled,
            url=config.remote_url,
            token_field=config.token_field,
        )

        specification = assemble(fields, token, config.remote_enabled, config, directive)
        return Manager(specification)

    def _validator_instance(
        self,
        rules: Mapping[str, Any],
        messages: Mapping[str, Any] | None,
        custom_attributes: Mapping[str, str] | None,
    ) -> ValidatorInstance:
        # Structure only: no data is bound yet
        return self.engine.make({}, dict(rules), dict(messages or {}), dict(custom_attributes or {}))

    def _resolve_selector(self, selector: str | None) -> str:
        configured = self.config.form_selector
        if selector is None or selector == configured:
            return configured

        if self.config.selector_precedence == "call":
            return selector

        logger.debug(
            "Ignoring selector '%s'; configured form_selector '%s' takes precedence",
            selector,
            configured,
        )
        return configured

    def _create_form_request(self, cls: type[FormRequest]) -> FormRequest:
        """Create a form request bound to the current request context."""
        ctx = self.request_context
        form_request = cls.create_from_base(ctx.request)

        if ctx.session is not None:
            form_request.set_session(ctx.session)
        if ctx.user_resolver is not None:
            form_request.set_user_resolver(ctx.user_resolver)
        if ctx.route_resolver is not None:
            form_request.set_route_resolver(ctx.route_resolver)

        return form_request

    def _import_form_request(self, path: str) -> Any:
        """Resolve "pkg.module:Class" or "pkg.module.Class" to an object."""
        module_name, sep, attr = path.partition(":")
        if not sep:
            module_name, _, attr = path.rpartition(".")
        if not module_name or not attr:
            raise InvalidArgumentKind(path)

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise InvalidArgumentKind(path) from e

        if not hasattr(module, attr):
            raise InvalidArgumentKind(path)
        return getattr(module, attr)


def _is_form_request_class(cls: type) -> bool:
    """True for strict FormRequest subclasses; the base class declares nothing."""
    return issubclass(cls, FormRequest) and cls is not FormRequest
