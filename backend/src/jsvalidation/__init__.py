"""jsvalidation: mirror server-side validation rules in the browser.

Usage:
    from jsvalidation import JsValidatorFactory, register_builtin_rules

    # At application startup
    register_builtin_rules()

    # Per request
    factory = JsValidatorFactory(engine, config, session=session, encrypter=encrypter)
    manager = factory.make({"email": "required|email|unique:users"})
    html = manager.render(renderer)
"""

from jsvalidation.config import JsValidationConfig
from jsvalidation.engine import (
    DefinitionFactory,
    DefinitionValidator,
    EvaluatingValidator,
    ValidationFactory,
    ValidatorInstance,
    definitions,
)
from jsvalidation.exceptions import (
    DuplicateRuleError,
    InvalidArgumentKind,
    JsValidationError,
    RemoteTokenError,
)
from jsvalidation.factory import JsValidatorFactory
from jsvalidation.form_request import FormRequest, RequestContext
from jsvalidation.manager import Manager, Renderer, assemble
from jsvalidation.remote import (
    FernetEncrypter,
    MappingSession,
    RemoteCheckTracker,
    RemoteState,
    RemoteValidationProtocol,
    StaticSession,
    verify_remote_token,
)
from jsvalidation.rules import (
    RuleDescriptor,
    RuleRegistry,
    TranslationStrategy,
    register_builtin_rules,
    rule,
)
from jsvalidation.translator import RuleTranslator, translate
from jsvalidation.types import (
    FieldValidation,
    RemoteDirective,
    RuleSpec,
    ValidatorSpecification,
)

__all__ = [
    # Types
    "FieldValidation",
    "RemoteDirective",
    "RuleSpec",
    "ValidatorSpecification",
    # Rules
    "RuleDescriptor",
    "RuleRegistry",
    "TranslationStrategy",
    "register_builtin_rules",
    "rule",
    # Translation and assembly
    "Manager",
    "Renderer",
    "RuleTranslator",
    "assemble",
    "translate",
    # Remote validation
    "FernetEncrypter",
    "MappingSession",
    "RemoteCheckTracker",
    "RemoteState",
    "RemoteValidationProtocol",
    "StaticSession",
    "verify_remote_token",
    # Entry points
    "FormRequest",
    "JsValidatorFactory",
    "RequestContext",
    # Engine
    "DefinitionFactory",
    "DefinitionValidator",
    "EvaluatingValidator",
    "ValidationFactory",
    "ValidatorInstance",
    "definitions",
    # Config and errors
    "DuplicateRuleError",
    "InvalidArgumentKind",
    "JsValidationConfig",
    "JsValidationError",
    "RemoteTokenError",
]
