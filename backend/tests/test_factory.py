"""Tests for the entry points and the end-to-end specification."""

import json
import logging
import textwrap

import pytest

from jsvalidation.config import JsValidationConfig
from jsvalidation.exceptions import InvalidArgumentKind
from jsvalidation.factory import JsValidatorFactory
from jsvalidation.form_request import FormRequest, RequestContext
from jsvalidation.remote.tokens import FernetEncrypter, StaticSession


@pytest.fixture(autouse=True)
def setup_rules(builtin_rules):
    yield


class SignupRequest(FormRequest):
    def rules(self):
        return {
            "username": "required|unique:users",
            "email": ["required", "email"],
        }

    def messages(self):
        return {"username.unique": "That :attribute is taken."}

    def attributes(self):
        return {"username": "user name"}


class NoRulesRequest(FormRequest):
    pass


# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    def test_client_only_rules_with_remote_disabled(self, engine):
        factory = JsValidatorFactory(
            engine,
            JsValidationConfig(disable_remote_validation=True),
        )

        spec = factory.make({"email": ["required", "email"]}).specification

        assert len(spec.fields) == 1
        field = spec.fields[0]
        assert field.field == "email"
        assert [r.rule for r in field.rules] == ["required", "email"]
        assert not any(r.is_remote for r in field.rules)
        assert spec.remote_token is None
        assert spec.remote_enabled is False

    def test_server_only_rule_with_session(self, engine, identity_encrypter):
        factory = JsValidatorFactory(
            engine,
            JsValidationConfig(),
            session=StaticSession("abc"),
            encrypter=identity_encrypter,
        )

        spec = factory.make({"username": ["required", "unique:users"]}).specification

        unique = spec.field("username").rules[1]
        assert unique.rule == "unique"
        assert unique.is_remote is True
        assert unique.parameters == ("users",)
        assert spec.remote_token == "abc"
        assert spec.remote_enabled is True
        assert spec.remote.fields == ("username",)

    def test_plain_object_is_rejected(self, engine):
        factory = JsValidatorFactory(engine)
        value = {"username": "required"}

        with pytest.raises(InvalidArgumentKind) as exc_info:
            factory.form_request(value)

        assert exc_info.value.value is value
        assert repr(value) in str(exc_info.value)


# =============================================================================
# Properties
# =============================================================================


class TestProperties:
    def test_no_session_means_no_remote_rules(self, engine, identity_encrypter):
        factory = JsValidatorFactory(engine, encrypter=identity_encrypter)

        spec = factory.make({"username": "required|unique:users|mystery_rule"}).specification

        assert spec.remote_token is None
        assert spec.remote is None
        assert not any(r.is_remote for f in spec.fields for r in f.rules)
        assert [r.rule for r in spec.fields[0].rules] == ["required"]

    def test_empty_session_token_disables_remote(self, engine, identity_encrypter):
        factory = JsValidatorFactory(
            engine, session=StaticSession(""), encrypter=identity_encrypter
        )

        spec = factory.make({"username": "required|unique:users"}).specification

        assert spec.remote_token is None
        assert spec.remote_enabled is False
        assert spec.remote is None

    def test_disable_remote_wins_over_server_only_rules(self, engine):
        factory = JsValidatorFactory(
            engine,
            JsValidationConfig(disable_remote_validation=True),
            session=StaticSession("abc"),
        )

        spec = factory.make({
            "username": "unique:users",
            "code": "exists:codes",
            "url": "active_url",
        }).specification

        assert spec.remote_enabled is False
        assert spec.remote_token is None
        assert spec.remote is None

    def test_same_inputs_give_identical_json(self, engine, identity_encrypter):
        def build():
            factory = JsValidatorFactory(
                engine,
                JsValidationConfig(form_selector="#signup"),
                session=StaticSession("frozen"),
                encrypter=identity_encrypter,
            )
            return factory.make(
                {"username": "required|unique:users", "age": "integer|min:18"},
                {"min": "Too young."},
                {"age": "your age"},
            ).to_json()

        assert build() == build()

    def test_token_is_fernet_encrypted_session_token(self, engine):
        encrypter = FernetEncrypter.from_secret("app-secret")
        factory = JsValidatorFactory(engine, session=StaticSession("abc"), encrypter=encrypter)

        spec = factory.make({"username": "unique:users"}).specification

        assert encrypter.decrypt(spec.remote_token) == "abc"


# =============================================================================
# make()
# =============================================================================


class TestMake:
    def test_builds_structure_only_validator(self, engine):
        factory = JsValidatorFactory(engine)

        factory.make({"email": "required"}, {"required": "Needed."}, {"email": "e-mail"})

        assert engine.calls == [({}, {"email": "required"}, {"required": "Needed."}, {"email": "e-mail"})]

    def test_messages_and_attributes_flow_through(self, engine):
        factory = JsValidatorFactory(engine)

        spec = factory.make(
            {"email": "required"}, {"email.required": "Needed."}, {"email": "e-mail"}
        ).specification

        assert spec.fields[0].messages["required"] == "Needed."
        assert spec.fields[0].display_name == "e-mail"


# =============================================================================
# form_request()
# =============================================================================


class TestFormRequest:
    def test_instance(self, engine, identity_encrypter):
        factory = JsValidatorFactory(engine, session=StaticSession("abc"), encrypter=identity_encrypter)

        spec = factory.form_request(SignupRequest()).specification

        username = spec.field("username")
        assert username.display_name == "user name"
        assert username.messages["unique"] == "That :attribute is taken."
        assert username.rules[1].is_remote

    def test_class_is_created_from_request_context(self, engine):
        session = StaticSession("abc")
        created = []

        class TrackedRequest(SignupRequest):
            @classmethod
            def create_from_base(cls, request):
                instance = super().create_from_base(request)
                created.append(instance)
                return instance

        context = RequestContext(
            request="the-request",
            session=session,
            user_resolver=lambda: "ada",
            route_resolver=lambda: "signup",
        )
        factory = JsValidatorFactory(engine, request_context=context)

        factory.form_request(TrackedRequest)

        form_request = created[0]
        assert form_request.base_request == "the-request"
        assert form_request.session is session
        assert form_request.user() == "ada"
        assert form_request.route() == "signup"

    def test_absent_collaborators_are_not_attached(self, engine):
        created = []

        class TrackedRequest(SignupRequest):
            @classmethod
            def create_from_base(cls, request):
                instance = super().create_from_base(request)
                created.append(instance)
                return instance

        JsValidatorFactory(engine).form_request(TrackedRequest)

        assert created[0].session is None
        assert created[0].user() is None
        assert created[0].route() is None

    def test_request_context_session_issues_token(self, engine):
        context = RequestContext(session=StaticSession("ctx-token"))
        factory = JsValidatorFactory(engine, request_context=context)

        spec = factory.form_request(SignupRequest).specification

        assert spec.remote_token == "ctx-token"

    def test_missing_rules_method_means_empty_rules(self, engine):
        spec = JsValidatorFactory(engine).form_request(NoRulesRequest()).specification

        assert spec.fields == ()

    def test_import_path(self, engine, tmp_path, monkeypatch):
        module = tmp_path / "signup_forms.py"
        module.write_text(textwrap.dedent("""
            from jsvalidation.form_request import FormRequest


            class ContactRequest(FormRequest):
                def rules(self):
                    return {"message": "required|max:500"}
        """))
        monkeypatch.syspath_prepend(str(tmp_path))
        factory = JsValidatorFactory(engine)

        for path in ("signup_forms:ContactRequest", "signup_forms.ContactRequest"):
            spec = factory.form_request(path).specification
            assert [f.field for f in spec.fields] == ["message"]

    @pytest.mark.parametrize(
        "value",
        [
            "no_such_module_xyz:Form",
            "jsvalidation.form_request:Missing",
            "NotAPath",
            FormRequest,
            FormRequest(),
            dict,
            42,
            None,
        ],
    )
    def test_rejected_values(self, engine, value):
        with pytest.raises(InvalidArgumentKind):
            JsValidatorFactory(engine).form_request(value)

    def test_invalid_argument_is_a_type_error(self, engine):
        with pytest.raises(TypeError):
            JsValidatorFactory(engine).form_request(object())


# =============================================================================
# validator()
# =============================================================================


class TestValidator:
    def test_existing_instance_passes_through(self, engine):
        validator = engine.make({}, {"name": "required|string"}, {}, {"name": "full name"})

        spec = JsValidatorFactory(engine).validator(validator).specification

        assert spec.fields[0].display_name == "full name"
        assert [r.rule for r in spec.fields[0].rules] == ["required", "string"]

    def test_alternative_definition_accessors(self, engine):
        class OtherEngineValidator:
            def get_rules(self):
                return {"name": ["required"]}

            messages = {"required": "Needed."}
            attributes = {"name": "full name"}

        spec = JsValidatorFactory(engine).validator(OtherEngineValidator()).specification

        assert spec.fields[0].messages["required"] == "Needed."
        assert spec.fields[0].display_name == "full name"


# =============================================================================
# Selector precedence
# =============================================================================


class TestSelector:
    def test_configured_selector_wins_by_default(self, engine, caplog):
        factory = JsValidatorFactory(engine, JsValidationConfig(form_selector="#configured"))

        with caplog.at_level(logging.DEBUG, logger="jsvalidation.factory"):
            spec = factory.make({"a": "required"}, selector="#explicit").specification

        assert spec.selector == "#configured"
        assert "#explicit" in caplog.text

    def test_call_precedence(self, engine):
        config = JsValidationConfig(form_selector="#configured", selector_precedence="call")

        spec = JsValidatorFactory(engine, config).make({"a": "required"}, selector="#explicit").specification

        assert spec.selector == "#explicit"

    def test_no_explicit_selector_uses_config(self, engine):
        config = JsValidationConfig(form_selector="#configured", selector_precedence="call")

        spec = JsValidatorFactory(engine, config).make({"a": "required"}).specification

        assert spec.selector == "#configured"

    def test_json_output_carries_selector(self, engine):
        manager = JsValidatorFactory(engine, JsValidationConfig(form_selector="#f")).make({"a": "required"})

        assert json.loads(manager.to_json())["selector"] == "#f"
