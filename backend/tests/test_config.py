"""Tests for configuration loading."""

import pytest

from jsvalidation.config import JsValidationConfig


class TestDefaults:
    def test_defaults(self):
        config = JsValidationConfig()

        assert config.remote_enabled is True
        assert config.view == "jsvalidation::bootstrap"
        assert config.form_selector == "form"
        assert config.remote_url == "/jsvalidation/remote"
        assert config.token_field == "_jsvalidation"
        assert config.selector_precedence == "config"

    def test_invalid_precedence(self):
        with pytest.raises(ValueError, match="selector_precedence"):
            JsValidationConfig(selector_precedence="sometimes")


class TestFromMapping:
    def test_known_keys(self):
        config = JsValidationConfig.from_mapping({
            "disable_remote_validation": True,
            "view": "custom",
            "form_selector": "#f",
        })

        assert config.remote_enabled is False
        assert config.view == "custom"
        assert config.form_selector == "#f"

    def test_unknown_keys_ignored(self):
        config = JsValidationConfig.from_mapping({"future_option": 1})

        assert config == JsValidationConfig()

    def test_none(self):
        assert JsValidationConfig.from_mapping(None) == JsValidationConfig()

    @pytest.mark.parametrize("value, expected", [("true", True), ("0", False), ("yes", True), (1, True)])
    def test_disable_remote_coercion(self, value, expected):
        config = JsValidationConfig.from_mapping({"disable_remote_validation": value})

        assert config.disable_remote_validation is expected


class TestFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("JSVALIDATION_DISABLE_REMOTE", "1")
        monkeypatch.setenv("JSVALIDATION_FORM_SELECTOR", "#env-form")
        monkeypatch.setenv("JSVALIDATION_SELECTOR_PRECEDENCE", "call")

        config = JsValidationConfig.from_env()

        assert config.disable_remote_validation is True
        assert config.form_selector == "#env-form"
        assert config.selector_precedence == "call"

    def test_unset_variables_keep_defaults(self, monkeypatch):
        for name in ("JSVALIDATION_DISABLE_REMOTE", "JSVALIDATION_VIEW", "JSVALIDATION_FORM_SELECTOR",
                     "JSVALIDATION_REMOTE_URL", "JSVALIDATION_TOKEN_FIELD",
                     "JSVALIDATION_SELECTOR_PRECEDENCE"):
            monkeypatch.delenv(name, raising=False)

        assert JsValidationConfig.from_env() == JsValidationConfig()


class TestFromYaml:
    def test_nested_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("jsvalidation:\n  view: yaml-view\n  form_selector: '#yaml'\n")

        config = JsValidationConfig.from_yaml(path)

        assert config.view == "yaml-view"
        assert config.form_selector == "#yaml"

    def test_top_level(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("disable_remote_validation: true\n")

        assert JsValidationConfig.from_yaml(path).remote_enabled is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert JsValidationConfig.from_yaml(path) == JsValidationConfig()


class TestMerged:
    def test_overrides(self):
        config = JsValidationConfig().merged(form_selector="#x", unknown=1)

        assert config.form_selector == "#x"

    def test_none_is_ignored(self):
        assert JsValidationConfig().merged(form_selector=None).form_selector == "form"
