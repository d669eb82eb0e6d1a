"""Rule CLI commands: list, translate and preview messages."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from jsvalidation.config import JsValidationConfig
from jsvalidation.engine import DefinitionFactory
from jsvalidation.factory import JsValidatorFactory
from jsvalidation.remote.tokens import FernetEncrypter, StaticSession
from jsvalidation.rules.builtins import register_builtin_rules
from jsvalidation.rules.messages import format_message
from jsvalidation.rules.registry import RuleRegistry
from jsvalidation.translator import RuleTranslator


def _load_mapping(path: Path | None) -> dict[str, Any]:
    """Load a YAML (or JSON) mapping from a file."""
    if path is None:
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a mapping", param_hint="file")
    return data


def _load_rule_file(path: Path) -> tuple[dict, dict, dict]:
    """Read rules, messages and attributes from a rule file.

    The file is either a plain field -> rules mapping, or a mapping with
    "rules", "messages" and "attributes" keys.
    """
    data = _load_mapping(path)
    if isinstance(data.get("rules"), dict):
        return data["rules"], data.get("messages") or {}, data.get("attributes") or {}
    return data, {}, {}


@click.command()
@click.option("--strategy", default=None, help="Only list rules with this strategy.")
def rules(strategy: str | None):
    """List registered rules and how they reach the client."""
    register_builtin_rules()

    for name in RuleRegistry.list_registered():
        descriptor = RuleRegistry.get(name)
        if strategy and descriptor.strategy.value != strategy:
            continue
        colour = "yellow" if descriptor.is_remote else None
        click.echo(click.style(f"{name:<24} {descriptor.strategy.value}", fg=colour))


@click.command()
@click.argument("rules_file", type=click.Path(exists=True, path_type=Path))
@click.option("--messages", "messages_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="YAML/JSON file of message overrides.")
@click.option("--attributes", "attributes_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="YAML/JSON file of field display names.")
@click.option("--config", "config_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="YAML config file (defaults to environment).")
@click.option("--disable-remote", is_flag=True, default=False,
              help="Disable remote validation.")
@click.option("--selector", default=None, help="Form selector.")
@click.option("--token", default=None, help="Session token to issue the remote token from.")
@click.option("--secret", default=None, envvar="JSVALIDATION_SECRET_KEY",
              help="Secret used to encrypt the remote token.")
@click.option("--pretty", is_flag=True, default=False, help="Indent the JSON output.")
def translate(
    rules_file: Path,
    messages_file: Path | None,
    attributes_file: Path | None,
    config_file: Path | None,
    disable_remote: bool,
    selector: str | None,
    token: str | None,
    secret: str | None,
    pretty: bool,
):
    """Translate a rule file into a client validator specification (JSON)."""
    register_builtin_rules()

    rule_map, messages, attributes = _load_rule_file(rules_file)
    messages = {**messages, **_load_mapping(messages_file)}
    attributes = {**attributes, **_load_mapping(attributes_file)}

    config = JsValidationConfig.from_yaml(config_file) if config_file else JsValidationConfig.from_env()
    if disable_remote:
        config = config.merged(disable_remote_validation=True)
    if selector:
        config = config.merged(form_selector=selector)

    factory = JsValidatorFactory(
        DefinitionFactory(),
        config,
        session=StaticSession(token) if token else None,
        encrypter=FernetEncrypter.from_secret(secret) if secret else None,
    )
    manager = factory.make(rule_map, messages, attributes)

    if pretty:
        click.echo(json.dumps(manager.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(manager.to_json())


@click.command()
@click.argument("rules_file", type=click.Path(exists=True, path_type=Path))
def messages(rules_file: Path):
    """Preview the expanded error message of every rule in a rule file."""
    register_builtin_rules()

    rule_map, message_map, attributes = _load_rule_file(rules_file)
    for field in RuleTranslator().translate(rule_map, message_map, attributes):
        click.echo(click.style(field.field, bold=True))
        for spec in field.rules:
            text = format_message(
                field.messages.get(spec.rule, ""),
                spec.rule,
                field.display_name,
                spec.parameters,
            )
            marker = " (remote)" if spec.is_remote else ""
            click.echo(f"  {spec.rule}{marker}: {text}")
