"""CLI entry point for parsing, converting and comparing addresses."""

from __future__ import annotations

import json
import uuid

import click

from .address import EmailAddress
from .core.config import Settings, load_settings
from .core.enums import Grammar
from .core.errors import EmailAddressError
from .observability.logger import (
    get_logger,
    reset_correlation_id,
    set_correlation_id,
    setup_logging,
)

log = get_logger(__name__)

_GRAMMAR_NAMES = [grammar.name.lower() for grammar in Grammar]


def _parse(text: str, display_name: str | None = None, ascii_only: bool = False) -> EmailAddress:
    try:
        if ascii_only:
            return EmailAddress.ascii(text, display_name=display_name)
        return EmailAddress.parse(text, display_name=display_name)
    except EmailAddressError as exc:
        log.debug("address_rejected", text=text, error=str(exc))
        raise click.ClickException(str(exc)) from exc


def _describe(email: EmailAddress) -> dict:
    views = {}
    for grammar in Grammar:
        spec = email.view(grammar)
        views[grammar.name.lower()] = spec.to_text() if spec is not None else None
    return {
        "text": email.to_text(),
        "address": email.address,
        "local_part": email.local_part,
        "domain": email.domain_text,
        "display_name": email.display_name,
        "is_ascii": email.is_ascii,
        "views": views,
    }


@click.group()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--log-level", default=None, help="Log level override")
@click.pass_context
def main(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """Email address toolkit (RFC 5321 / 5322 / 6531)."""
    overrides: dict = {}
    if log_level:
        overrides["observability"] = {"log_level": log_level}

    settings = load_settings(config_path=config, overrides=overrides)
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    token = set_correlation_id(str(uuid.uuid4()))
    ctx.call_on_close(lambda: reset_correlation_id(token))
    ctx.obj = settings


@main.command()
@click.argument("text")
@click.option("--display-name", default=None, help="Replace the display name")
@click.option("--ascii", "ascii_flag", is_flag=True, help="Reject internationalized addresses")
@click.option("--json", "as_json", is_flag=True, help="Print all views as JSON")
@click.pass_obj
def parse(
    settings: Settings,
    text: str,
    display_name: str | None,
    ascii_flag: bool,
    as_json: bool,
) -> None:
    """Parse TEXT and print its canonical form."""
    email = _parse(text, display_name, ascii_flag or settings.cli.ascii_only)
    if as_json:
        click.echo(json.dumps(_describe(email), ensure_ascii=False, indent=2))
    else:
        click.echo(email.to_text())


@main.command()
@click.argument("text")
@click.option(
    "--to",
    "target",
    type=click.Choice(_GRAMMAR_NAMES, case_sensitive=False),
    default=None,
    help="Target grammar (default from config)",
)
@click.pass_obj
def convert(settings: Settings, text: str, target: str | None) -> None:
    """Print TEXT as written under another grammar."""
    grammar = Grammar[target.upper()] if target else settings.cli.default_grammar
    email = _parse(text, ascii_only=settings.cli.ascii_only)
    spec = email.view(grammar)
    if spec is None:
        raise click.ClickException(
            f"No {grammar.value} representation for {email.address}"
        )
    click.echo(spec.to_text())


@main.command()
@click.argument("text")
@click.pass_obj
def normalize(settings: Settings, text: str) -> None:
    """Print TEXT in the most restrictive grammar it is valid under."""
    email = _parse(text, ascii_only=settings.cli.ascii_only)
    click.echo(email.normalized().to_text())


@main.command()
@click.argument("first")
@click.argument("second")
@click.pass_context
def match(ctx: click.Context, first: str, second: str) -> None:
    """Compare two addresses, ignoring case and display names.

    Exits 0 when they match and 1 when they do not.
    """
    matched = _parse(first).matches(_parse(second))
    click.echo("true" if matched else "false")
    ctx.exit(0 if matched else 1)
