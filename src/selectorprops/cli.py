import logging
from pathlib import Path
from typing import Annotated

import srsly
import typer

from selectorprops.config import AutocaptureConfig, ConfigLoadError, load_config
from selectorprops.core.strategies import describe_rule
from selectorprops.core.validate import count_issues
from selectorprops.resolver import resolve_extra_properties, sort_rules
from selectorprops.validate import validate_config

app = typer.Typer(help="Resolve and check autocapture extra-property rules.")

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _load_or_exit(config_file: Path) -> AutocaptureConfig:
    try:
        return load_config(config_file)
    except ConfigLoadError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )


@app.command()
def resolve(
    config_file: Annotated[
        Path, typer.Argument(help="Autocapture config (JSON or YAML)")
    ],
    selector: Annotated[
        str, typer.Option("--selector", "-s", help="Matched allowlist selector")
    ],
    url: Annotated[
        str | None, typer.Option("--url", "-u", help="Current page URL")
    ] = None,
) -> None:
    """Print the extra properties for a selector as JSON (null if none)."""
    config = _load_or_exit(config_file)
    result = resolve_extra_properties(
        selector, config.css_selector_allowlist_extra_properties, url
    )
    typer.echo(srsly.json_dumps(result))


@app.command()
def validate(
    config_file: Annotated[
        Path, typer.Argument(help="Autocapture config (JSON or YAML)")
    ],
) -> None:
    """Check a config for rules that would be skipped or never reached."""
    config = _load_or_exit(config_file)
    issues = validate_config(config)
    if not issues:
        typer.echo("OK")
        return
    for issue in issues:
        typer.echo(
            f"{issue.severity.value.upper()} {issue.code} "
            f"{issue.location}: {issue.message}"
        )
    n_errors, n_warnings = count_issues(issues)
    typer.echo(f"{n_errors} errors, {n_warnings} warnings")
    if n_errors:
        raise typer.Exit(1)


@app.command()
def show(
    config_file: Annotated[
        Path, typer.Argument(help="Autocapture config (JSON or YAML)")
    ],
) -> None:
    """List selectors and their rules in evaluation order."""
    config = _load_or_exit(config_file)
    allowlist = config.css_selector_allowlist
    if allowlist is None:
        typer.echo("allowlist: not configured")
    else:
        typer.echo(f"allowlist: {', '.join(allowlist) or '(empty)'}")

    rule_sets = config.css_selector_allowlist_extra_properties or {}
    typer.echo(f"{len(rule_sets)} selectors with extra properties")
    for selector, rules in rule_sets.items():
        typer.echo(f"  {selector}: {len(rules)} rules")
        for rule in sort_rules(rules):
            typer.echo(f"    {describe_rule(rule)}")
