"""CLI entry point for specguard."""

import json
import logging

import click

from specguard.diff.base import Change, DiffResult
from specguard.diff.engine import diff_actions
from specguard.errors import DocumentLoadError
from specguard.loader import LOAD_TIMEOUT, load_document
from specguard.parser.base import CanonicalAPI, ParseFailure
from specguard.parser.normalize import normalize
from specguard.summary import ValidationSummary, build_summary


class ParseError(click.ClickException):
    """A document could not be normalized."""

    def __init__(self, source: str, failure: ParseFailure):
        message = f"{failure.error} ({source})"
        if failure.details:
            message += f": {failure.details}"
        super().__init__(message)
        self.failure = failure


def _load_api(source: str, timeout: float) -> CanonicalAPI:
    """Load and normalize one document, raising ParseError on failure."""
    result = normalize(load_document(source, timeout=timeout))
    if isinstance(result, ParseFailure):
        raise ParseError(source, result)
    return result.api


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


timeout_option = click.option(
    "--timeout",
    default=LOAD_TIMEOUT,
    show_default=True,
    envvar="SPECGUARD_TIMEOUT",
    type=float,
    help="Seconds to wait when fetching a document over HTTP.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """specguard: validate API descriptions and detect breaking changes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON (for CI).")
@click.option("--strict", is_flag=True, help="Treat warnings as errors.")
@timeout_option
def validate(source: str, as_json: bool, strict: bool, timeout: float):
    """Validate an OpenAPI/Swagger document and display a summary."""
    try:
        api = _load_api(source, timeout)
    except (DocumentLoadError, ParseError) as e:
        if not as_json:
            raise click.ClickException(str(e)) from e
        failure = getattr(e, "failure", None)
        _echo_json({
            "valid": False,
            "error": failure.error if failure else str(e),
            "details": failure.details if failure else None,
        })
        raise SystemExit(1)

    errors = [f"[strict] {w}" for w in api.warnings] if strict else []
    summary = build_summary(api, errors=errors)

    if as_json:
        _echo_json({"valid": not summary.errors, **summary.to_json_dict()})
    else:
        _print_summary(summary)

    if summary.errors:
        raise SystemExit(1)


@main.command()
@click.argument("old")
@click.argument("new")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--breaking-only", is_flag=True, help="Only show breaking changes.")
@timeout_option
def diff(old: str, new: str, as_json: bool, breaking_only: bool, timeout: float):
    """Compare two documents and detect breaking changes."""
    try:
        old_api = _load_api(old, timeout)
        new_api = _load_api(new, timeout)
    except (DocumentLoadError, ParseError) as e:
        if as_json:
            _echo_json({"error": str(e)})
            raise SystemExit(1)
        raise click.ClickException(str(e)) from e

    result = diff_actions(old_api.actions, new_api.actions)
    changes = result.filter(breaking_only=breaking_only)

    if as_json:
        _echo_json({
            "breakingCount": result.breaking_count,
            "nonBreakingCount": result.non_breaking_count,
            "changes": [c.to_json_dict() for c in changes],
        })
    else:
        _print_diff(changes, result)

    if result.breaking_count > 0:
        raise SystemExit(1)


def _print_summary(summary: ValidationSummary) -> None:
    click.echo()
    click.secho(f"  {summary.title}", bold=True, nl=False)
    click.secho(f"  v{summary.version}", dim=True)
    click.echo(f"  Base URL:  {summary.base_url}")
    click.echo(f"  Auth:      {summary.auth_type}")
    click.echo(f"  Endpoints: {summary.endpoint_count}")
    for method, count in summary.endpoints_by_method.items():
        click.echo(f"    {method:<7} {count}")
    if summary.tags:
        click.echo(f"  Tags:      {', '.join(summary.tags)}")
    if summary.deprecated:
        click.secho(f"  Deprecated: {summary.deprecated}", fg="yellow")

    for warning in summary.warnings:
        click.secho(f"  ! {warning}", fg="yellow")
    for error in summary.errors:
        click.secho(f"  ✗ {error}", fg="red")

    click.echo()
    if summary.errors:
        click.secho(f"  ✗ {len(summary.errors)} error(s)", fg="red", bold=True)
    else:
        click.secho("  ✓ Valid specification", fg="green", bold=True)
    click.echo()


def _print_diff(changes: list[Change], result: DiffResult) -> None:
    click.echo()
    if not changes:
        click.secho("  No changes detected", fg="green")
        click.echo()
        return

    breaking = [c for c in changes if c.is_breaking]
    non_breaking = [c for c in changes if not c.is_breaking]

    if breaking:
        click.secho(f"  Breaking Changes ({len(breaking)})", fg="red", bold=True)
        click.echo()
        for change in breaking:
            click.secho(f"    ✗ {change.message}", fg="red")
        click.echo()

    if non_breaking:
        click.secho(f"  Non-Breaking Changes ({len(non_breaking)})", fg="yellow", bold=True)
        click.echo()
        for change in non_breaking:
            click.secho(f"    ~ {change.message}", fg="yellow")
        click.echo()

    if result.breaking_count > 0:
        click.secho(f"  ✗ {result.breaking_count} breaking change(s) detected", fg="red", bold=True)
    else:
        click.secho("  ✓ No breaking changes", fg="green", bold=True)
    if result.non_breaking_count > 0:
        click.secho(f"    {result.non_breaking_count} non-breaking change(s)", dim=True)
    click.echo()
