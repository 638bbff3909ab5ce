"""Command-line interface for prefer-bind, built with Typer."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import structlog
import typer

from prefer_bind import NAME, __version__
from prefer_bind.core.config import discover_options, get_settings, load_options_file
from prefer_bind.core.logging import configure_structlog
from prefer_bind.patchgen.generator import fix_source
from prefer_bind.patchgen.types import PatchResult
from prefer_bind.rule.options import ConfigError, RuleOptions, options_schema, resolve_options
from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.scanner.ast_scanner import SourceParseError
from prefer_bind.scanner.orchestrator import read_source, scan
from prefer_bind.scanner.types import ScanResult

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_CONFIG_ERROR = 2

app = typer.Typer(
    name=NAME,
    help="Find closures that only forward to a method call and suggest .bind() instead.",
    add_completion=False,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit.",
    ),
) -> None:
    """prefer-bind: bound methods over closure wrappers."""


@app.command()
def check(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Options file (.toml or .json). Default: ./pyproject.toml [tool.prefer-bind]",
    ),
    all_contexts: Optional[bool] = typer.Option(
        None,
        "--all-contexts/--only-long-lived",
        help="Report closures anywhere, or only in long-lived contexts",
    ),
    context: Optional[list[str]] = typer.Option(
        None, "--context", help="Long-lived context name (repeatable, replaces the default set)",
    ),
    include_async: Optional[bool] = typer.Option(
        None, "--include-async/--no-include-async", help="Also report async closures",
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    diff: bool = typer.Option(False, "--diff", help="Print suggestions as a unified diff"),
    write: bool = typer.Option(False, "--write", help="Apply suggestions in place"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging with console output"),
) -> None:
    """Lint JS/TS files for closure wrappers around a single method call."""
    settings = get_settings()
    debug = debug or settings.debug
    configure_structlog(debug=debug, level=logging.INFO if verbose and not debug else None)
    log = structlog.get_logger("prefer_bind.cli")

    try:
        raw = load_options_file(config) if config else discover_options()
        options = resolve_options(_apply_overrides(raw, all_contexts, context, include_async))
    except ConfigError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    log.info("check.start", paths=[str(p) for p in paths], options=options.model_dump(mode="json"))
    result = scan(paths, options, settings)

    patches: list[PatchResult] = []
    if diff or write:
        patches = _fix_files(result, options, write=write)

    if output_format == OutputFormat.JSON:
        payload = result.to_dict()
        if patches:
            payload["patches"] = [p.to_dict() for p in patches]
        typer.echo(json.dumps(payload, indent=2))
    else:
        _print_text(result)
        if diff:
            for patch in patches:
                typer.echo(patch.diff, nl=False)

    log.info("check.done", findings=result.finding_count, files=result.files_scanned)
    raise typer.Exit(code=_exit_code(result, patches, write))


@app.command()
def schema() -> None:
    """Print the JSON schema of the rule options."""
    typer.echo(json.dumps(options_schema(), indent=2))


def _apply_overrides(
    raw: dict[str, Any],
    all_contexts: Optional[bool],
    contexts: Optional[list[str]],
    include_async: Optional[bool],
) -> dict[str, Any]:
    """Layer command-line flags over options read from a file."""
    merged = dict(raw)
    if all_contexts is not None:
        merged.pop("only_in_long_lived_contexts", None)
        merged["onlyInLongLivedContexts"] = not all_contexts
    if contexts:
        merged.pop("long_lived_contexts", None)
        merged["longLivedContexts"] = list(contexts)
    if include_async is not None:
        merged.pop("include_async", None)
        merged["includeAsync"] = include_async
    return merged


def _fix_files(result: ScanResult, options: RuleOptions, write: bool) -> list[PatchResult]:
    log = structlog.get_logger("prefer_bind.cli")
    rule = PreferBindRule(options)
    patches: list[PatchResult] = []

    for report in result.reports:
        if not report.findings:
            continue
        path = Path(report.path)
        try:
            content = read_source(path)
            patch = fix_source(path, content, rule)
        except (OSError, UnicodeDecodeError, SourceParseError) as exc:
            log.warning("fix.failed", path=report.path, error=str(exc))
            continue
        if patch is None:
            continue
        if write:
            path.write_bytes(patch.source.encode("utf-8"))
            log.info("fix.written", path=report.path, applied=patch.applied)
        patches.append(patch)

    return patches


def _print_text(result: ScanResult) -> None:
    for report in result.reports:
        if report.parse_error:
            typer.echo(f"{report.path}: error  {report.parse_error}")
        for finding in report.findings:
            typer.echo(
                f"{report.path}:{finding.line}:{finding.column + 1}  warning  "
                f"{finding.message}  {finding.rule_id}"
            )

    problems = result.finding_count + sum(1 for r in result.reports if r.parse_error)
    if problems:
        noun = "problem" if problems == 1 else "problems"
        typer.echo(f"\n{problems} {noun} in {result.files_scanned} files")


def _exit_code(result: ScanResult, patches: list[PatchResult], write: bool) -> int:
    if any(r.parse_error for r in result.reports):
        return EXIT_FINDINGS
    if write:
        fixed = sum(p.applied for p in patches)
        remaining = any(p.skipped for p in patches) or fixed < result.finding_count
        return EXIT_FINDINGS if remaining else EXIT_OK
    return EXIT_FINDINGS if result.finding_count else EXIT_OK
