"""mac-blueprint command line.

Why a thin CLI:
- All decisions (shape, version policy, diffing, planning) live in `core`.
- Commands only load files, call the core and render results.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from mac_blueprint import __version__
from mac_blueprint.adapters.blueprint_store import BlueprintLoadError, load_blueprint, save_blueprint
from mac_blueprint.cli import doctor
from mac_blueprint.cli.ui_components import (
    build_diff_report,
    build_restore_plan_panel,
    build_validation_panel,
    describe_source,
    print_banner,
)
from mac_blueprint.core.config import BlueprintSettings
from mac_blueprint.core.logging_config import setup_logging
from mac_blueprint.core.schema import create_empty_blueprint, is_compatible, validate_blueprint
from mac_blueprint.core.schema.validator import ValidationResult
from mac_blueprint.core.services import build_restore_plan, diff_blueprints

app = typer.Typer(no_args_is_help=True, help="Capture-file toolkit: validate, compare and plan Mac blueprints.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mac-blueprint {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level (DEBUG, INFO, WARNING, ERROR).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Validate, compare and plan restores of Mac blueprint documents."""

    settings = BlueprintSettings()
    setup_logging(log_level or settings.log_level)


def _load_or_exit(path: Path) -> dict[str, Any]:
    try:
        return load_blueprint(path)
    except BlueprintLoadError as exc:
        _err_console.print(f"[red]Could not load blueprint:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _validate(document: Any) -> ValidationResult:
    settings = BlueprintSettings()
    return validate_blueprint(document, legacy_version=settings.legacy_schema_version)


def _validated_or_exit(path: Path) -> ValidationResult:
    """Load and validate; invalid documents stop the command."""

    result = _validate(_load_or_exit(path))
    if not result.valid:
        _err_console.print(build_validation_panel(result, str(path)))
        raise typer.Exit(code=1)
    return result


def _warn_if_incompatible(path: Path, document: dict[str, Any], current_version: str) -> bool:
    if is_compatible(document, current_version):
        return True
    _err_console.print(
        f"[yellow]Warning:[/yellow] {path} has blueprint version {document.get('version')}, "
        f"which may not be fully compatible with {current_version}. "
        "Consider re-capturing with the latest version."
    )
    return False


@app.command()
def init(
    output: Path = typer.Argument(..., help="Where to write the empty blueprint."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
) -> None:
    """Write an empty blueprint document."""

    if output.exists() and not force:
        _err_console.print(f"[red]Refusing to overwrite[/red] {output} (use --force).")
        raise typer.Exit(code=1)

    settings = BlueprintSettings()
    save_blueprint(create_empty_blueprint(schema_version=settings.schema_version), output)
    _console.print(f"[green]Wrote empty blueprint to:[/green] {output}")


@app.command()
def validate(
    path: Path = typer.Argument(..., help="Blueprint JSON file."),
) -> None:
    """Check a blueprint's structure."""

    result = _validate(_load_or_exit(path))
    _console.print(build_validation_panel(result, str(path)))
    if not result.valid:
        raise typer.Exit(code=1)


@app.command(name="check-version")
def check_version(
    path: Path = typer.Argument(..., help="Blueprint JSON file."),
) -> None:
    """Compare a blueprint's schema version with this installation's."""

    settings = BlueprintSettings()
    document = _load_or_exit(path)
    declared = document.get("version") or f"none (legacy, treated as {settings.legacy_schema_version})"

    _console.print(f"Blueprint version: {declared}")
    _console.print(f"Current schema version: {settings.schema_version}")
    if _warn_if_incompatible(path, document, settings.schema_version):
        _console.print("[green]Compatible[/green]")


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Older blueprint JSON file."),
    new: Path = typer.Argument(..., help="Newer blueprint JSON file."),
    as_json: bool = typer.Option(False, "--json", help="Print the diff report as JSON."),
) -> None:
    """Show what changed between two blueprints."""

    settings = BlueprintSettings()
    old_doc = _validated_or_exit(old).document
    new_doc = _validated_or_exit(new).document
    _warn_if_incompatible(old, old_doc, settings.schema_version)
    _warn_if_incompatible(new, new_doc, settings.schema_version)

    try:
        report = diff_blueprints(old_doc, new_doc)
    except TypeError as exc:
        _err_console.print(f"[red]Cannot compare blueprints:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if as_json:
        payload = report.to_dict()
        payload["totals"] = report.totals().model_dump()
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    print_banner(_console, "Blueprint Diff")
    _console.print(describe_source("Old", old_doc))
    _console.print(describe_source("New", new_doc))
    _console.print(build_diff_report(report))


@app.command()
def plan(
    path: Path = typer.Argument(..., help="Blueprint JSON file."),
) -> None:
    """Show what restoring a blueprint would do (nothing is installed)."""

    settings = BlueprintSettings()
    document = _validated_or_exit(path).document
    _warn_if_incompatible(path, document, settings.schema_version)

    restore_plan = build_restore_plan(
        document,
        current_version=settings.schema_version,
        formula_batch_size=settings.formula_batch_size,
        cask_batch_size=settings.cask_batch_size,
    )
    _console.print(build_restore_plan_panel(restore_plan))


def run() -> None:
    app()
