"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from mac_blueprint import __version__
from mac_blueprint.core.config import BlueprintSettings, get_user_env_file
from mac_blueprint.core.schema import create_empty_blueprint, validate_blueprint

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_factory(schema_version: str) -> tuple[bool, str]:
    """The empty blueprint at the configured version must validate cleanly."""

    result = validate_blueprint(create_empty_blueprint(schema_version=schema_version))
    if result.valid:
        return True, "OK"
    return False, "; ".join(result.errors)


@app.command()
def run() -> None:
    """Show effective settings and run baseline checks."""

    settings = BlueprintSettings()
    user_env = get_user_env_file()
    project_env = Path(".env")

    table = Table(title="mac-blueprint Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Version", "OK", __version__)
    table.add_row("Schema version", "OK", settings.schema_version)
    table.add_row("Legacy version", "OK", settings.legacy_schema_version)
    table.add_row("Log level", "OK", settings.log_level.upper())
    table.add_row(
        "Batch sizes",
        "OK",
        f"formulae={settings.formula_batch_size} casks={settings.cask_batch_size}",
    )

    table.add_row("Project .env", "FOUND" if project_env.is_file() else "ABSENT", str(project_env.resolve()))
    table.add_row("User .env", "FOUND" if user_env.is_file() else "ABSENT", str(user_env))

    ok_factory, detail_factory = _check_factory(settings.schema_version)
    table.add_row("Empty blueprint", "OK" if ok_factory else "FAIL", detail_factory)

    _console.print(table)

    if not ok_factory:
        raise typer.Exit(code=1)
