"""CLI UI components (Rich).

Why separate components:
- Keeps command logic free of presentation details.
- Lets several commands reuse the same tables and panels.
"""

from __future__ import annotations

from typing import Any, Mapping

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mac_blueprint.core.domain.models import GLOBAL_PACKAGE_MANAGERS, DiffReport, NameDiff
from mac_blueprint.core.schema.validator import ValidationResult
from mac_blueprint.core.services.restore_plan import RestorePlan


def print_banner(console: Console, title: str) -> None:
    body = Align.center(Text(title, style="bold cyan"), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def describe_source(label: str, document: Mapping[str, Any]) -> Text:
    """One line naming a document's host and capture date."""

    system = document.get("system") or {}
    text = Text()
    text.append(f"{label}: ", style="bold")
    text.append(str(system.get("hostname", "unknown")))
    text.append(f" (captured {system.get('captureDate', 'unknown')})", style="dim")
    return text


def build_validation_panel(result: ValidationResult, source: str) -> Panel:
    body = Text()
    if result.valid:
        body.append("Valid blueprint", style="bold green")
    else:
        body.append(f"Invalid blueprint ({len(result.errors)} error(s))\n", style="bold red")
        for error in result.errors:
            body.append(f"  - {error}\n")
    for warning in result.warnings:
        body.append(f"\nWarning: {warning}", style="yellow")

    border = "green" if result.valid else "red"
    return Panel(body, title=source, border_style=border)


def _app_label(app: Mapping[str, Any]) -> str:
    return f"{app.get('name')} ({app.get('version', 'unknown')})"


def build_applications_table(report: DiffReport) -> Table | None:
    apps = report.applications
    if not (apps.added or apps.removed or apps.updated):
        return None

    table = Table(title="Applications", title_justify="left")
    table.add_column("", no_wrap=True)
    table.add_column("Application", style="white")
    table.add_column("Version", style="dim")
    for app in apps.added:
        table.add_row(Text("+", style="green"), str(app.get("name")), str(app.get("version", "unknown")))
    for app in apps.removed:
        table.add_row(Text("-", style="red"), str(app.get("name")), str(app.get("version", "unknown")))
    for change in apps.updated:
        table.add_row(
            Text("↑", style="yellow"),
            change.name,
            f"{change.old_version} → {change.new_version}",
        )
    return table


def _name_diff_rows(table: Table, label: str, diff: NameDiff) -> None:
    for name in diff.added:
        table.add_row(Text("+", style="green"), label, name)
    for name in diff.removed:
        table.add_row(Text("-", style="red"), label, name)


def build_packages_table(title: str, sections: list[tuple[str, NameDiff]]) -> Table | None:
    if not any(diff.added or diff.removed for _, diff in sections):
        return None

    table = Table(title=title, title_justify="left")
    table.add_column("", no_wrap=True)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    for label, diff in sections:
        _name_diff_rows(table, label, diff)
    return table


def build_summary_panel(report: DiffReport) -> Panel:
    totals = report.totals()
    body = Text()
    body.append(f"✓ Added:   {totals.added}\n", style="green")
    body.append(f"✗ Removed: {totals.removed}\n", style="red")
    body.append(f"↑ Updated: {totals.updated}\n", style="yellow")
    body.append(f"  Total changes: {totals.total}", style="bold")
    return Panel(body, title="Summary", border_style="cyan")


def build_diff_report(report: DiffReport) -> Group:
    """Full rich rendering of a `DiffReport`."""

    homebrew = [
        ("tap", report.homebrew.taps),
        ("formula", report.homebrew.formulae),
        ("cask", report.homebrew.casks),
    ]
    managers = [(manager, getattr(report.global_packages, manager)) for manager in GLOBAL_PACKAGE_MANAGERS]

    parts = [
        build_applications_table(report),
        build_packages_table("Homebrew", homebrew),
        build_packages_table("Global Packages", managers),
    ]
    renderables: list[Any] = [part for part in parts if part is not None]
    if not renderables:
        renderables.append(Text("No differences found.", style="dim"))
    renderables.append(build_summary_panel(report))
    return Group(*renderables)


def build_restore_plan_panel(plan: RestorePlan) -> Panel:
    """Dry-run summary of a restore."""

    body = Text()
    body.append(f"Source system: {plan.hostname}\n")
    body.append(f"macOS version: {plan.macos_version}\n")
    body.append(f"Captured: {plan.capture_date}\n")
    if plan.schema_version:
        body.append(f"Blueprint version: {plan.schema_version}\n")
    body.append("\n")

    body.append(f"Taps: {len(plan.taps)}\n")
    body.append(f"Formulae: {plan.formula_count} in {len(plan.formula_batches)} batch(es)\n")
    body.append(f"Casks: {plan.cask_count} in {len(plan.cask_batches)} batch(es)\n")
    for manager, count in plan.global_packages.items():
        if count:
            body.append(f"{manager.upper()} global packages: {count}\n")
    if plan.mas_app_count:
        body.append(f"Mac App Store apps: {plan.mas_app_count}\n")

    for category, names in plan.skipped.items():
        body.append(f"\nSkipped {len(names)} unsafe {category} name(s): ", style="yellow")
        body.append(", ".join(names), style="yellow")

    if plan.manual_installs:
        body.append("\n\nApplications that may require manual installation:\n", style="bold")
        for app in plan.manual_installs:
            body.append(f"  - {_app_label(app)}\n")

    return Panel(body, title="Restore plan (dry run)", border_style="cyan")
