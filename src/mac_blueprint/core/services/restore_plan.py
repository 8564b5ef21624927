"""Dry-run restore planning.

Turns a validated blueprint into the list of things a restore would do:
which taps to add, which formulae and casks to install (in batches small
enough for a single `brew install` command line), which names would be
skipped as unsafe, and which applications have no matching cask and need a
manual install. Nothing here runs a command; executing the plan belongs to
the apply tooling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from mac_blueprint.core.domain.models import GLOBAL_PACKAGE_MANAGERS, SCHEMA_VERSION, name_of
from mac_blueprint.core.schema.compat import is_compatible

PACKAGE_NAME_PATTERN = re.compile(r"^[@a-zA-Z0-9.\-_/]+$")
TAP_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\-_/]+$")

DEFAULT_FORMULA_BATCH_SIZE = 50
DEFAULT_CASK_BATCH_SIZE = 30


@dataclass
class RestorePlan:
    """What a restore of one blueprint would do."""

    hostname: str
    macos_version: str
    capture_date: str
    schema_version: str | None
    compatible: bool
    taps: list[str] = field(default_factory=list)
    formula_batches: list[list[str]] = field(default_factory=list)
    cask_batches: list[list[str]] = field(default_factory=list)
    skipped: dict[str, list[str]] = field(default_factory=dict)
    manual_installs: list[dict[str, Any]] = field(default_factory=list)
    global_packages: dict[str, int] = field(default_factory=dict)
    mas_app_count: int = 0

    @property
    def formula_count(self) -> int:
        return sum(len(batch) for batch in self.formula_batches)

    @property
    def cask_count(self) -> int:
        return sum(len(batch) for batch in self.cask_batches)


def _safe_name(ref: Any) -> str | None:
    try:
        return name_of(ref)
    except TypeError:
        return None


def sanitize_names(refs: Iterable[Any], pattern: re.Pattern[str] = PACKAGE_NAME_PATTERN) -> tuple[list[str], list[str]]:
    """Split package references into shell-safe names and rejected ones.

    Rejected entries are reported by their `repr` when they have no usable name.
    """

    safe: list[str] = []
    skipped: list[str] = []
    for ref in refs:
        name = _safe_name(ref)
        if name is not None and pattern.match(name):
            safe.append(name)
        else:
            skipped.append(name if name is not None else repr(ref))
    return safe, skipped


def batched(names: Sequence[str], size: int) -> list[list[str]]:
    if size < 1:
        raise ValueError("batch size must be >= 1")
    return [list(names[i : i + size]) for i in range(0, len(names), size)]


def find_manual_installs(applications: Iterable[Any], casks: Iterable[Any]) -> list[dict[str, Any]]:
    """Applications with no plausibly matching Homebrew cask.

    `Visual Studio Code.app` matches a cask named `visual studio code`,
    `visual-studio-code` or `visualstudiocode` (case-insensitive). Bare-name
    applications are reported as `{"name": ...}`; entries that are neither a
    name nor an object are ignored.
    """

    cask_names = {name.lower() for name in (_safe_name(cask) for cask in casks) if name}
    manual: list[dict[str, Any]] = []
    for app in applications:
        name = _safe_name(app)
        if name is None and not isinstance(app, Mapping):
            continue
        app_name = (name or "").replace(".app", "").lower()
        candidates = (app_name, re.sub(r"\s+", "-", app_name), re.sub(r"\s+", "", app_name))
        if not any(candidate in cask_names for candidate in candidates):
            manual.append(dict(app) if isinstance(app, Mapping) else {"name": name})
    return manual


def build_restore_plan(
    document: Mapping[str, Any],
    *,
    current_version: str = SCHEMA_VERSION,
    formula_batch_size: int = DEFAULT_FORMULA_BATCH_SIZE,
    cask_batch_size: int = DEFAULT_CASK_BATCH_SIZE,
) -> RestorePlan:
    """Plan the restore of a validated blueprint."""

    system = document["system"]
    homebrew = document["homebrew"]

    taps, skipped_taps = sanitize_names(homebrew["taps"], TAP_NAME_PATTERN)
    formulae, skipped_formulae = sanitize_names(homebrew["formulae"])
    casks, skipped_casks = sanitize_names(homebrew["casks"])

    skipped = {
        category: names
        for category, names in (
            ("taps", skipped_taps),
            ("formulae", skipped_formulae),
            ("casks", skipped_casks),
        )
        if names
    }

    packages = document.get("globalPackages") or {}
    global_packages = {manager: len(packages.get(manager) or []) for manager in GLOBAL_PACKAGE_MANAGERS}

    return RestorePlan(
        hostname=str(system.get("hostname")),
        macos_version=str(system.get("macosVersion")),
        capture_date=str(system.get("captureDate")),
        schema_version=document.get("version"),
        compatible=is_compatible(document, current_version),
        taps=taps,
        formula_batches=batched(formulae, formula_batch_size),
        cask_batches=batched(casks, cask_batch_size),
        skipped=skipped,
        manual_installs=find_manual_installs(document.get("applications") or [], homebrew["casks"]),
        global_packages=global_packages,
        mas_app_count=len(document.get("masApps") or []),
    )
