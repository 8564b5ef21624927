"""Structural diff between two blueprint documents.

Both inputs are expected to have passed `validate_blueprint` already;
unvalidated input surfaces as a plain `TypeError`/`KeyError`. Neither input
is mutated and the returned report shares no containers with them.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from mac_blueprint.core.domain.models import (
    GLOBAL_PACKAGE_MANAGERS,
    HOMEBREW_CATEGORIES,
    AppVersionChange,
    ApplicationsDiff,
    DiffReport,
    GlobalPackagesDiff,
    HomebrewDiff,
    NameDiff,
    name_of,
)


def _version_of(entry: Any) -> Any:
    return entry.get("version") if isinstance(entry, Mapping) else None


def _index_by_name(entries: Iterable[Any]) -> dict[str, Any]:
    # Later duplicates win, earlier ones keep their position.
    return {name_of(entry): entry for entry in entries}


def diff_applications(old_apps: Iterable[Any], new_apps: Iterable[Any]) -> ApplicationsDiff:
    """Added/removed apps carry the full entry; updates compare `version` by string identity."""

    old_index = _index_by_name(old_apps)
    new_index = _index_by_name(new_apps)
    result = ApplicationsDiff()

    for name, app in new_index.items():
        if name not in old_index:
            result.added.append(dict(app) if isinstance(app, Mapping) else {"name": name})
            continue
        old_version = _version_of(old_index[name])
        new_version = _version_of(app)
        if old_version != new_version:
            result.updated.append(
                AppVersionChange(name=name, old_version=old_version, new_version=new_version)
            )

    for name, app in old_index.items():
        if name not in new_index:
            result.removed.append(dict(app) if isinstance(app, Mapping) else {"name": name})

    return result


def _unique_names(refs: Iterable[Any]) -> list[str]:
    names: list[str] = []
    seen: set[str] = set()
    for ref in refs:
        name = name_of(ref)
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def diff_names(old_refs: Iterable[Any], new_refs: Iterable[Any]) -> NameDiff:
    """Set difference on normalized package names, in source order."""

    old_names = _unique_names(old_refs)
    new_names = _unique_names(new_refs)
    old_set = set(old_names)
    new_set = set(new_names)
    return NameDiff(
        added=[name for name in new_names if name not in old_set],
        removed=[name for name in old_names if name not in new_set],
    )


def diff_blueprints(old: Mapping[str, Any], new: Mapping[str, Any]) -> DiffReport:
    """Compute the `DiffReport` from `old` to `new`."""

    applications = diff_applications(old.get("applications") or [], new.get("applications") or [])

    homebrew = HomebrewDiff(
        **{
            category: diff_names(old["homebrew"][category], new["homebrew"][category])
            for category in HOMEBREW_CATEGORIES
        }
    )

    old_packages = old.get("globalPackages") or {}
    new_packages = new.get("globalPackages") or {}
    global_packages = GlobalPackagesDiff(
        **{
            manager: diff_names(old_packages.get(manager) or [], new_packages.get(manager) or [])
            for manager in GLOBAL_PACKAGE_MANAGERS
        }
    )

    return DiffReport(applications=applications, homebrew=homebrew, global_packages=global_packages)
