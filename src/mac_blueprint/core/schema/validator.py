"""Structural validation of blueprint documents.

Only shape is checked (required sections, array/object types, named
Homebrew entries). Value-level formats such as version strings or URLs are
out of scope. Errors are accumulated as human-readable strings; validation
never raises on malformed input.

Legacy documents (no `version`) are normalized to `"1.0"`. By default the
normalization happens on a copy returned in `ValidationResult.document`;
`in_place=True` writes it back into the caller's mapping.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from mac_blueprint.core.domain.models import GLOBAL_PACKAGE_MANAGERS, LEGACY_SCHEMA_VERSION

logger = logging.getLogger(__name__)

LEGACY_FORMAT_WARNING = (
    "Legacy blueprint format detected (no 'version'); treating it as {version}. "
    "Consider re-capturing for full features."
)


@dataclass
class ValidationResult:
    """Outcome of `validate_blueprint`."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    legacy: bool = False
    document: Any = None


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def _check_system(document: Mapping[str, Any], errors: list[str]) -> None:
    system = document.get("system")
    if system is None:
        errors.append("Missing required field: system")
        return
    if not _is_object(system):
        errors.append("Invalid field: system must be an object")
        return
    for key in ("hostname", "macosVersion", "captureDate"):
        if not system.get(key):
            errors.append(f"Missing required field: system.{key}")


def _check_named_entries(entries: Any, label: str, errors: list[str]) -> None:
    if not _is_array(entries):
        return
    for idx, entry in enumerate(entries):
        if not (_is_object(entry) and entry.get("name")):
            errors.append(f"Invalid {label} at index {idx}: missing 'name' field")


def _check_homebrew(document: Mapping[str, Any], errors: list[str]) -> None:
    homebrew = document.get("homebrew")
    if homebrew is None:
        errors.append("Missing required field: homebrew")
        return
    if not _is_object(homebrew):
        errors.append("Invalid field: homebrew must be an object")
        return

    for key in ("taps", "casks", "formulae"):
        if not _is_array(homebrew.get(key)):
            errors.append(f"Invalid field: homebrew.{key} must be an array")

    _check_named_entries(homebrew.get("casks"), "cask", errors)
    _check_named_entries(homebrew.get("formulae"), "formula", errors)


def _check_optional_array(document: Mapping[str, Any], key: str, errors: list[str]) -> None:
    value = document.get(key)
    if value is not None and not _is_array(value):
        errors.append(f"Invalid field: {key} must be an array")


def _check_global_packages(document: Mapping[str, Any], errors: list[str]) -> None:
    packages = document.get("globalPackages")
    if packages is None:
        return
    if not _is_object(packages):
        errors.append("Invalid field: globalPackages must be an object")
        return
    for manager in GLOBAL_PACKAGE_MANAGERS:
        value = packages.get(manager)
        if value is not None and not _is_array(value):
            errors.append(f"Invalid field: globalPackages.{manager} must be an array")


def _check_git_config(document: Mapping[str, Any], errors: list[str]) -> None:
    git_config = document.get("gitConfig")
    if git_config is None:
        return
    if not _is_object(git_config):
        errors.append("Invalid field: gitConfig must be an object")
        return

    user = git_config.get("user")
    if user is not None and not _is_object(user):
        errors.append("Invalid field: gitConfig.user must be an object")
    settings = git_config.get("settings")
    if settings is not None and not _is_array(settings):
        errors.append("Invalid field: gitConfig.settings must be an array")


def validate_blueprint(
    document: Any,
    *,
    in_place: bool = False,
    legacy_version: str = LEGACY_SCHEMA_VERSION,
) -> ValidationResult:
    """Check `document` against the canonical blueprint shape.

    Returns a `ValidationResult`; `valid` is true iff no error was recorded.
    The legacy-version backfill is a warning, never an error.

    Unless `in_place=True`, the caller's document is left untouched and the
    backfilled `version` only exists on `result.document`; callers must
    continue with that document.
    """

    if not _is_object(document):
        return ValidationResult(
            valid=False,
            errors=["Invalid document: blueprint must be a JSON object"],
            document=document,
        )

    normalized = document if in_place else copy.deepcopy(dict(document))
    errors: list[str] = []
    warnings: list[str] = []

    legacy = not document.get("version")
    if legacy:
        normalized["version"] = legacy_version
        message = LEGACY_FORMAT_WARNING.format(version=legacy_version)
        warnings.append(message)
        logger.warning(message)

    _check_system(document, errors)
    _check_homebrew(document, errors)
    _check_optional_array(document, "applications", errors)
    _check_global_packages(document, errors)
    _check_optional_array(document, "shellConfigs", errors)
    _check_git_config(document, errors)
    _check_optional_array(document, "githubRepos", errors)

    if errors:
        logger.debug("Blueprint failed validation with %d error(s)", len(errors))

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        legacy=legacy,
        document=normalized,
    )
