"""Structural validation of blueprint documents."""
from __future__ import annotations

import logging

import pytest

from mac_blueprint.core.schema import validate_blueprint


def test_missing_system_is_reported():
    result = validate_blueprint({"homebrew": {"taps": [], "casks": [], "formulae": []}})
    assert result.valid is False
    assert any("system" in e for e in result.errors)


def test_missing_homebrew_is_reported():
    doc = {
        "version": "2.0",
        "system": {"hostname": "test", "macosVersion": "14.0", "captureDate": "2024-01-01"},
    }
    result = validate_blueprint(doc)
    assert result.valid is False
    assert result.errors == ["Missing required field: homebrew"]


def test_missing_system_fields_each_reported(empty_blueprint):
    empty_blueprint["system"] = {"architecture": "arm64"}
    result = validate_blueprint(empty_blueprint)
    assert result.errors == [
        "Missing required field: system.hostname",
        "Missing required field: system.macosVersion",
        "Missing required field: system.captureDate",
    ]


def test_empty_string_system_field_counts_as_missing(empty_blueprint):
    empty_blueprint["system"]["hostname"] = ""
    result = validate_blueprint(empty_blueprint)
    assert result.errors == ["Missing required field: system.hostname"]


def test_homebrew_collections_must_be_arrays(empty_blueprint):
    empty_blueprint["homebrew"] = {"taps": "homebrew/core", "casks": {}}
    result = validate_blueprint(empty_blueprint)
    assert result.errors == [
        "Invalid field: homebrew.taps must be an array",
        "Invalid field: homebrew.casks must be an array",
        "Invalid field: homebrew.formulae must be an array",
    ]


def test_unnamed_casks_and_formulae_report_their_index(empty_blueprint):
    empty_blueprint["homebrew"]["casks"] = [{"name": "firefox"}, {"version": "1.0"}]
    empty_blueprint["homebrew"]["formulae"] = [{"name": ""}, {"name": "git"}, "wget"]
    result = validate_blueprint(empty_blueprint)
    assert result.valid is False
    assert result.errors == [
        "Invalid cask at index 1: missing 'name' field",
        "Invalid formula at index 0: missing 'name' field",
        "Invalid formula at index 2: missing 'name' field",
    ]


def test_taps_may_be_bare_names(empty_blueprint):
    empty_blueprint["homebrew"]["taps"] = ["homebrew/cask-fonts", {"name": "hashicorp/tap"}]
    assert validate_blueprint(empty_blueprint).valid is True


@pytest.mark.parametrize("key", ["applications", "shellConfigs", "githubRepos"])
def test_optional_arrays_reject_scalars_and_objects(empty_blueprint, key):
    empty_blueprint[key] = {"not": "a list"}
    result = validate_blueprint(empty_blueprint)
    assert result.errors == [f"Invalid field: {key} must be an array"]


@pytest.mark.parametrize("key", ["applications", "shellConfigs", "githubRepos", "globalPackages", "gitConfig"])
def test_optional_sections_may_be_absent(empty_blueprint, key):
    del empty_blueprint[key]
    assert validate_blueprint(empty_blueprint).valid is True


def test_global_package_managers_must_be_arrays(empty_blueprint):
    empty_blueprint["globalPackages"] = {"npm": "typescript", "bun": [], "pip": "ignored"}
    result = validate_blueprint(empty_blueprint)
    assert result.errors == ["Invalid field: globalPackages.npm must be an array"]


def test_global_packages_must_be_an_object(empty_blueprint):
    empty_blueprint["globalPackages"] = ["typescript"]
    result = validate_blueprint(empty_blueprint)
    assert result.errors == ["Invalid field: globalPackages must be an object"]


def test_git_config_parts_checked_independently(empty_blueprint):
    empty_blueprint["gitConfig"] = {"user": "alice", "settings": {"core.editor": "vim"}}
    result = validate_blueprint(empty_blueprint)
    assert result.errors == [
        "Invalid field: gitConfig.user must be an object",
        "Invalid field: gitConfig.settings must be an array",
    ]


def test_errors_accumulate_without_stopping():
    result = validate_blueprint({"version": "2.0", "applications": "Xcode", "githubRepos": 3})
    assert result.valid is False
    assert len(result.errors) == 4


def test_non_object_document_is_invalid():
    result = validate_blueprint(["not", "a", "blueprint"])
    assert result.valid is False
    assert len(result.errors) == 1


def test_legacy_document_is_normalized_without_touching_input(legacy_blueprint):
    result = validate_blueprint(legacy_blueprint)
    assert result.valid is True
    assert result.legacy is True
    assert result.document["version"] == "1.0"
    assert "version" not in legacy_blueprint


def test_legacy_document_in_place_backfill(legacy_blueprint):
    result = validate_blueprint(legacy_blueprint, in_place=True)
    assert result.valid is True
    assert legacy_blueprint["version"] == "1.0"
    assert result.document is legacy_blueprint


def test_legacy_backfill_is_a_warning_not_an_error(legacy_blueprint, caplog):
    with caplog.at_level(logging.WARNING, logger="mac_blueprint.core.schema.validator"):
        result = validate_blueprint(legacy_blueprint)
    assert result.errors == []
    assert len(result.warnings) == 1
    assert "Legacy blueprint format" in caplog.text


def test_legacy_version_is_configurable(legacy_blueprint):
    result = validate_blueprint(legacy_blueprint, legacy_version="0.9")
    assert result.document["version"] == "0.9"


def test_versioned_document_is_not_rewritten(empty_blueprint):
    result = validate_blueprint(empty_blueprint)
    assert result.legacy is False
    assert result.document == empty_blueprint
    assert result.document is not empty_blueprint


def test_unknown_sections_pass_through(empty_blueprint):
    empty_blueprint["masApps"] = [{"id": 497799835, "name": "Xcode"}]
    empty_blueprint["binaries"] = "opaque"
    result = validate_blueprint(empty_blueprint)
    assert result.valid is True
    assert result.document["masApps"] == empty_blueprint["masApps"]
