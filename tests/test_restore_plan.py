"""Dry-run restore planning."""
from __future__ import annotations

import pytest

from mac_blueprint.core.services import build_restore_plan
from mac_blueprint.core.services.restore_plan import (
    TAP_NAME_PATTERN,
    batched,
    find_manual_installs,
    sanitize_names,
)


def test_sanitize_keeps_shell_safe_names():
    safe, skipped = sanitize_names(
        [{"name": "git"}, "@angular/cli", {"name": "node@20"}, {"name": "evil; rm -rf /"}, {"version": "1"}]
    )
    assert safe == ["git", "@angular/cli", "node@20"]
    assert skipped[0] == "evil; rm -rf /"
    assert skipped[1] == "{'version': '1'}"


def test_tap_names_are_stricter():
    safe, skipped = sanitize_names(["homebrew/cask-fonts", "user/tap.v2"], TAP_NAME_PATTERN)
    assert safe == ["homebrew/cask-fonts"]
    assert skipped == ["user/tap.v2"]


def test_batched_splits_in_order():
    assert batched(["a", "b", "c", "d", "e"], 2) == [["a", "b"], ["c", "d"], ["e"]]
    assert batched([], 50) == []
    with pytest.raises(ValueError):
        batched(["a"], 0)


def test_manual_installs_match_cask_name_variants():
    apps = [
        {"name": "Visual Studio Code.app", "version": "1.85"},
        {"name": "Firefox.app", "version": "121"},
        {"name": "Google Chrome.app", "version": "120"},
        {"name": "Final Cut Pro.app", "version": "10.7", "bundleId": "com.apple.FinalCut"},
    ]
    casks = [{"name": "visual-studio-code"}, "firefox", {"name": "googlechrome"}]
    manual = find_manual_installs(apps, casks)
    assert [app["name"] for app in manual] == ["Final Cut Pro.app"]


def test_build_restore_plan(empty_blueprint):
    empty_blueprint["system"].update(hostname="studio", macosVersion="14.2")
    empty_blueprint["homebrew"]["taps"] = ["homebrew/cask-fonts"]
    empty_blueprint["homebrew"]["formulae"] = [{"name": f"pkg{i}"} for i in range(5)]
    empty_blueprint["homebrew"]["casks"] = [{"name": "firefox"}, {"name": "bad name"}]
    empty_blueprint["applications"] = [{"name": "Firefox.app"}, {"name": "Logic Pro.app", "version": "10.8"}]
    empty_blueprint["globalPackages"]["npm"] = [{"name": "typescript"}]
    empty_blueprint["masApps"] = [{"id": 1, "name": "Things"}]

    plan = build_restore_plan(empty_blueprint, formula_batch_size=2, cask_batch_size=30)

    assert plan.hostname == "studio"
    assert plan.macos_version == "14.2"
    assert plan.compatible is True
    assert plan.taps == ["homebrew/cask-fonts"]
    assert plan.formula_batches == [["pkg0", "pkg1"], ["pkg2", "pkg3"], ["pkg4"]]
    assert plan.formula_count == 5
    assert plan.cask_batches == [["firefox"]]
    assert plan.skipped == {"casks": ["bad name"]}
    assert [app["name"] for app in plan.manual_installs] == ["Logic Pro.app"]
    assert plan.global_packages == {"npm": 1, "bun": 0, "dart": 0, "ruby": 0}
    assert plan.mas_app_count == 1


def test_restore_plan_flags_incompatible_versions(empty_blueprint):
    empty_blueprint["version"] = "1.0"
    assert build_restore_plan(empty_blueprint).compatible is False
    assert build_restore_plan(empty_blueprint, current_version="1.4").compatible is True


def test_manual_installs_accept_bare_name_applications():
    manual = find_manual_installs(["Xcode.app", "Firefox.app", 42], [{"name": "firefox"}])
    assert manual == [{"name": "Xcode.app"}]


def test_build_restore_plan_with_bare_name_applications(empty_blueprint):
    empty_blueprint["applications"] = ["Xcode.app", {"name": "Slack.app", "version": "4.36"}]
    empty_blueprint["homebrew"]["casks"] = [{"name": "slack"}]
    plan = build_restore_plan(empty_blueprint)
    assert plan.manual_installs == [{"name": "Xcode.app"}]
