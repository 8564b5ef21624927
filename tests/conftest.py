"""Shared fixtures for blueprint tests."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from mac_blueprint.core.schema import create_empty_blueprint

FIXED_NOW = datetime(2024, 1, 15, 9, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def empty_blueprint() -> dict[str, Any]:
    return create_empty_blueprint(now=FIXED_NOW)


@pytest.fixture
def legacy_blueprint() -> dict[str, Any]:
    return {
        "system": {"hostname": "test", "macosVersion": "14.0", "captureDate": "2024-01-01"},
        "homebrew": {"taps": [], "casks": [], "formulae": []},
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
