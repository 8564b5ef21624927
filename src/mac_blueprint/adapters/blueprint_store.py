"""JSON persistence of blueprint documents.

Why JSON:
- It is the blueprint's native wire format; capture and apply tooling read
  and write the same files.
- Files are written with a stable layout (sorted keys, 2-space indent) so
  successive captures diff cleanly under version control.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping


class BlueprintLoadError(ValueError):
    """A blueprint file is missing, unreadable, or not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def load_blueprint(path: Path) -> dict[str, Any]:
    """Read a blueprint document from `path` (UTF-8 JSON)."""

    if not path.is_file():
        raise BlueprintLoadError(path, "file not found")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise BlueprintLoadError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise BlueprintLoadError(path, str(exc)) from exc

    if not isinstance(data, dict):
        raise BlueprintLoadError(path, "top-level value must be a JSON object")
    return data


def save_blueprint(document: Mapping[str, Any], path: Path) -> Path:
    """Write `document` as UTF-8 JSON with a stable format."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(document, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return path
