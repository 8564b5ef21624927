"""Schema version compatibility.

Advisory only: callers warn and carry on when a document is incompatible.
"""

from __future__ import annotations

from typing import Any, Mapping

from mac_blueprint.core.domain.models import SCHEMA_VERSION


def major_of(version: Any) -> str:
    return str(version).split(".")[0]


def is_compatible(document: Mapping[str, Any], current_version: str = SCHEMA_VERSION) -> bool:
    """True when `document` can be consumed by an implementation at `current_version`.

    A document without `version` is always compatible. Otherwise only the
    major components are compared, as strings.
    """

    version = document.get("version")
    if not version:
        return True
    return major_of(version) == major_of(current_version)
