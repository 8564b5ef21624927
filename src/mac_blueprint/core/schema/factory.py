"""Canonical empty blueprint (the schema's zero value)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from mac_blueprint.core.domain.models import SCHEMA_VERSION, BlueprintDocument, SystemInfo


def format_capture_date(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a `Z` suffix."""

    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_empty_blueprint(
    *,
    schema_version: str = SCHEMA_VERSION,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build a fully-populated, type-correct empty blueprint document.

    Every required section is present; collections are empty, required
    system fields are the `"unknown"` placeholder and `captureDate` is the
    current instant (or `now` when given).
    """

    moment = now or datetime.now(timezone.utc)
    document = BlueprintDocument(
        version=schema_version,
        system=SystemInfo(capture_date=format_capture_date(moment)),
    )
    return document.to_dict()
