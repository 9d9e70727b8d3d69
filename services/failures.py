"""Dead letters for newsletter renders rejected before handoff."""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from pathlib import Path

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def save_dead_letter(
    *,
    failure_dir: Path,
    stage: str,
    resource_id: str,
    errors: list[str],
    html: str,
    resource_version: int,
    newsletter_id: str | None = None,
) -> Path:
    """Write the rejection record and the rejected HTML beside it.

    Returns the path of the JSON record. The HTML file shares its stem so a
    rejected render can be opened in a browser and replayed once fixed.
    """
    failure_dir.mkdir(parents=True, exist_ok=True)
    created_at = datetime.now(UTC)
    safe_id = _UNSAFE_NAME_CHARS.sub("_", resource_id) or "unknown"
    stem = f"failure_{safe_id}_{stage}_{created_at.strftime('%Y%m%dT%H%M%SZ')}"

    html_path = failure_dir / f"{stem}.html"
    html_path.write_text(html, encoding="utf-8")

    record = {
        "resource_id": resource_id,
        "newsletter_id": newsletter_id,
        "resource_version": resource_version,
        "stage": stage,
        "errors": errors,
        "html_length": len(html),
        "html_file": html_path.name,
        "created_at": created_at.isoformat(),
    }
    record_path = failure_dir / f"{stem}.json"
    record_path.write_text(json.dumps(record, indent=2, sort_keys=True), encoding="utf-8")
    return record_path
