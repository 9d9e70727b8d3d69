"""JSON schemas for stored resource records."""

from __future__ import annotations

# Only the envelope is checked; block payloads degrade per block at render time.
RESOURCE_SCHEMA: dict[str, object] = {
    "type": "object",
    "required": ["id", "title"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "organization_id": {"type": ["string", "null"]},
        "title": {"type": "string"},
        "description": {"type": ["string", "null"]},
        "content": {
            "type": ["object", "null"],
            "properties": {
                "tabs": {"type": ["array", "null"]},
                "version": {"type": ["string", "null"]},
                "tags": {"type": ["array", "null"], "items": {"type": "string"}},
            },
        },
    },
}
