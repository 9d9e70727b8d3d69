"""HTML escaping for user-authored strings."""

from __future__ import annotations

# Ampersand must stay first so entities produced by later entries are not re-escaped.
_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape(text: str) -> str:
    """Return ``text`` with HTML special characters replaced by entities."""
    if not text:
        return ""
    escaped = str(text)
    for raw, entity in _SUBSTITUTIONS:
        escaped = escaped.replace(raw, entity)
    return escaped
