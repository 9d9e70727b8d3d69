"""Validation helpers for stored resources and pre-send HTML checks."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup
from jsonschema import ValidationError, validate

DEFAULT_MAX_HTML_CHARS = 180_000


class ContentValidationError(ValueError):
    """Raised when a resource record or rendered newsletter fails checks."""


def validate_json_payload(payload: dict[str, Any], schema: dict[str, object]) -> None:
    """Validate payload against schema and surface clean error messages."""
    try:
        validate(instance=payload, schema=schema)
    except ValidationError as exc:
        path = ".".join(str(part) for part in exc.path)
        context = f" at {path}" if path else ""
        raise ContentValidationError(f"Schema validation failed{context}: {exc.message}") from exc


def validate_rendered_html(html: str, *, max_chars: int = DEFAULT_MAX_HTML_CHARS) -> list[str]:
    """Run pre-send checks on rendered newsletter HTML; returns error messages."""
    errors: list[str] = []
    if len(html) > max_chars:
        errors.append(f"Rendered HTML exceeds size budget ({len(html)} > {max_chars} chars)")

    soup = BeautifulSoup(html, "html.parser")
    if soup.find("script") is not None:
        errors.append("Rendered HTML contains a script element")

    for tag in soup.find_all(True):
        handlers = sorted(name for name in tag.attrs if name.lower().startswith("on"))
        if handlers:
            errors.append(f"Event handler attribute on <{tag.name}>: {', '.join(handlers)}")

    return errors
