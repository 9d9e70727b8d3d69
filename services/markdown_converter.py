"""Markdown to HTML conversion for markdown-mode text blocks."""

from __future__ import annotations

import markdown as md

from services.escaper import escape

# GitHub-flavoured basics: tables, fenced code, single newlines as <br>.
MARKDOWN_EXTENSIONS = ("tables", "fenced_code", "nl2br", "sane_lists")


def markdown_to_html(markdown: str) -> str:
    """Convert markdown to HTML; blank input gives an empty string."""
    if not markdown or not markdown.strip():
        return ""

    try:
        return md.markdown(markdown, extensions=list(MARKDOWN_EXTENSIONS))
    except Exception:  # noqa: BLE001
        return f"<p>{escape(markdown)}</p>"
