"""Tests for markdown conversion of text blocks."""

from __future__ import annotations

import pytest

from services import markdown_converter
from services.markdown_converter import markdown_to_html


def test_blank_markdown_is_empty() -> None:
    assert markdown_to_html("") == ""
    assert markdown_to_html("   \n") == ""


def test_inline_emphasis() -> None:
    assert markdown_to_html("**Hello** *there*") == "<p><strong>Hello</strong> <em>there</em></p>"


def test_single_newline_becomes_line_break() -> None:
    html = markdown_to_html("first\nsecond")

    assert "<br" in html
    assert html.startswith("<p>first")


def test_tables_and_fenced_code_are_enabled() -> None:
    table = markdown_to_html("| a | b |\n| --- | --- |\n| 1 | 2 |")
    code = markdown_to_html("```python\nx = 1\n```")

    assert "<table>" in table
    assert "<td>1</td>" in table
    assert "<pre><code" in code
    assert "language-python" in code


def test_converter_failure_falls_back_to_escaped_paragraph(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_args: object, **_kwargs: object) -> str:
        raise RuntimeError("parser crashed")

    monkeypatch.setattr(markdown_converter.md, "markdown", _boom)

    assert markdown_to_html("a < b & c") == "<p>a &lt; b &amp; c</p>"
