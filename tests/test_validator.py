"""Tests for schema and pre-send HTML validation helpers."""

from __future__ import annotations

import pytest

from services.schemas import RESOURCE_SCHEMA
from services.validator import (
    ContentValidationError,
    validate_json_payload,
    validate_rendered_html,
)


def test_validate_json_payload_accepts_minimal_resource() -> None:
    validate_json_payload({"id": "r1", "title": "T", "content": None}, RESOURCE_SCHEMA)


def test_validate_json_payload_reports_path() -> None:
    with pytest.raises(ContentValidationError, match="at content.tabs"):
        validate_json_payload(
            {"id": "r1", "title": "T", "content": {"tabs": "nope"}},
            RESOURCE_SCHEMA,
        )


def test_validate_json_payload_requires_title() -> None:
    with pytest.raises(ContentValidationError, match="title"):
        validate_json_payload({"id": "r1"}, RESOURCE_SCHEMA)


def test_validate_rendered_html_passes_clean_output() -> None:
    html = '<div><a href="https://example.com">x</a><iframe src="https://example.com/e"></iframe></div>'

    assert validate_rendered_html(html) == []


def test_validate_rendered_html_allows_empty_links_and_frames() -> None:
    html = '<div><a href="">Go</a><a name="top">Top</a><iframe src="" title="Embedded content"></iframe></div>'

    assert validate_rendered_html(html) == []


def test_validate_rendered_html_flags_problems() -> None:
    html = (
        "<div>"
        "<script>alert(1)</script>"
        '<img src="x" onerror="steal()" />'
        "</div>"
    )

    errors = validate_rendered_html(html)

    assert "Rendered HTML contains a script element" in errors
    assert any("onerror" in error for error in errors)


def test_validate_rendered_html_enforces_size_budget() -> None:
    errors = validate_rendered_html("<p>" + "a" * 50 + "</p>", max_chars=10)

    assert len(errors) == 1
    assert "size budget" in errors[0]
