"""Tests for dead letters of rejected renders."""

from __future__ import annotations

import json
from pathlib import Path

from services.failures import save_dead_letter


def test_save_dead_letter_writes_record_and_html(tmp_path: Path) -> None:
    path = save_dead_letter(
        failure_dir=tmp_path / "failures",
        stage="render_validation",
        resource_id="res-1",
        errors=["Rendered HTML contains a script element"],
        html="<script>x()</script>",
        resource_version=2,
        newsletter_id="nl-9",
    )

    body = json.loads(path.read_text(encoding="utf-8"))
    assert path.name.startswith("failure_res-1_render_validation_")
    assert body["newsletter_id"] == "nl-9"
    assert body["resource_version"] == 2
    assert body["html_length"] == len("<script>x()</script>")
    assert (path.parent / body["html_file"]).read_text(encoding="utf-8") == "<script>x()</script>"


def test_save_dead_letter_sanitizes_file_names(tmp_path: Path) -> None:
    path = save_dead_letter(
        failure_dir=tmp_path,
        stage="render_validation",
        resource_id="../org 1/res",
        errors=["too big"],
        html="",
        resource_version=1,
    )

    assert path.parent == tmp_path
    assert path.name.startswith("failure__org_1_res_render_validation_")
    assert json.loads(path.read_text(encoding="utf-8"))["resource_id"] == "../org 1/res"


def test_save_dead_letter_names_missing_resource_unknown(tmp_path: Path) -> None:
    path = save_dead_letter(
        failure_dir=tmp_path,
        stage="render_validation",
        resource_id="",
        errors=["too big"],
        html="<p></p>",
        resource_version=1,
    )

    assert path.name.startswith("failure_unknown_render_validation_")
