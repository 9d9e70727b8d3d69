"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from config import AppConfig


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    data_dir = tmp_path / "data"
    return AppConfig(
        resource_store_dir=data_dir / "resources",
        failure_log_dir=data_dir / "failures",
        max_html_chars=180_000,
        default_sync_enabled=True,
        email_template_path=None,
    )


@pytest.fixture
def resource_payload() -> dict[str, Any]:
    return {
        "id": "res-1",
        "organization_id": "org-1",
        "title": "Onboarding guide",
        "description": "Everything a new member needs",
        "content": {
            "version": "2.0",
            "tabs": [
                {
                    "id": "tab-1",
                    "title": "Introduction",
                    "mode": "direct",
                    "blocks": [
                        {"id": "b1", "type": "text", "data": {"markdown": "**Welcome**"}},
                        {
                            "id": "b2",
                            "type": "image",
                            "data": {"url": "https://cdn.example.com/team.png", "alt": "Team"},
                        },
                    ],
                },
                {
                    "id": "tab-2",
                    "title": "Next steps",
                    "mode": "sectioned",
                    "sections": [
                        {
                            "id": "s1",
                            "title": "First week",
                            "description": "What to expect",
                            "blocks": [
                                {
                                    "id": "b3",
                                    "type": "checklist",
                                    "data": {
                                        "items": [
                                            {"id": "i1", "text": "Meet mentor", "checked": True},
                                            {"id": "i2", "text": "Read charter", "checked": False},
                                        ]
                                    },
                                }
                            ],
                        }
                    ],
                },
            ],
        },
    }
