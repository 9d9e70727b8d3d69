"""Wrap a rendered body in the fixed-width, inline-styled email container."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "email_container.html"


class EmailAssembler:
    """Render the container template around an already-built HTML body."""

    def __init__(self, template_path: Path | None = None) -> None:
        self._template_path = template_path or DEFAULT_TEMPLATE_PATH
        self._environment = Environment(
            loader=FileSystemLoader(str(self._template_path.parent)),
            autoescape=select_autoescape(enabled_extensions=("html", "xml")),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def wrap(self, body: str) -> str:
        """Return ``body`` inside the email container; the body is trusted HTML."""
        template = self._environment.get_template(self._template_path.name)
        return template.render(body=Markup(body)).strip()


_default_assembler: EmailAssembler | None = None


def wrap(body: str) -> str:
    global _default_assembler
    if _default_assembler is None:
        _default_assembler = EmailAssembler()
    return _default_assembler.wrap(body)
