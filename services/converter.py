"""Resource to newsletter HTML: render the document, then wrap it for email."""

from __future__ import annotations

from models import Resource
from services.assembler import EmailAssembler
from services.document_renderer import DocumentRenderer


class ResourceNewsletterConverter:
    """Pure, synchronous resource-to-HTML transform."""

    def __init__(
        self,
        *,
        document_renderer: DocumentRenderer | None = None,
        assembler: EmailAssembler | None = None,
    ) -> None:
        self._document_renderer = document_renderer or DocumentRenderer()
        self._assembler = assembler or EmailAssembler()

    def convert(self, resource: Resource) -> str:
        """Return the complete email-safe HTML string for ``resource``."""
        return self._assembler.wrap(self._document_renderer.render(resource))


_default_converter: ResourceNewsletterConverter | None = None


def convert_resource_to_html(resource: Resource) -> str:
    global _default_converter
    if _default_converter is None:
        _default_converter = ResourceNewsletterConverter()
    return _default_converter.convert(resource)
