"""Render a whole resource (title, tabs, sections, blocks) as an HTML body."""

from __future__ import annotations

from models import Resource, ResourceTab, TabMode
from services.block_renderer import BlockRenderer
from services.html_nodes import Node, h, serialize
from services.normalizer import DEFAULT_TAB_TITLE, normalize

EMPTY_CONTENT_HTML = "<p>No content available</p>"


class DocumentRenderer:
    """Concatenate tab headings, section headings and block fragments in source order."""

    def __init__(self, block_renderer: BlockRenderer | None = None) -> None:
        self._blocks = block_renderer or BlockRenderer()

    def render(self, resource: Resource) -> str:
        """Render the resource body; an empty document yields a fixed fallback."""
        content = normalize(resource.content)
        if not content.tabs:
            return EMPTY_CONTENT_HTML

        nodes: list[Node] = []
        if resource.title:
            nodes.append(
                h(
                    "h1",
                    resource.title,
                    style="color: #1a1a1a; font-size: 28px; font-weight: bold; margin-bottom: 16px;",
                )
            )
        if resource.description:
            nodes.append(
                h(
                    "p",
                    resource.description,
                    style="color: #666; font-size: 16px; margin-bottom: 24px;",
                )
            )

        show_tab_headings = len(content.tabs) > 1
        for index, tab in enumerate(content.tabs):
            if show_tab_headings or tab.title != DEFAULT_TAB_TITLE:
                nodes.append(_tab_heading(tab, first=index == 0))
            nodes.extend(self._tab_nodes(tab))

        return serialize(nodes)

    def _tab_nodes(self, tab: ResourceTab) -> list[Node]:
        if tab.mode == TabMode.DIRECT:
            return self._blocks.build_many(tab.blocks)

        nodes: list[Node] = []
        for section in tab.sections:
            if section.title:
                nodes.append(
                    h(
                        "h3",
                        section.title,
                        style=(
                            "color: #374151; font-size: 20px; font-weight: 600; "
                            "margin-top: 24px; margin-bottom: 12px;"
                        ),
                    )
                )
            if section.description:
                nodes.append(
                    h(
                        "p",
                        section.description,
                        style=(
                            "color: #6b7280; font-size: 14px; margin-bottom: 16px; "
                            "font-style: italic;"
                        ),
                    )
                )
            nodes.extend(self._blocks.build_many(section.blocks))
        return nodes


def _tab_heading(tab: ResourceTab, *, first: bool) -> Node:
    return h(
        "h2",
        tab.title,
        style=(
            "color: #2563eb; font-size: 24px; font-weight: 600; "
            f"margin-top: {'0' if first else '32px'}; margin-bottom: 20px; "
            "border-bottom: 2px solid #e5e7eb; padding-bottom: 8px;"
        ),
    )


_default_renderer: DocumentRenderer | None = None


def render_document(resource: Resource) -> str:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = DocumentRenderer()
    return _default_renderer.render(resource)
