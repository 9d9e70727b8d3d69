"""Render content blocks into email-safe HTML fragments.

Leaf blocks map directly to styled elements. Container blocks (tabs, columns,
grid, accordion, callout, toggle) are flattened into a linear stack because
email clients cannot show interactive or side-by-side layout; nested content
is built recursively and indented by the serializer, never by string edits.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from models import (
    AccordionBlock,
    AlertBlock,
    AlertVariant,
    ButtonBlock,
    ButtonVariant,
    CalloutBlock,
    ChecklistBlock,
    CodeBlock,
    ColumnsBlock,
    ContentBlock,
    DividerBlock,
    DividerStyle,
    EmbedBlock,
    FileBlock,
    GridBlock,
    ImageBlock,
    QuizBlock,
    QuoteBlock,
    TableBlock,
    TabsBlock,
    TextBlock,
    TextMode,
    ToggleBlock,
    VideoBlock,
    VideoPlatform,
)
from services.html_nodes import Element, Node, RawHtml, Text, h, serialize
from services.markdown_converter import markdown_to_html

UNSUPPORTED_BLOCK_TEXT = "Unsupported block type"
DEFAULT_EMBED_HEIGHT = 400
DEFAULT_EMBED_TITLE = "Embedded content"
DEFAULT_VIDEO_LINK_TEXT = "Watch Video"
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{embed_id}"
EXPANDED_MARKER = "▼"


@dataclass(frozen=True)
class Palette:
    background: str
    border: str
    text: str


ALERT_PALETTE: dict[AlertVariant, Palette] = {
    AlertVariant.INFO: Palette(background="#eff6ff", border="#3b82f6", text="#1e40af"),
    AlertVariant.WARNING: Palette(background="#fef3c7", border="#f59e0b", text="#92400e"),
    AlertVariant.ERROR: Palette(background="#fee2e2", border="#ef4444", text="#991b1b"),
    AlertVariant.SUCCESS: Palette(background="#d1fae5", border="#10b981", text="#065f46"),
}

# (background, text colour, extra border declaration)
BUTTON_STYLES: dict[ButtonVariant, tuple[str, str, str]] = {
    ButtonVariant.PRIMARY: ("#2563eb", "#ffffff", ""),
    ButtonVariant.SECONDARY: ("#6b7280", "#ffffff", ""),
    ButtonVariant.OUTLINE: ("transparent", "#2563eb", " border: 2px solid #2563eb;"),
}

_DIVIDER_BORDER: dict[DividerStyle, str] = {
    DividerStyle.SOLID: "1px solid",
    DividerStyle.DASHED: "1px dashed",
    DividerStyle.DOTTED: "1px dotted",
    DividerStyle.THICK: "3px solid",
}

BuildFn = Callable[[Any], list[Node]]


class BlockRenderer:
    """Build and serialize HTML for a single content block, recursively."""

    def __init__(self, markdown_converter: Callable[[str], str] = markdown_to_html) -> None:
        self._markdown_converter = markdown_converter
        self._builders: dict[type, BuildFn] = {
            TextBlock: self._text,
            ImageBlock: self._image,
            VideoBlock: self._video,
            FileBlock: self._file,
            TableBlock: self._table,
            DividerBlock: self._divider,
            CodeBlock: self._code,
            QuoteBlock: self._quote,
            ButtonBlock: self._button,
            AlertBlock: self._alert,
            ChecklistBlock: self._checklist,
            EmbedBlock: self._embed,
            QuizBlock: self._quiz,
            TabsBlock: self._tabs,
            ColumnsBlock: self._columns,
            GridBlock: self._grid,
            AccordionBlock: self._accordion,
            CalloutBlock: self._callout,
            ToggleBlock: self._toggle,
        }

    def supports(self, block: object) -> bool:
        return type(block) in self._builders

    def render(self, block: ContentBlock) -> str:
        """Render one block to an HTML fragment."""
        return serialize(self.build(block))

    def build(self, block: ContentBlock) -> list[Node]:
        """Build the node list for one block; unknown blocks get a placeholder."""
        builder = self._builders.get(type(block))
        if builder is None:
            return [_unsupported()]
        try:
            return builder(block)
        except RecursionError:
            # Containers nested past the interpreter stack degrade like unknown blocks.
            return [_unsupported()]

    def build_many(self, blocks: Iterable[ContentBlock]) -> list[Node]:
        nodes: list[Node] = []
        for block in blocks:
            nodes.extend(self.build(block))
        return nodes

    # Leaf blocks

    def _text(self, block: TextBlock) -> list[Node]:
        if block.mode == TextMode.RICHTEXT:
            content = block.html
        else:
            content = self._markdown_converter(block.markdown)
        return [h("div", RawHtml(content or ""), style="margin-bottom: 16px;")]

    def _image(self, block: ImageBlock) -> list[Node]:
        children: list[Node] = [
            h(
                "img",
                src=block.url,
                alt=block.alt,
                style="max-width: 100%; height: auto; border-radius: 8px;",
            )
        ]
        if block.caption:
            children.append(
                h(
                    "p",
                    block.caption,
                    style=(
                        "color: #6b7280; font-size: 14px; margin-top: 8px; "
                        "font-style: italic; text-align: center;"
                    ),
                )
            )
        return [h("div", *children, style="margin-bottom: 24px; text-align: center;")]

    def _video(self, block: VideoBlock) -> list[Node]:
        if block.platform == VideoPlatform.YOUTUBE and block.embed_id:
            player = h(
                "div",
                h(
                    "iframe",
                    src=YOUTUBE_EMBED_URL.format(embed_id=block.embed_id),
                    allowfullscreen=True,
                    style=(
                        "position: absolute; top: 0; left: 0; width: 100%; "
                        "height: 100%; border: none;"
                    ),
                ),
                style=(
                    "position: relative; padding-bottom: 56.25%; height: 0; "
                    "overflow: hidden; border-radius: 8px;"
                ),
            )
        else:
            player = h(
                "p",
                h(
                    "a",
                    block.title or DEFAULT_VIDEO_LINK_TEXT,
                    href=block.url,
                    style="color: #2563eb; text-decoration: underline;",
                ),
            )
        return [h("div", player, style="margin-bottom: 24px;")]

    def _file(self, block: FileBlock) -> list[Node]:
        link = h(
            "a",
            f"📎 {block.filename}",
            href=block.url,
            download=True,
            style="color: #2563eb; text-decoration: none; font-weight: 500;",
        )
        return [
            h(
                "div",
                link,
                style=(
                    "margin-bottom: 16px; padding: 12px; background-color: #f3f4f6; "
                    "border-radius: 8px; border-left: 4px solid #2563eb;"
                ),
            )
        ]

    def _table(self, block: TableBlock) -> list[Node]:
        sections: list[Node] = []
        if block.has_header and block.headers:
            header_cells = [
                h(
                    "th",
                    header,
                    style=(
                        "padding: 12px; text-align: left; border: 1px solid #e5e7eb; "
                        "font-weight: 600;"
                    ),
                )
                for header in block.headers
            ]
            sections.append(
                h("thead", h("tr", *header_cells, style="background-color: #f3f4f6;"))
            )

        body_rows = [
            h(
                "tr",
                *(h("td", cell, style="padding: 12px; border: 1px solid #e5e7eb;") for cell in row),
                style=f"background-color: {'#ffffff' if index % 2 == 0 else '#f9fafb'};",
            )
            for index, row in enumerate(block.rows)
        ]
        sections.append(h("tbody", *body_rows))
        return [
            h(
                "table",
                *sections,
                style=(
                    "width: 100%; border-collapse: collapse; margin-bottom: 24px; "
                    "border: 1px solid #e5e7eb;"
                ),
            )
        ]

    def _divider(self, block: DividerBlock) -> list[Node]:
        border = _DIVIDER_BORDER.get(block.style, _DIVIDER_BORDER[DividerStyle.SOLID])
        return [
            h("hr", style=f"border: none; border-top: {border} #e5e7eb; margin: 24px 0;")
        ]

    def _code(self, block: CodeBlock) -> list[Node]:
        children: list[Node] = []
        if block.filename:
            children.append(
                h(
                    "div",
                    block.filename,
                    style=(
                        "padding: 8px 16px; background-color: #0f172a; color: #94a3b8; "
                        "font-size: 12px; font-family: monospace;"
                    ),
                )
            )
        code_attrs = {"data-language": block.language} if block.language else {}
        children.append(
            h(
                "pre",
                h(
                    "code",
                    block.code,
                    style=(
                        "color: #e2e8f0; font-family: 'Courier New', monospace; "
                        "font-size: 14px;"
                    ),
                    **code_attrs,
                ),
                style="padding: 16px; margin: 0; overflow-x: auto;",
            )
        )
        return [
            h(
                "div",
                *children,
                style=(
                    "margin-bottom: 24px; background-color: #1e293b; border-radius: 8px; "
                    "overflow: hidden;"
                ),
            )
        ]

    def _quote(self, block: QuoteBlock) -> list[Node]:
        children: list[Node] = [
            h(
                "p",
                RawHtml("&quot;"),
                Text(block.quote),
                RawHtml("&quot;"),
                style="margin: 0; font-size: 16px;",
            )
        ]
        attribution = ", ".join(part for part in (block.author, block.source) if part)
        if attribution:
            children.append(
                h(
                    "footer",
                    f"— {attribution}",
                    style="margin-top: 8px; font-size: 14px; color: #3b82f6; font-style: normal;",
                )
            )
        return [
            h(
                "blockquote",
                *children,
                style=(
                    "margin: 24px 0; padding: 16px 24px; border-left: 4px solid #2563eb; "
                    "background-color: #eff6ff; font-style: italic; color: #1e40af;"
                ),
            )
        ]

    def _button(self, block: ButtonBlock) -> list[Node]:
        background, color, border = BUTTON_STYLES.get(
            block.variant, BUTTON_STYLES[ButtonVariant.PRIMARY]
        )
        link = h(
            "a",
            block.text,
            href=block.url,
            style=(
                "display: inline-block; padding: 12px 32px; "
                f"background-color: {background}; color: {color}; text-decoration: none; "
                f"border-radius: 8px; font-weight: 600;{border}"
            ),
        )
        return [h("div", link, style="margin: 24px 0; text-align: center;")]

    def _alert(self, block: AlertBlock) -> list[Node]:
        palette = _palette(block.variant)
        children: list[Node] = []
        if block.title:
            children.append(
                h(
                    "p",
                    h("strong", block.title),
                    style=f"margin: 0 0 8px 0; font-weight: 600; color: {palette.text};",
                )
            )
        children.append(h("p", block.message, style=f"margin: 0; color: {palette.text};"))
        return [
            h(
                "div",
                *children,
                style=(
                    f"margin: 24px 0; padding: 16px; background-color: {palette.background}; "
                    f"border-left: 4px solid {palette.border}; border-radius: 8px;"
                ),
            )
        ]

    def _checklist(self, block: ChecklistBlock) -> list[Node]:
        children: list[Node] = []
        if block.title:
            children.append(
                h(
                    "h4",
                    block.title,
                    style="margin-bottom: 12px; color: #374151; font-size: 16px; font-weight: 600;",
                )
            )
        items = [
            h(
                "li",
                f"{'☑' if item.checked else '☐'} {item.text}",
                style="margin-bottom: 8px; color: #4b5563;",
            )
            for item in block.items
        ]
        children.append(h("ul", *items, style="list-style: none; padding: 0;"))
        return [h("div", *children, style="margin-bottom: 24px;")]

    def _embed(self, block: EmbedBlock) -> list[Node]:
        height = block.height if block.height and block.height > 0 else DEFAULT_EMBED_HEIGHT
        frame = h(
            "iframe",
            src=block.url,
            title=block.title or DEFAULT_EMBED_TITLE,
            style=(
                f"width: 100%; height: {height}px; border: 1px solid #e5e7eb; "
                "border-radius: 8px;"
            ),
        )
        return [h("div", frame, style="margin-bottom: 24px;")]

    def _quiz(self, block: QuizBlock) -> list[Node]:
        # Non-interactive teaser: only the question count is shown.
        children: list[Node] = []
        if block.title:
            children.append(
                h(
                    "h4",
                    f"📝 {block.title}",
                    style="margin: 0 0 12px 0; color: #1e40af; font-size: 18px; font-weight: 600;",
                )
            )
        if block.description:
            children.append(
                h("p", block.description, style="margin: 0 0 16px 0; color: #3b82f6;")
            )
        count = len(block.questions)
        plural = "" if count == 1 else "s"
        children.append(
            h(
                "p",
                f"This quiz contains {count} question{plural}. "
                "View the full resource to take the quiz!",
                style="margin: 0; color: #1e40af; font-style: italic;",
            )
        )
        return [
            h(
                "div",
                *children,
                style=(
                    "margin: 24px 0; padding: 20px; background-color: #f0f9ff; "
                    "border-radius: 8px; border: 2px solid #3b82f6;"
                ),
            )
        ]

    # Container blocks

    def _tabs(self, block: TabsBlock) -> list[Node]:
        nodes: list[Node] = []
        for index, tab in enumerate(block.tabs):
            heading = h(
                "h3",
                tab.label,
                style=(
                    "color: #2563eb; font-size: 18px; font-weight: 600; margin-bottom: 16px; "
                    "padding-bottom: 8px; border-bottom: 2px solid #e5e7eb;"
                ),
            )
            nodes.append(
                h(
                    "div",
                    heading,
                    *self.build_many(tab.blocks),
                    style=f"margin: {'32px' if index > 0 else '0'} 0;",
                )
            )
        return nodes

    def _columns(self, block: ColumnsBlock) -> list[Node]:
        last = len(block.columns) - 1
        groups = [
            h(
                "div",
                *self.build_many(column.blocks),
                style=f"margin-bottom: {'24px' if index < last else '0'};",
            )
            for index, column in enumerate(block.columns)
        ]
        return [h("div", *groups, style="margin-bottom: 24px;")]

    def _grid(self, block: GridBlock) -> list[Node]:
        last = len(block.cells) - 1
        cells = [
            h(
                "div",
                *self.build_many(cell.blocks),
                style=(
                    f"margin-bottom: {'16px' if index < last else '0'}; padding: 16px; "
                    "background-color: #f9fafb; border-radius: 8px;"
                ),
            )
            for index, cell in enumerate(block.cells)
        ]
        return [h("div", *cells, style="margin-bottom: 24px;")]

    def _accordion(self, block: AccordionBlock) -> list[Node]:
        nodes: list[Node] = []
        for index, item in enumerate(block.items):
            heading = h(
                "h4",
                f"{EXPANDED_MARKER} {item.title}",
                style="margin: 0 0 12px 0; color: #374151; font-size: 16px; font-weight: 600;",
            )
            nodes.append(
                h(
                    "div",
                    heading,
                    *self.build_many(item.blocks),
                    style=(
                        f"margin: {'16px' if index > 0 else '0'} 0; padding: 16px; "
                        "background-color: #f3f4f6; border-radius: 8px;"
                    ),
                )
            )
        return nodes

    def _callout(self, block: CalloutBlock) -> list[Node]:
        palette = _palette(block.variant)
        children: list[Node] = []
        if block.title:
            children.append(
                h(
                    "h4",
                    h("strong", block.title),
                    style="margin: 0 0 12px 0; color: #1f2937; font-size: 16px; font-weight: 600;",
                )
            )
        children.extend(self.build_many(block.blocks))
        return [
            h(
                "div",
                *children,
                style=(
                    f"margin: 24px 0; padding: 20px; background-color: {palette.background}; "
                    f"border-left: 4px solid {palette.border}; border-radius: 8px;"
                ),
            )
        ]

    def _toggle(self, block: ToggleBlock) -> list[Node]:
        heading = h(
            "h4",
            f"{EXPANDED_MARKER} {block.title}",
            style="margin: 0 0 12px 0; color: #374151; font-size: 15px; font-weight: 600;",
        )
        return [
            h(
                "div",
                heading,
                *self.build_many(block.blocks),
                style=(
                    "margin: 16px 0; padding: 16px; background-color: #f9fafb; "
                    "border-radius: 8px; border: 1px solid #e5e7eb;"
                ),
            )
        ]


def _palette(variant: AlertVariant) -> Palette:
    return ALERT_PALETTE.get(variant, ALERT_PALETTE[AlertVariant.INFO])


def _unsupported() -> Element:
    return h("p", UNSUPPORTED_BLOCK_TEXT, style="color: #6b7280; font-style: italic;")


_default_renderer: BlockRenderer | None = None


def render_block(block: ContentBlock) -> str:
    """Render a block with the default markdown converter."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = BlockRenderer()
    return _default_renderer.render(block)
