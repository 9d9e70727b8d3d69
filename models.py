"""Core typed models for editor resources and newsletter drafts."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar


class BlockType(StrEnum):
    """Tag values used by the resource editor for content blocks."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"
    TABLE = "table"
    DIVIDER = "divider"
    CODE = "code"
    QUOTE = "quote"
    BUTTON = "button"
    ALERT = "alert"
    CHECKLIST = "checklist"
    EMBED = "embed"
    QUIZ = "quiz"
    TABS = "tabs"
    COLUMNS = "columns"
    GRID = "grid"
    ACCORDION = "accordion"
    CALLOUT = "callout"
    TOGGLE = "toggle"


class TextMode(StrEnum):
    """Editing mode of a text block."""

    MARKDOWN = "markdown"
    RICHTEXT = "richtext"


class VideoPlatform(StrEnum):
    """Video hosting platform."""

    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    DAILYMOTION = "dailymotion"
    OTHER = "other"


class DividerStyle(StrEnum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    THICK = "thick"


class ButtonVariant(StrEnum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OUTLINE = "outline"


class AlertVariant(StrEnum):
    """Palette key shared by alert and callout blocks."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class TabMode(StrEnum):
    """How a resource tab organizes its blocks."""

    DIRECT = "direct"
    SECTIONED = "sectioned"


class NewsletterStatus(StrEnum):
    """Newsletter lifecycle status handed to the send pipeline."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


# Leaf blocks


@dataclass(frozen=True)
class TextBlock:
    """Markdown or pre-rendered rich text."""

    kind: ClassVar[BlockType] = BlockType.TEXT

    id: str = ""
    mode: TextMode = TextMode.MARKDOWN
    markdown: str = ""
    html: str = ""


@dataclass(frozen=True)
class ImageBlock:
    kind: ClassVar[BlockType] = BlockType.IMAGE

    id: str = ""
    url: str = ""
    alt: str = ""
    caption: str | None = None


@dataclass(frozen=True)
class VideoBlock:
    """Embedded video; only YouTube ids are embedded, anything else is linked."""

    kind: ClassVar[BlockType] = BlockType.VIDEO

    id: str = ""
    url: str = ""
    platform: VideoPlatform = VideoPlatform.OTHER
    embed_id: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class FileBlock:
    kind: ClassVar[BlockType] = BlockType.FILE

    id: str = ""
    url: str = ""
    filename: str = ""
    size: int = 0
    mime_type: str | None = None


@dataclass(frozen=True)
class TableBlock:
    kind: ClassVar[BlockType] = BlockType.TABLE

    id: str = ""
    headers: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()
    has_header: bool = False


@dataclass(frozen=True)
class DividerBlock:
    kind: ClassVar[BlockType] = BlockType.DIVIDER

    id: str = ""
    style: DividerStyle = DividerStyle.SOLID


@dataclass(frozen=True)
class CodeBlock:
    kind: ClassVar[BlockType] = BlockType.CODE

    id: str = ""
    code: str = ""
    language: str = ""
    filename: str | None = None


@dataclass(frozen=True)
class QuoteBlock:
    kind: ClassVar[BlockType] = BlockType.QUOTE

    id: str = ""
    quote: str = ""
    author: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class ButtonBlock:
    kind: ClassVar[BlockType] = BlockType.BUTTON

    id: str = ""
    text: str = ""
    url: str = ""
    variant: ButtonVariant = ButtonVariant.PRIMARY


@dataclass(frozen=True)
class AlertBlock:
    kind: ClassVar[BlockType] = BlockType.ALERT

    id: str = ""
    variant: AlertVariant = AlertVariant.INFO
    title: str | None = None
    message: str = ""


@dataclass(frozen=True)
class ChecklistItem:
    text: str = ""
    checked: bool = False


@dataclass(frozen=True)
class ChecklistBlock:
    kind: ClassVar[BlockType] = BlockType.CHECKLIST

    id: str = ""
    title: str | None = None
    items: tuple[ChecklistItem, ...] = ()


@dataclass(frozen=True)
class EmbedBlock:
    kind: ClassVar[BlockType] = BlockType.EMBED

    id: str = ""
    url: str = ""
    height: int | None = None
    title: str | None = None


@dataclass(frozen=True)
class QuizQuestion:
    """Quiz question kept only so the teaser can count questions."""

    id: str = ""
    question: str = ""
    kind: str = ""


@dataclass(frozen=True)
class QuizBlock:
    kind: ClassVar[BlockType] = BlockType.QUIZ

    id: str = ""
    title: str | None = None
    description: str | None = None
    questions: tuple[QuizQuestion, ...] = ()


# Container blocks


@dataclass(frozen=True)
class TabPane:
    label: str = ""
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class TabsBlock:
    kind: ClassVar[BlockType] = BlockType.TABS

    id: str = ""
    tabs: tuple[TabPane, ...] = ()


@dataclass(frozen=True)
class Column:
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class ColumnsBlock:
    kind: ClassVar[BlockType] = BlockType.COLUMNS

    id: str = ""
    columns: tuple[Column, ...] = ()


@dataclass(frozen=True)
class GridCell:
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class GridBlock:
    kind: ClassVar[BlockType] = BlockType.GRID

    id: str = ""
    cells: tuple[GridCell, ...] = ()


@dataclass(frozen=True)
class AccordionItem:
    title: str = ""
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class AccordionBlock:
    kind: ClassVar[BlockType] = BlockType.ACCORDION

    id: str = ""
    items: tuple[AccordionItem, ...] = ()


@dataclass(frozen=True)
class CalloutBlock:
    kind: ClassVar[BlockType] = BlockType.CALLOUT

    id: str = ""
    variant: AlertVariant = AlertVariant.INFO
    title: str | None = None
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class ToggleBlock:
    kind: ClassVar[BlockType] = BlockType.TOGGLE

    id: str = ""
    title: str = ""
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class UnknownBlock:
    """Block whose tag is not recognized; rendered as a visible placeholder."""

    id: str = ""
    block_type: str = ""
    data: dict[str, Any] = field(default_factory=dict)


ContentBlock = (
    TextBlock
    | ImageBlock
    | VideoBlock
    | FileBlock
    | TableBlock
    | DividerBlock
    | CodeBlock
    | QuoteBlock
    | ButtonBlock
    | AlertBlock
    | ChecklistBlock
    | EmbedBlock
    | QuizBlock
    | TabsBlock
    | ColumnsBlock
    | GridBlock
    | AccordionBlock
    | CalloutBlock
    | ToggleBlock
    | UnknownBlock
)


# Document structure


@dataclass(frozen=True)
class ResourceSection:
    title: str | None = None
    description: str | None = None
    blocks: tuple[ContentBlock, ...] = ()


@dataclass(frozen=True)
class ResourceTab:
    """Top-level tab holding either direct blocks or sections."""

    title: str
    mode: TabMode = TabMode.SECTIONED
    blocks: tuple[ContentBlock, ...] = ()
    sections: tuple[ResourceSection, ...] = ()
    id: str = ""


@dataclass(frozen=True)
class ResourceContent:
    tabs: tuple[ResourceTab, ...] = ()
    version: str = "2.0"
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Resource:
    """Editor-authored resource as returned by the resource store."""

    title: str
    content: ResourceContent | None = None
    description: str | None = None
    id: str = ""
    organization_id: str | None = None


def child_blocks(block: ContentBlock) -> tuple[ContentBlock, ...]:
    """Return the direct children of a container block, in document order."""
    if isinstance(block, TabsBlock):
        return tuple(child for tab in block.tabs for child in tab.blocks)
    if isinstance(block, ColumnsBlock):
        return tuple(child for column in block.columns for child in column.blocks)
    if isinstance(block, GridBlock):
        return tuple(child for cell in block.cells for child in cell.blocks)
    if isinstance(block, AccordionBlock):
        return tuple(child for item in block.items for child in item.blocks)
    if isinstance(block, (CalloutBlock, ToggleBlock)):
        return block.blocks
    return ()


def tab_blocks(tab: ResourceTab) -> tuple[ContentBlock, ...]:
    """Top-level blocks of a tab as the renderer sees them."""
    if tab.mode == TabMode.DIRECT:
        return tab.blocks
    return tuple(block for section in tab.sections for block in section.blocks)


def iter_blocks(content: ResourceContent) -> Iterator[ContentBlock]:
    """Walk every block of a document depth-first, in document order."""
    stack: list[ContentBlock] = []
    for tab in content.tabs:
        for root in tab_blocks(tab):
            stack.append(root)
            while stack:
                block = stack.pop()
                yield block
                stack.extend(reversed(child_blocks(block)))
