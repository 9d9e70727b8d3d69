"""Turn loosely-typed editor JSON into a structurally complete document tree."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any, TypeVar

from models import (
    AccordionBlock,
    AccordionItem,
    AlertBlock,
    AlertVariant,
    BlockType,
    ButtonBlock,
    ButtonVariant,
    CalloutBlock,
    ChecklistBlock,
    ChecklistItem,
    CodeBlock,
    Column,
    ColumnsBlock,
    ContentBlock,
    DividerBlock,
    DividerStyle,
    EmbedBlock,
    FileBlock,
    GridBlock,
    GridCell,
    ImageBlock,
    QuizBlock,
    QuizQuestion,
    QuoteBlock,
    Resource,
    ResourceContent,
    ResourceSection,
    ResourceTab,
    TabMode,
    TableBlock,
    TabPane,
    TabsBlock,
    TextBlock,
    TextMode,
    ToggleBlock,
    UnknownBlock,
    VideoBlock,
    VideoPlatform,
)

DEFAULT_VERSION = "2.0"
DEFAULT_TAB_TITLE = "Contenu principal"

_E = TypeVar("_E", bound=StrEnum)


def normalize(content: ResourceContent | Mapping[str, Any] | None) -> ResourceContent:
    """Return a complete ``ResourceContent``; absent content yields an empty document."""
    if isinstance(content, ResourceContent):
        return content
    if not isinstance(content, Mapping):
        return ResourceContent(tabs=(), version=DEFAULT_VERSION)

    return ResourceContent(
        tabs=tuple(_parse_tab(raw) for raw in _list(content.get("tabs"))),
        version=_str(content.get("version")) or DEFAULT_VERSION,
        tags=tuple(_str(tag) for tag in _list(content.get("tags")) if _str(tag)),
    )


def normalize_resource(raw: Resource | Mapping[str, Any]) -> Resource:
    """Build a ``Resource`` whose content has been normalized."""
    if isinstance(raw, Resource):
        return Resource(
            id=raw.id,
            title=raw.title,
            description=raw.description,
            organization_id=raw.organization_id,
            content=normalize(raw.content),
        )
    return Resource(
        id=_str(raw.get("id")),
        title=_str(raw.get("title")),
        description=_optional_str(raw.get("description")),
        organization_id=_optional_str(raw.get("organization_id")),
        content=normalize(raw.get("content")),
    )


def parse_block(raw: Any) -> ContentBlock:
    """Parse one editor block; anything unrecognized becomes ``UnknownBlock``."""
    if not isinstance(raw, Mapping):
        return UnknownBlock()

    block_id = _str(raw.get("id"))
    block_type = _str(raw.get("type"))
    data = raw.get("data")
    if not isinstance(data, Mapping):
        data = {}

    parser = _BLOCK_PARSERS.get(block_type)
    if parser is None:
        return UnknownBlock(id=block_id, block_type=block_type, data=dict(data))
    try:
        return parser(block_id, data)
    except RecursionError:
        return UnknownBlock(id=block_id, block_type=block_type)


def parse_blocks(raw: Any) -> tuple[ContentBlock, ...]:
    return tuple(parse_block(item) for item in _list(raw))


def _parse_tab(raw: Any) -> ResourceTab:
    if not isinstance(raw, Mapping):
        return ResourceTab(title=DEFAULT_TAB_TITLE)

    has_sections = isinstance(raw.get("sections"), list)
    has_blocks = isinstance(raw.get("blocks"), list)
    default_mode = TabMode.DIRECT if has_blocks and not has_sections else TabMode.SECTIONED

    return ResourceTab(
        id=_str(raw.get("id")),
        title=_str(raw.get("title")) or DEFAULT_TAB_TITLE,
        mode=_enum(TabMode, raw.get("mode"), default_mode),
        blocks=parse_blocks(raw.get("blocks")),
        sections=tuple(_parse_section(item) for item in _list(raw.get("sections"))),
    )


def _parse_section(raw: Any) -> ResourceSection:
    if not isinstance(raw, Mapping):
        return ResourceSection()
    return ResourceSection(
        title=_optional_str(raw.get("title")),
        description=_optional_str(raw.get("description")),
        blocks=parse_blocks(raw.get("blocks")),
    )


def _parse_text(block_id: str, data: Mapping[str, Any]) -> TextBlock:
    markdown = _str(data.get("markdown"))
    html = _str(data.get("html"))
    default_mode = TextMode.RICHTEXT if html and not markdown else TextMode.MARKDOWN
    return TextBlock(
        id=block_id,
        mode=_enum(TextMode, data.get("mode"), default_mode),
        markdown=markdown,
        html=html,
    )


def _parse_image(block_id: str, data: Mapping[str, Any]) -> ImageBlock:
    return ImageBlock(
        id=block_id,
        url=_str(data.get("url")),
        alt=_str(data.get("alt")),
        caption=_optional_str(data.get("caption")),
    )


def _parse_video(block_id: str, data: Mapping[str, Any]) -> VideoBlock:
    return VideoBlock(
        id=block_id,
        url=_str(data.get("url")),
        platform=_enum(VideoPlatform, data.get("platform"), VideoPlatform.OTHER),
        embed_id=_optional_str(data.get("embedId")),
        title=_optional_str(data.get("title")),
    )


def _parse_file(block_id: str, data: Mapping[str, Any]) -> FileBlock:
    return FileBlock(
        id=block_id,
        url=_str(data.get("url")),
        filename=_str(data.get("filename")),
        size=_int(data.get("size")) or 0,
        mime_type=_optional_str(data.get("mimeType")),
    )


def _parse_table(block_id: str, data: Mapping[str, Any]) -> TableBlock:
    return TableBlock(
        id=block_id,
        headers=tuple(_str(cell) for cell in _list(data.get("headers"))),
        rows=tuple(
            tuple(_str(cell) for cell in _list(row)) for row in _list(data.get("rows"))
        ),
        has_header=_bool(data.get("hasHeader")),
    )


def _parse_divider(block_id: str, data: Mapping[str, Any]) -> DividerBlock:
    return DividerBlock(
        id=block_id,
        style=_enum(DividerStyle, data.get("style"), DividerStyle.SOLID),
    )


def _parse_code(block_id: str, data: Mapping[str, Any]) -> CodeBlock:
    return CodeBlock(
        id=block_id,
        code=_str(data.get("code")),
        language=_str(data.get("language")),
        filename=_optional_str(data.get("filename")),
    )


def _parse_quote(block_id: str, data: Mapping[str, Any]) -> QuoteBlock:
    return QuoteBlock(
        id=block_id,
        quote=_str(data.get("quote")),
        author=_optional_str(data.get("author")),
        source=_optional_str(data.get("source")),
    )


def _parse_button(block_id: str, data: Mapping[str, Any]) -> ButtonBlock:
    return ButtonBlock(
        id=block_id,
        text=_str(data.get("text")),
        url=_str(data.get("url")),
        variant=_enum(ButtonVariant, data.get("variant"), ButtonVariant.PRIMARY),
    )


def _parse_alert(block_id: str, data: Mapping[str, Any]) -> AlertBlock:
    return AlertBlock(
        id=block_id,
        variant=_enum(AlertVariant, data.get("variant"), AlertVariant.INFO),
        title=_optional_str(data.get("title")),
        message=_str(data.get("message")),
    )


def _parse_checklist(block_id: str, data: Mapping[str, Any]) -> ChecklistBlock:
    items = tuple(
        ChecklistItem(text=_str(item.get("text")), checked=_bool(item.get("checked")))
        for item in _list(data.get("items"))
        if isinstance(item, Mapping)
    )
    return ChecklistBlock(id=block_id, title=_optional_str(data.get("title")), items=items)


def _parse_embed(block_id: str, data: Mapping[str, Any]) -> EmbedBlock:
    height = _int(data.get("height"))
    return EmbedBlock(
        id=block_id,
        url=_str(data.get("url")),
        height=height if height is not None and height > 0 else None,
        title=_optional_str(data.get("title")),
    )


def _parse_quiz(block_id: str, data: Mapping[str, Any]) -> QuizBlock:
    questions: list[QuizQuestion] = []
    for item in _list(data.get("questions")):
        if isinstance(item, Mapping):
            questions.append(
                QuizQuestion(
                    id=_str(item.get("id")),
                    question=_str(item.get("question")),
                    kind=_str(item.get("type")),
                )
            )
        else:
            questions.append(QuizQuestion(question=_str(item)))
    return QuizBlock(
        id=block_id,
        title=_optional_str(data.get("title")),
        description=_optional_str(data.get("description")),
        questions=tuple(questions),
    )


def _parse_tabs(block_id: str, data: Mapping[str, Any]) -> TabsBlock:
    tabs = tuple(
        TabPane(label=_str(item.get("label")), blocks=parse_blocks(item.get("blocks")))
        for item in _mappings(data.get("tabs"))
    )
    return TabsBlock(id=block_id, tabs=tabs)


def _parse_columns(block_id: str, data: Mapping[str, Any]) -> ColumnsBlock:
    columns = tuple(
        Column(blocks=parse_blocks(item.get("blocks"))) for item in _mappings(data.get("columns"))
    )
    return ColumnsBlock(id=block_id, columns=columns)


def _parse_grid(block_id: str, data: Mapping[str, Any]) -> GridBlock:
    cells = tuple(
        GridCell(blocks=parse_blocks(item.get("blocks"))) for item in _mappings(data.get("cells"))
    )
    return GridBlock(id=block_id, cells=cells)


def _parse_accordion(block_id: str, data: Mapping[str, Any]) -> AccordionBlock:
    items = tuple(
        AccordionItem(title=_str(item.get("title")), blocks=parse_blocks(item.get("blocks")))
        for item in _mappings(data.get("items"))
    )
    return AccordionBlock(id=block_id, items=items)


def _parse_callout(block_id: str, data: Mapping[str, Any]) -> CalloutBlock:
    return CalloutBlock(
        id=block_id,
        variant=_enum(AlertVariant, data.get("variant"), AlertVariant.INFO),
        title=_optional_str(data.get("title")),
        blocks=parse_blocks(data.get("blocks")),
    )


def _parse_toggle(block_id: str, data: Mapping[str, Any]) -> ToggleBlock:
    return ToggleBlock(
        id=block_id,
        title=_str(data.get("title")),
        blocks=parse_blocks(data.get("blocks")),
    )


_BLOCK_PARSERS: dict[str, Callable[[str, Mapping[str, Any]], ContentBlock]] = {
    BlockType.TEXT: _parse_text,
    BlockType.IMAGE: _parse_image,
    BlockType.VIDEO: _parse_video,
    BlockType.FILE: _parse_file,
    BlockType.TABLE: _parse_table,
    BlockType.DIVIDER: _parse_divider,
    BlockType.CODE: _parse_code,
    BlockType.QUOTE: _parse_quote,
    BlockType.BUTTON: _parse_button,
    BlockType.ALERT: _parse_alert,
    BlockType.CHECKLIST: _parse_checklist,
    BlockType.EMBED: _parse_embed,
    BlockType.QUIZ: _parse_quiz,
    BlockType.TABS: _parse_tabs,
    BlockType.COLUMNS: _parse_columns,
    BlockType.GRID: _parse_grid,
    BlockType.ACCORDION: _parse_accordion,
    BlockType.CALLOUT: _parse_callout,
    BlockType.TOGGLE: _parse_toggle,
}


def _str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _optional_str(value: Any) -> str | None:
    return _str(value) or None


def _int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _bool(value: Any) -> bool:
    return value is True


def _list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _mappings(value: Any) -> list[Mapping[str, Any]]:
    return [item for item in _list(value) if isinstance(item, Mapping)]


def _enum(enum_type: type[_E], value: Any, default: _E) -> _E:
    try:
        return enum_type(value)
    except (TypeError, ValueError):
        return default
