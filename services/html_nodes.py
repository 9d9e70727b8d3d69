"""Intermediate HTML node tree and its indenting serializer.

Renderers build ``Element``/``Text``/``RawHtml`` nodes instead of splicing
strings. Escaping and indentation both happen in one place, ``serialize``,
which walks the tree with an explicit depth.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from services.escaper import escape

INDENT = "  "

VOID_TAGS = frozenset({"img", "hr", "br"})
INLINE_TAGS = frozenset({"a", "code", "strong", "em", "span"})


@dataclass(frozen=True)
class Text:
    """Untrusted text; escaped when serialized."""

    value: str


@dataclass(frozen=True)
class RawHtml:
    """Trusted, already-rendered HTML written verbatim."""

    html: str


@dataclass(frozen=True)
class Element:
    tag: str
    style: str = ""
    # Value None marks a boolean attribute written as a bare name.
    attrs: tuple[tuple[str, str | None], ...] = ()
    children: tuple[Node, ...] = ()


Node = Element | Text | RawHtml


def h(tag: str, *children: Node | str, style: str = "", **attrs: str | bool) -> Element:
    """Build an element; plain string children become ``Text`` nodes."""
    attr_items: list[tuple[str, str | None]] = []
    for name, value in attrs.items():
        if value is True:
            attr_items.append((name, None))
        elif value is False:
            continue
        else:
            attr_items.append((name, str(value)))
    return Element(
        tag=tag,
        style=style,
        attrs=tuple(attr_items),
        children=tuple(Text(child) if isinstance(child, str) else child for child in children),
    )


def serialize(nodes: Iterable[Node], depth: int = 0) -> str:
    """Serialize nodes one per line, indenting nested block content by depth."""
    lines: list[str] = []
    # Closing tags are queued as plain strings between element children.
    stack: list[tuple[Node | str, int]] = [(node, depth) for node in reversed(list(nodes))]
    while stack:
        node, level = stack.pop()
        if isinstance(node, str):
            lines.append(node)
            continue
        pad = INDENT * level
        if isinstance(node, Element) and _is_multiline(node):
            lines.append(pad + _open_tag(node))
            stack.append((f"{pad}</{node.tag}>", level))
            stack.extend((child, level + 1) for child in reversed(node.children))
        else:
            lines.append(pad + _inline(node))
    return "\n".join(lines)


def _is_multiline(element: Element) -> bool:
    return any(
        isinstance(child, Element) and child.tag not in INLINE_TAGS
        for child in element.children
    )


def _inline(node: Node) -> str:
    if isinstance(node, Text):
        return escape(node.value)
    if isinstance(node, RawHtml):
        return node.html
    if node.tag in VOID_TAGS:
        return _open_tag(node, self_closing=True)
    inner = "".join(_inline(child) for child in node.children)
    return f"{_open_tag(node)}{inner}</{node.tag}>"


def _open_tag(element: Element, *, self_closing: bool = False) -> str:
    parts = [element.tag]
    for name, value in element.attrs:
        parts.append(name if value is None else f'{name}="{escape(value)}"')
    if element.style:
        parts.append(f'style="{element.style}"')
    closing = " />" if self_closing else ">"
    return "<" + " ".join(parts) + closing
