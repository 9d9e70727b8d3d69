"""Tests for the HTML node tree serializer."""

from __future__ import annotations

from services.html_nodes import RawHtml, h, serialize


def test_leaf_element_serializes_on_one_line_with_style_last() -> None:
    node = h("img", src="https://x/y.png", alt="logo", style="max-width: 100%;")

    assert serialize([node]) == '<img src="https://x/y.png" alt="logo" style="max-width: 100%;" />'


def test_nested_block_children_are_indented_by_depth() -> None:
    tree = h("div", h("div", h("p", "inner")), style="margin: 0;")

    assert serialize([tree]) == (
        '<div style="margin: 0;">\n'
        "  <div>\n"
        "    <p>inner</p>\n"
        "  </div>\n"
        "</div>"
    )


def test_inline_children_keep_parent_on_one_line() -> None:
    node = h("pre", h("code", "a < b\n  indented"))

    assert serialize([node]) == "<pre><code>a &lt; b\n  indented</code></pre>"


def test_text_and_attributes_are_escaped_but_raw_html_is_not() -> None:
    node = h("p", h("a", "<b>", href='javascript:alert("x")'), RawHtml("<em>ok</em>"))

    output = serialize([node])

    assert "&lt;b&gt;" in output
    assert 'href="javascript:alert(&quot;x&quot;)"' in output
    assert "<em>ok</em>" in output


def test_boolean_attributes_render_as_bare_names() -> None:
    node = h("a", "file", href="https://x/f.pdf", download=True, hidden=False)

    assert serialize([node]) == '<a href="https://x/f.pdf" download>file</a>'


def test_serialize_starts_at_given_depth() -> None:
    assert serialize([h("p", "x"), h("hr")], depth=1) == "  <p>x</p>\n  <hr />"


def test_serialize_handles_very_deep_trees() -> None:
    tree = h("div", h("p", "leaf"))
    for _ in range(1999):
        tree = h("div", tree)

    lines = serialize([tree]).splitlines()

    assert len(lines) == 4001
    assert lines[0] == "<div>"
    assert lines[2000] == "  " * 2000 + "<p>leaf</p>"
    assert lines[-1] == "</div>"
