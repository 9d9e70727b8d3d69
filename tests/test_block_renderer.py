"""Tests for per-block HTML rendering and layout flattening."""

from __future__ import annotations

import re

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
from services.block_renderer import (
    ALERT_PALETTE,
    UNSUPPORTED_BLOCK_TEXT,
    BlockRenderer,
    render_block,
)
from services.normalizer import parse_block

INJECTION = "<script>alert('x')</script> & \"quoted\""


def _renderer() -> BlockRenderer:
    return BlockRenderer()


def test_every_block_type_has_a_renderer() -> None:
    renderer = _renderer()

    for block_type in BlockType:
        block = parse_block({"type": block_type.value, "data": {}})
        assert renderer.supports(block), block_type
        assert UNSUPPORTED_BLOCK_TEXT not in renderer.render(block)


def test_markdown_text_is_converted_inside_wrapping_div() -> None:
    html = render_block(TextBlock(markdown="**Hello**"))

    assert html.startswith('<div style="margin-bottom: 16px;">')
    assert "<strong>Hello</strong>" in html
    assert html.endswith("</div>")


def test_rich_text_is_used_as_is() -> None:
    html = render_block(TextBlock(mode=TextMode.RICHTEXT, html="<p><em>pre</em></p>"))

    assert '<div style="margin-bottom: 16px;"><p><em>pre</em></p></div>' == html


def test_text_uses_injected_markdown_converter() -> None:
    renderer = BlockRenderer(markdown_converter=lambda text: f"<p>converted:{text}</p>")

    assert "<p>converted:hi</p>" in renderer.render(TextBlock(markdown="hi"))


def test_image_with_caption() -> None:
    html = render_block(ImageBlock(url="https://x/y.png", alt="logo", caption="Our logo"))

    assert '<img src="https://x/y.png" alt="logo"' in html
    assert re.search(r"<p [^>]*font-style: italic[^>]*>Our logo</p>", html)
    assert "text-align: center" in html


def test_image_without_caption_omits_caption_paragraph() -> None:
    html = render_block(ImageBlock(url="https://x/y.png", alt="logo"))

    assert "<p" not in html
    assert "None" not in html


def test_youtube_video_is_embedded_responsively() -> None:
    html = render_block(
        VideoBlock(url="https://youtu.be/abc", platform=VideoPlatform.YOUTUBE, embed_id="abc123")
    )

    assert 'src="https://www.youtube.com/embed/abc123"' in html
    assert "padding-bottom: 56.25%" in html
    assert "allowfullscreen" in html


def test_other_video_platforms_fall_back_to_link() -> None:
    html = render_block(
        VideoBlock(url="https://vimeo.com/1", platform=VideoPlatform.VIMEO, embed_id="1", title="Demo")
    )

    assert "<iframe" not in html
    assert '<a href="https://vimeo.com/1"' in html
    assert ">Demo</a>" in html


def test_youtube_without_embed_id_falls_back_to_default_link_text() -> None:
    html = render_block(VideoBlock(url="https://youtube.com/x", platform=VideoPlatform.YOUTUBE))

    assert ">Watch Video</a>" in html


def test_file_block_is_a_download_link() -> None:
    html = render_block(FileBlock(url="https://x/report.pdf", filename="report <final>.pdf"))

    assert '<a href="https://x/report.pdf" download' in html
    assert "📎 report &lt;final&gt;.pdf" in html


def test_table_header_and_zebra_rows() -> None:
    html = render_block(
        TableBlock(headers=("Name", "Role"), rows=(("Ana", "Lead"), ("Bo", "Dev"), ("Cy", "Ops")), has_header=True)
    )

    assert html.count("<th ") == 2
    assert html.count("<tr ") == 4
    row_colours = re.findall(r'<tr style="background-color: (#[0-9a-f]+);">', html)
    assert row_colours == ["#f3f4f6", "#ffffff", "#f9fafb", "#ffffff"]


def test_table_header_skipped_when_disabled_or_empty() -> None:
    disabled = render_block(TableBlock(headers=("A",), rows=(("1",),), has_header=False))
    empty = render_block(TableBlock(headers=(), rows=(("1",),), has_header=True))

    assert "<thead" not in disabled
    assert "<thead" not in empty


def test_divider_styles() -> None:
    assert "border-top: 3px solid" in render_block(DividerBlock(style=DividerStyle.THICK))
    assert "border-top: 1px dashed" in render_block(DividerBlock(style=DividerStyle.DASHED))
    assert "border-top: 1px dotted" in render_block(DividerBlock(style=DividerStyle.DOTTED))
    assert "border-top: 1px solid" in render_block(DividerBlock())


def test_code_is_escaped_with_optional_filename_bar() -> None:
    html = render_block(CodeBlock(code="if a < b:\n    print('x')", language="python", filename="main.py"))

    assert ">main.py</div>" in html
    assert "if a &lt; b:\n    print(&#39;x&#39;)</code></pre>" in html
    assert "background-color: #1e293b" in html


def test_quote_footer_variants() -> None:
    both = render_block(QuoteBlock(quote="Be kind", author="Ada", source="Notes"))
    author_only = render_block(QuoteBlock(quote="Be kind", author="Ada"))
    source_only = render_block(QuoteBlock(quote="Be kind", source="Notes"))
    bare = render_block(QuoteBlock(quote="Be kind"))

    assert "&quot;Be kind&quot;" in both
    assert "— Ada, Notes" in both
    assert "— Ada</footer>" in author_only
    assert "— Notes</footer>" in source_only
    assert "<footer" not in bare


def test_button_palette_by_variant() -> None:
    primary = render_block(ButtonBlock(text="Go", url="https://x", variant=ButtonVariant.PRIMARY))
    secondary = render_block(ButtonBlock(text="Go", url="https://x", variant=ButtonVariant.SECONDARY))
    outline = render_block(ButtonBlock(text="Go", url="https://x", variant=ButtonVariant.OUTLINE))

    assert "background-color: #2563eb; color: #ffffff" in primary
    assert "background-color: #6b7280; color: #ffffff" in secondary
    assert "background-color: transparent; color: #2563eb" in outline
    assert "border: 2px solid #2563eb" in outline


def test_alert_uses_warning_palette_and_escapes_text() -> None:
    html = render_block(AlertBlock(variant=AlertVariant.WARNING, title="Careful", message="Do not do X"))
    palette = ALERT_PALETTE[AlertVariant.WARNING]

    assert "Careful" in html
    assert "Do not do X" in html
    assert f"background-color: {palette.background}" in html
    assert f"color: {palette.text}" in html

    injected = render_block(AlertBlock(variant=AlertVariant.WARNING, title=INJECTION, message=INJECTION))
    assert "<script>" not in injected
    assert "&lt;script&gt;" in injected


def test_checklist_glyphs() -> None:
    html = render_block(
        ChecklistBlock(
            title="Todo",
            items=(ChecklistItem(text="Done", checked=True), ChecklistItem(text="Open")),
        )
    )

    assert ">Todo</h4>" in html
    assert "☑ Done" in html
    assert "☐ Open" in html


def test_embed_defaults() -> None:
    html = render_block(EmbedBlock(url="https://maps.example.com/embed"))

    assert "height: 400px" in html
    assert 'title="Embedded content"' in html
    assert "height: 250px" in render_block(EmbedBlock(url="https://x", height=250))


def test_quiz_is_a_count_only_teaser() -> None:
    quiz = QuizBlock(
        title="Check yourself",
        description="Three quick ones",
        questions=tuple(QuizQuestion(question=f"Secret question {n}") for n in range(3)),
    )

    html = render_block(quiz)

    assert "This quiz contains 3 questions." in html
    assert "Secret question" not in html
    assert "1 question." in render_block(QuizBlock(questions=(QuizQuestion(),)))


def test_tabs_flatten_into_headed_sections_in_order() -> None:
    html = render_block(
        TabsBlock(
            tabs=(
                TabPane(label="First", blocks=(TextBlock(mode=TextMode.RICHTEXT, html="<p>one</p>"),)),
                TabPane(label="Second", blocks=(TextBlock(mode=TextMode.RICHTEXT, html="<p>two</p>"),)),
            )
        )
    )

    assert html.index(">First</h3>") < html.index("<p>one</p>") < html.index(">Second</h3>")
    assert html.index(">Second</h3>") < html.index("<p>two</p>")
    assert 'style="margin: 0 0;"' in html
    assert 'style="margin: 32px 0;"' in html


def test_columns_and_grid_stack_vertically_with_indentation() -> None:
    columns = render_block(
        ColumnsBlock(columns=(Column(blocks=(DividerBlock(),)), Column(blocks=(DividerBlock(),))))
    )
    grid = render_block(GridBlock(cells=(GridCell(blocks=(DividerBlock(),)), GridCell())))

    assert columns.splitlines()[1] == '  <div style="margin-bottom: 24px;">'
    assert columns.splitlines()[2].startswith("    <hr ")
    assert grid.count("background-color: #f9fafb") == 2
    assert "margin-bottom: 16px; padding: 16px" in grid
    assert "margin-bottom: 0; padding: 16px" in grid


def test_accordion_and_toggle_are_pre_expanded() -> None:
    accordion = render_block(
        AccordionBlock(
            items=(
                AccordionItem(title="Why", blocks=(QuoteBlock(quote="Because"),)),
                AccordionItem(title="How"),
            )
        )
    )
    toggle = render_block(ToggleBlock(title="Details", blocks=(CodeBlock(code="x = 1"),)))

    assert "▼ Why" in accordion
    assert "▼ How" in accordion
    assert "Because" in accordion
    assert "▼ Details" in toggle
    assert "x = 1" in toggle
    assert "border: 1px solid #e5e7eb" in toggle


def test_callout_wraps_nested_containers_recursively() -> None:
    callout = CalloutBlock(
        variant=AlertVariant.SUCCESS,
        title="Nice",
        blocks=(ToggleBlock(title="Inner", blocks=(AlertBlock(message="Deep"),)),),
    )

    html = render_block(callout)

    assert f"background-color: {ALERT_PALETTE[AlertVariant.SUCCESS].background}" in html
    assert "<strong>Nice</strong>" in html
    assert "▼ Inner" in html
    assert "Deep" in html
    deep_line = next(line for line in html.splitlines() if "Deep" in line)
    assert deep_line.startswith("      <p ")


def test_unknown_block_renders_placeholder() -> None:
    renderer = _renderer()

    assert UNSUPPORTED_BLOCK_TEXT in renderer.render(UnknownBlock(block_type="hologram"))
    assert UNSUPPORTED_BLOCK_TEXT in renderer.render({"type": "text"})  # type: ignore[arg-type]


def test_unknown_child_does_not_stop_siblings() -> None:
    html = render_block(
        ToggleBlock(
            title="Mixed",
            blocks=(UnknownBlock(block_type="x"), TextBlock(mode=TextMode.RICHTEXT, html="<p>after</p>")),
        )
    )

    assert UNSUPPORTED_BLOCK_TEXT in html
    assert "<p>after</p>" in html


def test_leaf_text_fields_are_escaped() -> None:
    blocks = [
        ImageBlock(url=INJECTION, alt=INJECTION, caption=INJECTION),
        VideoBlock(url=INJECTION, title=INJECTION),
        FileBlock(url=INJECTION, filename=INJECTION),
        TableBlock(headers=(INJECTION,), rows=((INJECTION,),), has_header=True),
        CodeBlock(code=INJECTION, filename=INJECTION),
        QuoteBlock(quote=INJECTION, author=INJECTION, source=INJECTION),
        ButtonBlock(text=INJECTION, url=INJECTION),
        ChecklistBlock(title=INJECTION, items=(ChecklistItem(text=INJECTION),)),
        EmbedBlock(url=INJECTION, title=INJECTION),
        QuizBlock(title=INJECTION, description=INJECTION),
        TabsBlock(tabs=(TabPane(label=INJECTION),)),
        AccordionBlock(items=(AccordionItem(title=INJECTION),)),
        CalloutBlock(title=INJECTION),
        ToggleBlock(title=INJECTION),
    ]

    for block in blocks:
        html = render_block(block)
        assert "<script>" not in html, block
        assert "alert('x')" not in html, block
        assert "&lt;script&gt;" in html, block


def test_deeply_nested_toggles_degrade_instead_of_failing() -> None:
    block: ToggleBlock | TextBlock = TextBlock(mode=TextMode.RICHTEXT, html="<p>leaf</p>")
    for level in range(600):
        block = ToggleBlock(title=f"Level {level}", blocks=(block,))

    html = render_block(block)

    assert html.startswith("<div ")
    assert "▼ Level 599" in html
    assert UNSUPPORTED_BLOCK_TEXT in html
    assert html.endswith("</div>")
