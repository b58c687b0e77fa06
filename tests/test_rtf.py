import pytest

from cdmkit.builder import DocumentBuilder
from cdmkit.model import (
    Alignment,
    Color,
    Document,
    Length,
    ListType,
    Section,
    SectionBreakBlock,
    TextStyle,
)
from cdmkit.rtf import RtfRenderer, escape_rtf

HEADER = (
    "{\\rtf1\\ansi\\ansicpg1252\\uc1\\deff0"
    "{\\fonttbl{\\f0\\fswiss\\fcharset0 Malgun Gothic;}"
    "{\\f1\\fswiss\\fcharset0 Courier New;}}"
    "\\f0\\fs22\\pard "
)


def render(builder: DocumentBuilder) -> str:
    return RtfRenderer().render(builder.build())


def paragraph_with(*calls) -> DocumentBuilder:
    builder = DocumentBuilder().begin_paragraph()
    for name, *args in calls:
        getattr(builder, name)(*args)
    return builder.end_paragraph()


def test_escape_special_characters():
    assert escape_rtf("a\\b{c}") == "a\\\\b\\{c\\}"


def test_escape_ascii_passthrough():
    assert escape_rtf("Hello, world!") == "Hello, world!"


@pytest.mark.parametrize("ch", ["é", "가", "\uffff", "\u8000"])
def test_escape_bmp_character_is_signed_16_bit(ch):
    result = escape_rtf(ch)
    assert result.startswith("\\u") and result.endswith("?")
    value = int(result[2:-1])
    assert -32768 <= value <= 32767
    assert value % 65536 == ord(ch)


def test_escape_supplementary_character_keeps_code_point():
    result = escape_rtf("\U0001F600")
    assert int(result[2:-1]) == 0x1F600


def test_empty_document():
    assert RtfRenderer().render(Document()) == HEADER + "}"


def test_plain_paragraph():
    out = render(DocumentBuilder().add_paragraph("Hello"))
    assert out == HEADER + "\\pard Hello\\par\n}"


def test_centered_paragraph():
    builder = paragraph_with(
        ("set_current_paragraph_alignment", Alignment.CENTER), ("add_text", "Hi")
    )
    assert "\\pard\\qc Hi\\par\n" in render(builder)


def test_heading_sizes_and_clamping():
    out = render(DocumentBuilder().add_heading(1, "Title").add_heading(9, "Low"))
    assert "\\pard\\fs72\\b Title\\b0\\fs22\\par\n" in out
    assert "\\pard\\fs32\\b Low\\b0\\fs22\\par\n" in out


def test_bullet_list():
    builder = DocumentBuilder().begin_list().add_list_item("one").end_list()
    assert "\\pard\\li720 \\bullet  one\\par\n" in render(builder)


def test_numbered_list_counts_from_start():
    builder = (
        DocumentBuilder()
        .begin_list(ListType.NUMBERED, 3)
        .add_list_item("a")
        .add_list_item("b")
        .end_list()
    )
    out = render(builder)
    assert "\\pard\\li720 3. a\\par\n" in out
    assert "\\pard\\li720 4. b\\par\n" in out


def test_colored_text_builds_color_table():
    red = TextStyle(color=Color(255, 0, 0))
    builder = paragraph_with(
        ("add_styled_text", "red", red), ("add_styled_text", "again", red)
    )
    out = render(builder)
    assert "{\\colortbl;\\red255\\green0\\blue0;}" in out
    assert out.count("\\red") == 1
    assert "\\cf1 red\\cf0 " in out


def test_bold_text_toggles():
    builder = paragraph_with(("add_styled_text", "bold", TextStyle(bold=True)))
    assert "\\b bold\\b0 " in render(builder)


def test_font_size_in_points_is_half_points():
    builder = paragraph_with(("add_styled_text", "big", TextStyle(font_size=Length.pt(12))))
    assert "\\fs24 big\\fs22 " in render(builder)


def test_new_font_family_is_added_to_font_table():
    builder = paragraph_with(("add_styled_text", "x", TextStyle(font_family="Arial")))
    out = render(builder)
    assert "{\\f2\\fswiss\\fcharset0 Arial;}" in out
    assert "\\f2 x\\f0 " in out


def test_block_quote_indents_paragraphs():
    builder = DocumentBuilder().begin_block_quote().add_paragraph("q").end_block_quote()
    assert "\\pard\\li720 q\\par\n" in render(builder)


def test_table_rows_and_header():
    builder = (
        DocumentBuilder()
        .begin_table()
        .begin_table_row().add_table_cell("a").add_table_cell("b").end_table_row()
        .begin_table_row().add_table_cell("c").end_table_row()
        .end_table()
    )
    out = render(builder)
    assert out.count("\\cell\n") == 4
    assert out.count("\\row\n") == 2
    assert "\\pard\\intbl\\b a\\cell\n" in out
    assert "\\pard\\intbl c\\cell\n\\pard\\intbl \\cell\n" in out
    assert "\\cellx1440" in out
    assert out.endswith("\\pard\\par\n}")


def test_code_block_is_escaped():
    out = render(DocumentBuilder().add_code_block("x = {1}"))
    assert "\\pard\\f1\\fs20 x = \\{1\\}\\f0\\fs22\\par\n" in out


def test_horizontal_rule():
    out = render(DocumentBuilder().add_horizontal_rule())
    assert "\\pard\\brdrb\\brdrs\\brdrw10\\brsp20 \\par\n" in out


def test_section_break():
    doc = Document(sections=[Section(blocks=[SectionBreakBlock()])])
    assert RtfRenderer().render(doc) == HEADER + "\\page\n}"


def test_inline_containers():
    builder = paragraph_with(
        ("begin_strong",), ("add_text", "s"), ("end_strong",),
        ("begin_emphasis",), ("add_text", "e"), ("end_emphasis",),
        ("begin_underline",), ("add_text", "u"), ("end_underline",),
    )
    assert "\\b s\\b0 \\i e\\i0 \\ul u\\ulnone " in render(builder)


def test_span_with_font_uses_group():
    builder = paragraph_with(
        ("begin_span", TextStyle(font_family="Arial")),
        ("add_text", "inner"),
        ("end_span",),
    )
    assert "{\\f2 inner}" in render(builder)


def test_tab_break_image_and_link():
    builder = paragraph_with(
        ("add_text", "a"), ("add_tab",), ("add_line_break",),
        ("add_image", 7), ("add_link", "https://example.com", "site"),
    )
    assert "\\pard a\\tab \\line [image]site\\par\n" in render(builder)


def test_render_is_repeatable():
    doc = paragraph_with(
        ("add_styled_text", "c", TextStyle(color=Color(1, 2, 3)))
    ).build()
    renderer = RtfRenderer()
    first = renderer.render(doc)
    second = renderer.render(doc)
    expected_color_table = "{\\colortbl;\\red1\\green2\\blue3;}"
    assert first.count(expected_color_table) == 1
    assert second.count(expected_color_table) == 1
    assert "\\cf1 c\\cf0 " in second
    assert second == first