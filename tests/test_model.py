import pytest

from cdmkit.model import (
    Block,
    BlockQuote,
    Break,
    BreakType,
    Color,
    Document,
    EncodingInfo,
    Heading,
    Inline,
    InlineContainer,
    LanguageTag,
    Length,
    ListBlock,
    ListType,
    NodeIdGenerator,
    Paragraph,
    Section,
    Span,
    Strong,
    Text,
    TextEncoding,
    TextStyle,
    Unit,
    UnderlineStyle,
    has_unicode_encoding,
    make_node,
)


@pytest.mark.parametrize(
    "factory, unit",
    [
        (Length.px, Unit.PX),
        (Length.pt, Unit.PT),
        (Length.mm, Unit.MM),
        (Length.cm, Unit.CM),
        (Length.inch, Unit.INCH),
        (Length.percent, Unit.PERCENT),
        (Length.em, Unit.EM),
        (Length.rem, Unit.REM),
    ],
)
def test_length_factories_set_unit_and_value(factory, unit):
    length = factory(12.5)
    assert length.unit is unit
    assert length.value == 12.5
    assert length == Length(12.5, unit)


def test_length_default_is_unknown_zero():
    assert Length() == Length(0.0, Unit.UNKNOWN)


def test_color_make_defaults_to_opaque():
    color = Color.make(10, 20, 30)
    assert (color.r, color.g, color.b, color.a) == (10, 20, 30, 255)
    assert Color.make(10, 20, 30, 255) == color


def test_color_rejects_out_of_range_channel():
    with pytest.raises(ValueError):
        Color.make(256, 0, 0)
    with pytest.raises(ValueError):
        Color(0, -1, 0)


def test_language_tag_is_empty():
    assert LanguageTag().is_empty()
    assert not LanguageTag("ko-KR").is_empty()


def test_node_id_generator_counts_from_one():
    gen = NodeIdGenerator()
    assert [gen.next() for _ in range(3)] == [1, 2, 3]


def test_make_node_assigns_id_and_fields():
    gen = NodeIdGenerator()
    first = make_node(Text, gen, text="hello")
    second = make_node(Heading, gen, level=3)
    assert first.text == "hello"
    assert second.level == 3
    assert second.id == first.id + 1


def test_make_node_works_for_document_and_section():
    gen = NodeIdGenerator()
    doc = make_node(Document, gen)
    sec = make_node(Section, gen)
    doc.sections.append(sec)
    assert doc.id < sec.id
    assert doc.sections == [sec]


@pytest.mark.parametrize(
    "encoding, expected",
    [
        (TextEncoding.UTF8, True),
        (TextEncoding.UTF8_BOM, True),
        (TextEncoding.UTF16LE, True),
        (TextEncoding.UTF16BE, True),
        (TextEncoding.UTF32LE, True),
        (TextEncoding.UTF32BE, True),
        (TextEncoding.CP949, False),
        (TextEncoding.ASCII, False),
        (TextEncoding.UNKNOWN, False),
        (TextEncoding.WINDOWS_1252, False),
    ],
)
def test_has_unicode_encoding(encoding, expected):
    assert has_unicode_encoding(encoding) is expected


def test_defaults_of_nodes():
    assert Heading().level == 1
    lst = ListBlock()
    assert (lst.type, lst.start, lst.level) == (ListType.BULLET, 1, 0)
    assert Break().type is BreakType.LINE_BREAK


def test_encoding_info_defaults():
    info = EncodingInfo()
    assert info.encoding is TextEncoding.UNKNOWN
    assert info.code_page is None
    assert (info.had_bom, info.declared_in_document, info.detected_heuristically) == (
        False,
        False,
        False,
    )


def test_mutable_defaults_are_not_shared():
    a = Paragraph()
    b = Paragraph()
    a.inlines.append(Text(text="x"))
    a.metadata["k"] = "v"
    assert b.inlines == []
    assert b.metadata == {}


def test_text_style_equality_is_field_wise():
    a = TextStyle(bold=True, font_size=Length.pt(11), underline=UnderlineStyle.SINGLE)
    b = TextStyle(bold=True, font_size=Length.pt(11), underline=UnderlineStyle.SINGLE)
    assert a == b
    assert a != TextStyle(bold=True, font_size=Length.pt(12), underline=UnderlineStyle.SINGLE)
    assert TextStyle() == TextStyle()


def test_inline_containers_share_base():
    span = Span(children=[Text(text="a")])
    strong = Strong(children=[span])
    assert isinstance(span, InlineContainer)
    assert isinstance(strong, InlineContainer)
    assert strong.children[0].children[0].text == "a"


def test_make_node_for_every_inline_and_block_kind():
    assert Text in Inline.__args__
    assert Span in Inline.__args__
    assert Paragraph in Block.__args__
    assert BlockQuote in Block.__args__
    assert Text not in Block.__args__
    gen = NodeIdGenerator()
    kinds = (*Inline.__args__, *Block.__args__)
    nodes = [make_node(kind, gen) for kind in kinds]
    assert [node.id for node in nodes] == list(range(1, len(kinds) + 1))
    assert [type(node) for node in nodes] == list(kinds)