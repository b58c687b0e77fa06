"""Document model: style values, inline and block nodes, sections and the document root."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Union

NodeId = int
ResourceId = int
StyleId = str


class FileFormat(Enum):
    UNKNOWN = auto()
    HWP = auto()
    HWPX = auto()
    DOC = auto()
    DOCX = auto()
    HTM = auto()
    HTML = auto()
    MD = auto()
    TXT = auto()


class TextEncoding(Enum):
    UNKNOWN = auto()
    UTF8 = auto()
    UTF8_BOM = auto()
    UTF16LE = auto()
    UTF16BE = auto()
    UTF32LE = auto()
    UTF32BE = auto()
    ASCII = auto()
    CP949 = auto()
    EUC_KR = auto()
    SHIFT_JIS = auto()
    GB18030 = auto()
    BIG5 = auto()
    WINDOWS_1252 = auto()
    ISO8859_1 = auto()
    CUSTOM = auto()


class Script(Enum):
    UNKNOWN = auto()
    LATIN = auto()
    HANGUL = auto()
    HAN = auto()
    HIRAGANA = auto()
    KATAKANA = auto()
    ARABIC = auto()
    CYRILLIC = auto()
    GREEK = auto()
    HEBREW = auto()
    THAI = auto()
    DEVANAGARI = auto()
    BENGALI = auto()
    TAMIL = auto()
    GEORGIAN = auto()
    ARMENIAN = auto()
    ETHIOPIC = auto()
    SYMBOL = auto()
    MIXED = auto()


class FontCharset(Enum):
    UNKNOWN = auto()
    ANSI = auto()
    DEFAULT = auto()
    SYMBOL = auto()
    MAC = auto()
    SHIFT_JIS = auto()
    HANGEUL = auto()
    GB2312 = auto()
    CHINESE_BIG5 = auto()
    GREEK = auto()
    TURKISH = auto()
    HEBREW = auto()
    ARABIC = auto()
    BALTIC = auto()
    RUSSIAN = auto()
    THAI = auto()
    EAST_EUROPE = auto()
    OEM = auto()


class LineBreakMode(Enum):
    UNKNOWN = auto()
    AUTO = auto()
    NORMAL = auto()
    KEEP_ALL = auto()
    BREAK_ALL = auto()


class WordBreakMode(Enum):
    UNKNOWN = auto()
    NORMAL = auto()
    BREAK_ALL = auto()
    KEEP_ALL = auto()


class Unit(Enum):
    UNKNOWN = auto()
    PX = auto()
    PT = auto()
    MM = auto()
    CM = auto()
    INCH = auto()
    PERCENT = auto()
    EM = auto()
    REM = auto()


class WritingDirection(Enum):
    LTR = auto()
    RTL = auto()
    VERTICAL = auto()


class Alignment(Enum):
    UNKNOWN = auto()
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()
    JUSTIFY = auto()


class UnderlineStyle(Enum):
    NONE = auto()
    SINGLE = auto()
    DOUBLE = auto()
    DOTTED = auto()
    DASHED = auto()
    WAVY = auto()


class BorderStyle(Enum):
    NONE = auto()
    SOLID = auto()
    DASHED = auto()
    DOTTED = auto()
    DOUBLE = auto()


class BreakType(Enum):
    LINE_BREAK = auto()
    SOFT_BREAK = auto()
    PAGE_BREAK = auto()
    COLUMN_BREAK = auto()
    SECTION_BREAK = auto()


class ListType(Enum):
    NONE = auto()
    BULLET = auto()
    NUMBERED = auto()
    ROMAN_UPPER = auto()
    ROMAN_LOWER = auto()
    ALPHA_UPPER = auto()
    ALPHA_LOWER = auto()


class TableLayoutMode(Enum):
    AUTO = auto()
    FIXED = auto()


class ImageType(Enum):
    UNKNOWN = auto()
    RASTER = auto()
    VECTOR = auto()


class NoteType(Enum):
    FOOTNOTE = auto()
    ENDNOTE = auto()


class RawFragmentKind(Enum):
    UNKNOWN = auto()
    HTML = auto()
    MARKDOWN = auto()
    XML = auto()
    DOCX_XML = auto()
    HWPX_XML = auto()
    PLAIN_TEXT = auto()


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass
class EncodingInfo:
    encoding: TextEncoding = TextEncoding.UNKNOWN
    original_name: str = ""
    code_page: Optional[int] = None
    had_bom: bool = False
    declared_in_document: bool = False
    detected_heuristically: bool = False


@dataclass(frozen=True)
class LanguageTag:
    bcp47: str = ""

    def is_empty(self) -> bool:
        """True when no language tag is set."""
        return not self.bcp47


@dataclass
class TextEnvironment:
    default_language: Optional[LanguageTag] = None
    default_script: Optional[Script] = None
    default_charset: Optional[FontCharset] = None
    source_encoding: Optional[EncodingInfo] = None
    preferred_save_encoding: Optional[EncodingInfo] = None
    line_break_mode: Optional[LineBreakMode] = None
    word_break_mode: Optional[WordBreakMode] = None


@dataclass(frozen=True)
class Length:
    value: float = 0.0
    unit: Unit = Unit.UNKNOWN

    @classmethod
    def px(cls, value: float) -> "Length":
        return cls(value, Unit.PX)

    @classmethod
    def pt(cls, value: float) -> "Length":
        return cls(value, Unit.PT)

    @classmethod
    def mm(cls, value: float) -> "Length":
        return cls(value, Unit.MM)

    @classmethod
    def cm(cls, value: float) -> "Length":
        return cls(value, Unit.CM)

    @classmethod
    def inch(cls, value: float) -> "Length":
        return cls(value, Unit.INCH)

    @classmethod
    def percent(cls, value: float) -> "Length":
        return cls(value, Unit.PERCENT)

    @classmethod
    def em(cls, value: float) -> "Length":
        return cls(value, Unit.EM)

    @classmethod
    def rem(cls, value: float) -> "Length":
        return cls(value, Unit.REM)


@dataclass(frozen=True)
class Color:
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            channel = getattr(self, name)
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel {name}={channel} is outside 0..255")

    @classmethod
    def make(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        return cls(r, g, b, a)


@dataclass
class SourceSpan:
    start: Optional[int] = None
    end: Optional[int] = None


@dataclass
class SourceInfo:
    source_format: FileFormat = FileFormat.UNKNOWN
    source_path: str = ""
    original_node_name: str = ""
    span: SourceSpan = field(default_factory=SourceSpan)
    encoding: Optional[EncodingInfo] = None


@dataclass(kw_only=True)
class Node:
    """Common fields of every document node."""

    id: NodeId = 0
    source: SourceInfo = field(default_factory=SourceInfo)
    metadata: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class Margin:
    left: Optional[Length] = None
    right: Optional[Length] = None
    top: Optional[Length] = None
    bottom: Optional[Length] = None


@dataclass
class Padding:
    left: Optional[Length] = None
    right: Optional[Length] = None
    top: Optional[Length] = None
    bottom: Optional[Length] = None


@dataclass
class BorderEdge:
    style: BorderStyle = BorderStyle.NONE
    width: Optional[Length] = None
    color: Optional[Color] = None


@dataclass
class Border:
    left: BorderEdge = field(default_factory=BorderEdge)
    right: BorderEdge = field(default_factory=BorderEdge)
    top: BorderEdge = field(default_factory=BorderEdge)
    bottom: BorderEdge = field(default_factory=BorderEdge)


@dataclass
class TextStyle:
    font_family: Optional[str] = None
    font_size: Optional[Length] = None
    color: Optional[Color] = None
    background_color: Optional[Color] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    strike: Optional[bool] = None
    double_strike: Optional[bool] = None
    outline: Optional[bool] = None
    shadow: Optional[bool] = None
    small_caps: Optional[bool] = None
    all_caps: Optional[bool] = None
    underline: Optional[UnderlineStyle] = None
    character_spacing: Optional[Length] = None
    language: Optional[LanguageTag] = None
    script: Optional[Script] = None
    charset: Optional[FontCharset] = None


@dataclass
class ParagraphStyle:
    alignment: Optional[Alignment] = None
    indent_left: Optional[Length] = None
    indent_right: Optional[Length] = None
    indent_first_line: Optional[Length] = None
    spacing_before: Optional[Length] = None
    spacing_after: Optional[Length] = None
    line_spacing: Optional[Length] = None
    direction: Optional[WritingDirection] = None
    keep_with_next: Optional[bool] = None
    keep_lines_together: Optional[bool] = None
    page_break_before: Optional[bool] = None
    language: Optional[LanguageTag] = None
    line_break_mode: Optional[LineBreakMode] = None
    word_break_mode: Optional[WordBreakMode] = None


@dataclass
class BoxStyle:
    margin: Margin = field(default_factory=Margin)
    padding: Padding = field(default_factory=Padding)
    border: Border = field(default_factory=Border)
    background_color: Optional[Color] = None
    width: Optional[Length] = None
    height: Optional[Length] = None


@dataclass
class StyleDefinition:
    id: StyleId = ""
    name: str = ""
    based_on: Optional[StyleId] = None
    next_style: Optional[StyleId] = None
    text: TextStyle = field(default_factory=TextStyle)
    paragraph: ParagraphStyle = field(default_factory=ParagraphStyle)
    box: BoxStyle = field(default_factory=BoxStyle)
    metadata: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class Resource:
    id: ResourceId = 0
    name: str = ""
    media_type: str = ""
    original_path: str = ""
    data: bytes = b""
    metadata: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class Bookmark:
    name: str = ""
    target_node_id: NodeId = 0


@dataclass
class Comment:
    comment_id: str = ""
    author: str = ""
    initials: str = ""
    date_time: str = ""
    paragraphs: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class Note:
    note_id: str = ""
    type: NoteType = NoteType.FOOTNOTE
    metadata: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class Text(Node):
    text: str = ""
    style_ref: Optional[StyleId] = None
    direct_style: TextStyle = field(default_factory=TextStyle)
    original_encoding: Optional[EncodingInfo] = None


@dataclass(kw_only=True)
class Tab(Node):
    pass


@dataclass(kw_only=True)
class Break(Node):
    type: BreakType = BreakType.LINE_BREAK


@dataclass(kw_only=True)
class InlineCode(Node):
    text: str = ""
    style_ref: Optional[StyleId] = None
    direct_style: TextStyle = field(default_factory=TextStyle)
    original_encoding: Optional[EncodingInfo] = None


@dataclass(kw_only=True)
class Hyperlink(Node):
    href: str = ""
    title: str = ""


@dataclass(kw_only=True)
class Image(Node):
    resource_id: Optional[ResourceId] = None
    alt_text: str = ""
    title: str = ""
    width: Optional[Length] = None
    height: Optional[Length] = None
    image_type: ImageType = ImageType.UNKNOWN


@dataclass(kw_only=True)
class Field(Node):
    field_type: str = ""
    instruction: str = ""
    result_text: str = ""


@dataclass(kw_only=True)
class NoteRef(Node):
    note_id: str = ""
    type: NoteType = NoteType.FOOTNOTE


@dataclass(kw_only=True)
class CommentRangeStart(Node):
    comment_id: str = ""


@dataclass(kw_only=True)
class CommentRangeEnd(Node):
    comment_id: str = ""


@dataclass(kw_only=True)
class BookmarkStart(Node):
    name: str = ""


@dataclass(kw_only=True)
class BookmarkEnd(Node):
    name: str = ""


@dataclass(kw_only=True)
class RawInline(Node):
    kind: RawFragmentKind = RawFragmentKind.UNKNOWN
    data: str = ""
    encoding: Optional[EncodingInfo] = None


@dataclass(kw_only=True)
class InlineContainer(Node):
    """An inline node that holds other inline nodes."""

    children: list["Inline"] = field(default_factory=list)
    style_ref: Optional[StyleId] = None
    direct_style: TextStyle = field(default_factory=TextStyle)


@dataclass(kw_only=True)
class Span(InlineContainer):
    pass


@dataclass(kw_only=True)
class Emphasis(InlineContainer):
    pass


@dataclass(kw_only=True)
class Strong(InlineContainer):
    pass


@dataclass(kw_only=True)
class Underline(InlineContainer):
    pass


Inline = Union[
    Text, Tab, Break, InlineCode, Hyperlink, Image, Field, NoteRef,
    CommentRangeStart, CommentRangeEnd, BookmarkStart, BookmarkEnd,
    RawInline, Span, Emphasis, Strong, Underline,
]


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class Paragraph(Node):
    inlines: list[Inline] = field(default_factory=list)
    style_ref: Optional[StyleId] = None
    direct_style: ParagraphStyle = field(default_factory=ParagraphStyle)
    list_type: Optional[ListType] = None
    list_level: Optional[int] = None
    list_start: Optional[int] = None
    list_label: str = ""


@dataclass(kw_only=True)
class Heading(Node):
    level: int = 1
    inlines: list[Inline] = field(default_factory=list)
    style_ref: Optional[StyleId] = None
    direct_style: ParagraphStyle = field(default_factory=ParagraphStyle)


@dataclass(kw_only=True)
class CodeBlock(Node):
    code: str = ""
    language: str = ""
    style_ref: Optional[StyleId] = None
    direct_style: BoxStyle = field(default_factory=BoxStyle)
    original_encoding: Optional[EncodingInfo] = None


@dataclass(kw_only=True)
class RawBlock(Node):
    kind: RawFragmentKind = RawFragmentKind.UNKNOWN
    data: str = ""
    encoding: Optional[EncodingInfo] = None


@dataclass(kw_only=True)
class HorizontalRule(Node):
    pass


@dataclass(kw_only=True)
class TableCell(Node):
    blocks: list["Block"] = field(default_factory=list)
    row_span: Optional[int] = None
    col_span: Optional[int] = None
    direct_style: BoxStyle = field(default_factory=BoxStyle)


@dataclass(kw_only=True)
class TableRow(Node):
    cells: list[TableCell] = field(default_factory=list)


@dataclass(kw_only=True)
class Table(Node):
    rows: list[TableRow] = field(default_factory=list)
    layout_mode: TableLayoutMode = TableLayoutMode.AUTO
    style_ref: Optional[StyleId] = None
    direct_style: BoxStyle = field(default_factory=BoxStyle)


@dataclass(kw_only=True)
class BlockQuote(Node):
    blocks: list["Block"] = field(default_factory=list)
    style_ref: Optional[StyleId] = None
    direct_style: BoxStyle = field(default_factory=BoxStyle)


@dataclass(kw_only=True)
class ListItem(Node):
    blocks: list["Block"] = field(default_factory=list)


@dataclass(kw_only=True)
class ListBlock(Node):
    type: ListType = ListType.BULLET
    level: int = 0
    start: int = 1
    items: list[ListItem] = field(default_factory=list)


@dataclass(kw_only=True)
class SectionBreakBlock(Node):
    pass


@dataclass(kw_only=True)
class CustomBlock(Node):
    name: str = ""
    blocks: list["Block"] = field(default_factory=list)


Block = Union[
    Paragraph, Heading, CodeBlock, RawBlock, HorizontalRule,
    Table, BlockQuote, ListBlock, SectionBreakBlock, CustomBlock,
]


# ---------------------------------------------------------------------------
# Pages, sections and the document
# ---------------------------------------------------------------------------


@dataclass
class PageSize:
    width: Optional[Length] = None
    height: Optional[Length] = None


@dataclass
class PageMargins:
    left: Optional[Length] = None
    right: Optional[Length] = None
    top: Optional[Length] = None
    bottom: Optional[Length] = None
    header: Optional[Length] = None
    footer: Optional[Length] = None
    gutter: Optional[Length] = None


@dataclass
class PageSettings:
    size: PageSize = field(default_factory=PageSize)
    margins: PageMargins = field(default_factory=PageMargins)
    landscape: Optional[bool] = None


@dataclass(kw_only=True)
class HeaderFooter(Node):
    blocks: list[Block] = field(default_factory=list)


@dataclass(kw_only=True)
class Section(Node):
    page_settings: PageSettings = field(default_factory=PageSettings)
    header_default: Optional[HeaderFooter] = None
    header_first: Optional[HeaderFooter] = None
    header_even: Optional[HeaderFooter] = None
    footer_default: Optional[HeaderFooter] = None
    footer_first: Optional[HeaderFooter] = None
    footer_even: Optional[HeaderFooter] = None
    blocks: list[Block] = field(default_factory=list)


@dataclass
class DocumentProperties:
    title: str = ""
    subject: str = ""
    author: str = ""
    creator: str = ""
    keywords: str = ""
    description: str = ""
    language: str = ""
    created_at: str = ""
    modified_at: str = ""


@dataclass(kw_only=True)
class Document:
    id: NodeId = 0
    original_format: FileFormat = FileFormat.UNKNOWN
    properties: DocumentProperties = field(default_factory=DocumentProperties)
    metadata: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)
    text_environment: TextEnvironment = field(default_factory=TextEnvironment)
    styles: list[StyleDefinition] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    bookmarks: list[Bookmark] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


class NodeIdGenerator:
    """Hands out increasing node ids, starting at 1."""

    def __init__(self) -> None:
        self._current = 0

    def next(self) -> NodeId:
        self._current += 1
        return self._current


def make_node(cls, gen: NodeIdGenerator, **kwargs):
    """Create a node of ``cls`` from ``kwargs`` and give it the next id."""
    node = cls(**kwargs)
    node.id = gen.next()
    return node


_UNICODE_ENCODINGS = frozenset({
    TextEncoding.UTF8,
    TextEncoding.UTF8_BOM,
    TextEncoding.UTF16LE,
    TextEncoding.UTF16BE,
    TextEncoding.UTF32LE,
    TextEncoding.UTF32BE,
})


def has_unicode_encoding(encoding: TextEncoding) -> bool:
    """True for the UTF-8/16/32 encodings."""
    return encoding in _UNICODE_ENCODINGS