"""Fluent builder that assembles a Document block by block and inline by inline."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from cdmkit.model import (
    Alignment,
    BlockQuote,
    Bookmark,
    Break,
    BreakType,
    CodeBlock,
    Comment,
    Document,
    EncodingInfo,
    Emphasis,
    FileFormat,
    FontCharset,
    Heading,
    HorizontalRule,
    Hyperlink,
    Image,
    InlineContainer,
    LanguageTag,
    ListBlock,
    ListItem,
    ListType,
    NodeIdGenerator,
    Note,
    Paragraph,
    RawBlock,
    RawFragmentKind,
    RawInline,
    Resource,
    Script,
    Section,
    Span,
    Strong,
    StyleDefinition,
    StyleId,
    Tab,
    Table,
    TableCell,
    TableRow,
    Text,
    TextEncoding,
    TextStyle,
    Underline,
    make_node,
)


class BuilderError(RuntimeError):
    """Raised when a builder call does not fit the currently open structure."""


class _InlineKind(Enum):
    STRONG = auto()
    EMPHASIS = auto()
    UNDERLINE = auto()
    SPAN = auto()


@dataclass
class _OpenInline:
    kind: _InlineKind
    node: InlineContainer


class DocumentBuilder:
    """Builds a Document through chained calls; every method returns the builder."""

    def __init__(self) -> None:
        self._ids = NodeIdGenerator()
        self._doc = Document()
        self._doc.id = self._ids.next()
        self._section: Optional[Section] = None
        self._paragraph: Optional[Paragraph] = None
        self._block_quote: Optional[BlockQuote] = None
        self._list: Optional[ListBlock] = None
        self._table: Optional[Table] = None
        self._table_row: Optional[TableRow] = None
        self._open_inlines: list[_OpenInline] = []

    def build(self) -> Document:
        """Return a snapshot of the document built so far."""
        return copy.deepcopy(self._doc)

    # ---- metadata ----

    def set_original_format(self, fmt: FileFormat) -> "DocumentBuilder":
        self._doc.original_format = fmt
        return self

    def set_title(self, value: str) -> "DocumentBuilder":
        self._doc.properties.title = value
        return self

    def set_subject(self, value: str) -> "DocumentBuilder":
        self._doc.properties.subject = value
        return self

    def set_author(self, value: str) -> "DocumentBuilder":
        self._doc.properties.author = value
        return self

    def set_creator(self, value: str) -> "DocumentBuilder":
        self._doc.properties.creator = value
        return self

    def set_keywords(self, value: str) -> "DocumentBuilder":
        self._doc.properties.keywords = value
        return self

    def set_description(self, value: str) -> "DocumentBuilder":
        self._doc.properties.description = value
        return self

    def set_created_at(self, value: str) -> "DocumentBuilder":
        self._doc.properties.created_at = value
        return self

    def set_modified_at(self, value: str) -> "DocumentBuilder":
        self._doc.properties.modified_at = value
        return self

    def set_default_language(self, bcp47: str) -> "DocumentBuilder":
        self._doc.text_environment.default_language = LanguageTag(bcp47)
        return self

    def set_default_script(self, script: Script) -> "DocumentBuilder":
        self._doc.text_environment.default_script = script
        return self

    def set_default_charset(self, charset: FontCharset) -> "DocumentBuilder":
        self._doc.text_environment.default_charset = charset
        return self

    def set_source_encoding(
        self,
        encoding: TextEncoding,
        original_name: str = "",
        code_page: Optional[int] = None,
        had_bom: bool = False,
        declared_in_document: bool = False,
        detected_heuristically: bool = False,
    ) -> "DocumentBuilder":
        self._doc.text_environment.source_encoding = EncodingInfo(
            encoding=encoding,
            original_name=original_name,
            code_page=code_page,
            had_bom=had_bom,
            declared_in_document=declared_in_document,
            detected_heuristically=detected_heuristically,
        )
        return self

    def set_preferred_save_encoding(
        self,
        encoding: TextEncoding,
        original_name: str = "",
        code_page: Optional[int] = None,
        had_bom: bool = False,
    ) -> "DocumentBuilder":
        self._doc.text_environment.preferred_save_encoding = EncodingInfo(
            encoding=encoding,
            original_name=original_name,
            code_page=code_page,
            had_bom=had_bom,
        )
        return self

    def set_metadata(self, key: str, value: str) -> "DocumentBuilder":
        self._doc.metadata[key] = value
        return self

    # ---- collections ----

    def add_style(self, style: StyleDefinition) -> "DocumentBuilder":
        self._doc.styles.append(style)
        return self

    def add_resource(self, resource: Resource) -> "DocumentBuilder":
        self._doc.resources.append(resource)
        return self

    def add_comment(self, comment: Comment) -> "DocumentBuilder":
        self._doc.comments.append(comment)
        return self

    def add_note(self, note: Note) -> "DocumentBuilder":
        self._doc.notes.append(note)
        return self

    def add_bookmark(self, bookmark: Bookmark) -> "DocumentBuilder":
        self._doc.bookmarks.append(bookmark)
        return self

    # ---- sections ----

    def _ensure_section(self) -> Section:
        if self._section is None:
            self._section = make_node(Section, self._ids)
            self._doc.sections.append(self._section)
        return self._section

    def begin_section(self) -> "DocumentBuilder":
        self._section = make_node(Section, self._ids)
        self._doc.sections.append(self._section)
        return self

    def end_section(self) -> "DocumentBuilder":
        self._section = None
        return self

    # ---- internal helpers ----

    def _ensure_no_open_paragraph(self) -> None:
        if self._paragraph is not None:
            raise BuilderError("paragraph already open")

    def _require_open_paragraph(self) -> Paragraph:
        if self._paragraph is None:
            raise BuilderError("no open paragraph")
        return self._paragraph

    def _block_container(self) -> list:
        if self._table_row is not None:
            raise BuilderError("cannot add block inside table row directly")
        if self._list is not None:
            if not self._list.items:
                return self._ensure_section().blocks
            return self._list.items[-1].blocks
        if self._block_quote is not None:
            return self._block_quote.blocks
        return self._ensure_section().blocks

    def _push_block(self, block) -> None:
        self._block_container().append(block)

    def _inline_container(self) -> list:
        paragraph = self._require_open_paragraph()
        if self._open_inlines:
            return self._open_inlines[-1].node.children
        return paragraph.inlines

    def _text_inline(self, text: str) -> Text:
        return make_node(Text, self._ids, text=text)

    def _paragraph_block(self, text: str) -> Paragraph:
        paragraph = make_node(Paragraph, self._ids)
        if text:
            paragraph.inlines.append(self._text_inline(text))
        return paragraph

    # ---- blocks ----

    def add_heading(self, level: int, text: str) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        heading = make_node(Heading, self._ids, level=level)
        if text:
            heading.inlines.append(self._text_inline(text))
        self._push_block(heading)
        return self

    def add_paragraph(self, text: str) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        self._push_block(self._paragraph_block(text))
        return self

    def add_code_block(self, code: str, language: str = "") -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        self._push_block(make_node(CodeBlock, self._ids, code=code, language=language))
        return self

    def add_horizontal_rule(self) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        self._push_block(make_node(HorizontalRule, self._ids))
        return self

    def add_raw_block(
        self,
        kind: RawFragmentKind,
        data: str,
        encoding: Optional[EncodingInfo] = None,
    ) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        self._push_block(
            make_node(RawBlock, self._ids, kind=kind, data=data, encoding=encoding)
        )
        return self

    def begin_paragraph(self) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        paragraph = make_node(Paragraph, self._ids)
        self._push_block(paragraph)
        self._paragraph = paragraph
        return self

    def end_paragraph(self) -> "DocumentBuilder":
        self._require_open_paragraph()
        self._open_inlines.clear()
        self._paragraph = None
        return self

    def begin_block_quote(self) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        quote = make_node(BlockQuote, self._ids)
        self._push_block(quote)
        self._block_quote = quote
        return self

    def end_block_quote(self) -> "DocumentBuilder":
        self._block_quote = None
        return self

    def begin_list(
        self,
        list_type: ListType = ListType.BULLET,
        start: int = 1,
        level: int = 0,
    ) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        block = make_node(ListBlock, self._ids, type=list_type, start=start, level=level)
        self._push_block(block)
        self._list = block
        return self

    def add_list_item(self, text: str) -> "DocumentBuilder":
        if self._list is None:
            raise BuilderError("no open list")
        item = make_node(ListItem, self._ids)
        item.blocks.append(self._paragraph_block(text))
        self._list.items.append(item)
        return self

    def end_list(self) -> "DocumentBuilder":
        self._list = None
        return self

    def begin_table(self) -> "DocumentBuilder":
        self._ensure_no_open_paragraph()
        table = make_node(Table, self._ids)
        self._push_block(table)
        self._table = table
        return self

    def begin_table_row(self) -> "DocumentBuilder":
        if self._table is None:
            raise BuilderError("no open table")
        row = make_node(TableRow, self._ids)
        self._table.rows.append(row)
        self._table_row = row
        return self

    def add_table_cell(self, text: str) -> "DocumentBuilder":
        if self._table_row is None:
            raise BuilderError("no open table row")
        cell = make_node(TableCell, self._ids)
        cell.blocks.append(self._paragraph_block(text))
        self._table_row.cells.append(cell)
        return self

    def end_table_row(self) -> "DocumentBuilder":
        self._table_row = None
        return self

    def end_table(self) -> "DocumentBuilder":
        self._table = None
        self._table_row = None
        return self

    # ---- inlines ----

    def add_text(self, text: str) -> "DocumentBuilder":
        self._inline_container().append(self._text_inline(text))
        return self

    def add_styled_text(self, text: str, style: TextStyle) -> "DocumentBuilder":
        node = make_node(Text, self._ids, text=text, direct_style=style)
        self._inline_container().append(node)
        return self

    def add_tab(self) -> "DocumentBuilder":
        self._inline_container().append(make_node(Tab, self._ids))
        return self

    def add_line_break(self) -> "DocumentBuilder":
        node = make_node(Break, self._ids, type=BreakType.LINE_BREAK)
        self._inline_container().append(node)
        return self

    def add_soft_break(self) -> "DocumentBuilder":
        node = make_node(Break, self._ids, type=BreakType.SOFT_BREAK)
        self._inline_container().append(node)
        return self

    def add_link(self, href: str, display_text: str, title: str = "") -> "DocumentBuilder":
        """Add a hyperlink; its display text becomes a preceding sibling Text node."""
        link = make_node(Hyperlink, self._ids, href=href, title=title)
        container = self._inline_container()
        if display_text:
            container.append(self._text_inline(display_text))
        container.append(link)
        return self

    def add_image(self, resource_id: int, alt_text: str = "", title: str = "") -> "DocumentBuilder":
        node = make_node(
            Image, self._ids, resource_id=resource_id, alt_text=alt_text, title=title
        )
        self._inline_container().append(node)
        return self

    def add_raw_inline(
        self,
        kind: RawFragmentKind,
        data: str,
        encoding: Optional[EncodingInfo] = None,
    ) -> "DocumentBuilder":
        node = make_node(RawInline, self._ids, kind=kind, data=data, encoding=encoding)
        self._inline_container().append(node)
        return self

    # ---- inline containers ----

    def _begin_inline(self, kind: _InlineKind, cls, **kwargs) -> "DocumentBuilder":
        self._require_open_paragraph()
        node = make_node(cls, self._ids, **kwargs)
        self._open_inlines.append(_OpenInline(kind, node))
        return self

    def _end_inline(self, kind: _InlineKind, name: str) -> "DocumentBuilder":
        if not self._open_inlines or self._open_inlines[-1].kind is not kind:
            raise BuilderError(f"mismatched End{name}")
        closed = self._open_inlines.pop()
        if self._open_inlines:
            parent = self._open_inlines[-1].node.children
        else:
            parent = self._require_open_paragraph().inlines
        parent.append(closed.node)
        return self

    def begin_strong(self) -> "DocumentBuilder":
        return self._begin_inline(_InlineKind.STRONG, Strong)

    def end_strong(self) -> "DocumentBuilder":
        return self._end_inline(_InlineKind.STRONG, "Strong")

    def begin_emphasis(self) -> "DocumentBuilder":
        return self._begin_inline(_InlineKind.EMPHASIS, Emphasis)

    def end_emphasis(self) -> "DocumentBuilder":
        return self._end_inline(_InlineKind.EMPHASIS, "Emphasis")

    def begin_underline(self) -> "DocumentBuilder":
        return self._begin_inline(_InlineKind.UNDERLINE, Underline)

    def end_underline(self) -> "DocumentBuilder":
        return self._end_inline(_InlineKind.UNDERLINE, "Underline")

    def begin_span(self, style: Optional[TextStyle] = None) -> "DocumentBuilder":
        return self._begin_inline(
            _InlineKind.SPAN, Span, direct_style=style if style is not None else TextStyle()
        )

    def end_span(self) -> "DocumentBuilder":
        return self._end_inline(_InlineKind.SPAN, "Span")

    # ---- current paragraph styling ----

    def set_current_paragraph_style_ref(self, style_id: StyleId) -> "DocumentBuilder":
        self._require_open_paragraph().style_ref = style_id
        return self

    def set_current_paragraph_language(self, bcp47: str) -> "DocumentBuilder":
        self._require_open_paragraph().direct_style.language = LanguageTag(bcp47)
        return self

    def set_current_paragraph_alignment(self, align: Alignment) -> "DocumentBuilder":
        self._require_open_paragraph().direct_style.alignment = align
        return self